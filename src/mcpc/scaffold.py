"""
mcpc.scaffold - Project Creation Orchestration
==============================================

This module ties the pieces together. ``create_project`` takes a
validated ``ProjectDescriptor`` and runs:

    1. Preflight dependency check (abort before touching the disk)
    2. Target-exists check (abort before touching the disk)
    3. The language's generator pipeline
    4. Post-generation validation (warnings only)

Errors from steps 1 and 2 are raised before any filesystem change.
Hard generator failures propagate unchanged; the partially created
project is left in place.

Usage Example
-------------
>>> from mcpc.models import Language, ProjectDescriptor
>>> from mcpc.scaffold import create_project
>>> result = create_project(ProjectDescriptor.resolve("weather", Language.PYTHON))
>>> result.project_path
PosixPath('weather')
"""

from __future__ import annotations

import json
import os
import tomllib

from mcpc.dependencies import Dependency, check_dependencies
from mcpc.generators import Generator, GenerationResult, PythonGenerator, TypeScriptGenerator
from mcpc.models import Language, ProjectDescriptor


GENERATORS: dict[Language, type[Generator]] = {
    Language.PYTHON: PythonGenerator,
    Language.TYPESCRIPT: TypeScriptGenerator,
}


class MissingDependenciesError(Exception):
    """Raised when required executables are not on PATH."""

    def __init__(self, missing: list[Dependency]) -> None:
        self.missing = missing
        names = ", ".join(dep.name for dep in missing)
        super().__init__(f"Missing required dependencies: {names}")


def select_generator(descriptor: ProjectDescriptor, *, verbose: bool = True) -> Generator:
    """Instantiate the generator for the descriptor's language."""
    generator_cls = GENERATORS[descriptor.language]
    return generator_cls(descriptor.name, descriptor.tool, verbose=verbose)


# =============================================================================
# Post-Creation Validation
# =============================================================================

def validate_project(generator: Generator) -> list[str]:
    """
    Check that the generated files exist and parse.

    Parameters
    ----------
    generator : Generator
        The generator that produced the project.

    Returns
    -------
    list[str]
        Problems found; empty if everything looks right.

    Checks Performed
    ----------------
    1. Every expected file exists
    2. ``*.py`` files compile
    3. ``*.toml`` files are valid TOML
    4. ``*.json`` files are valid JSON
    """
    issues: list[str] = []
    root = generator.project_path

    for path in generator.expected_files():
        relative = path.relative_to(root)
        if not path.exists():
            issues.append(f"Missing expected file: {relative}")
            continue

        content = path.read_text(encoding="utf-8")
        try:
            if path.suffix == ".py":
                compile(content, str(path), "exec")
            elif path.suffix == ".toml":
                tomllib.loads(content)
            elif path.suffix == ".json":
                json.loads(content)
        except (SyntaxError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            issues.append(f"Invalid {relative}: {e}")

    return issues


# =============================================================================
# Main Generation Function
# =============================================================================

def create_project(
    descriptor: ProjectDescriptor,
    *,
    verbose: bool = True,
    validate: bool = True,
) -> GenerationResult:
    """
    Create a new MCP server project.

    Parameters
    ----------
    descriptor : ProjectDescriptor
        Validated project name, language and tool.

    verbose : bool, default=True
        If True, print progress to stdout.

    validate : bool, default=True
        If True, run ``validate_project`` after generation and record
        any problems as warnings.

    Returns
    -------
    GenerationResult
        Details of the generated project.

    Raises
    ------
    MissingDependenciesError
        If required executables are missing. Nothing is written.
    FileExistsError
        If the target path already exists, including as a dangling
        symlink. Nothing is written.
    GenerationError
        If creating a directory or writing a file fails.
    """
    missing = check_dependencies(descriptor.language, descriptor.tool)
    if missing:
        raise MissingDependenciesError(missing)

    if os.path.lexists(descriptor.path):
        raise FileExistsError(
            f"Directory '{descriptor.name}' already exists. "
            "Please choose another project name."
        )

    generator = select_generator(descriptor, verbose=verbose)
    result = generator.generate()

    if validate:
        issues = validate_project(generator)
        result.validation_passed = not issues
        for issue in issues:
            result.warnings.append(generator.warn("validate", issue))

    return result
