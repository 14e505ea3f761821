"""
mcpc.generators.base - Generator Abstraction
============================================

Every language variant implements the same four-step pipeline:

    1. create_directories   (hard: errors abort the run)
    2. create_files         (hard: errors abort the run)
    3. init_package_manager (soft: errors become warnings)
    4. init_git             (soft: errors become warnings)

Hard steps raise ``GenerationError``. Soft steps never raise for a
failing external tool; they print a warning to stderr and return the
``SoftFailure`` records, which ``generate`` collects into the
``GenerationResult``.

Best-effort tweaks after the files are written, such as marking a
script executable, report problems through ``file_warnings`` instead
of raising.

Nothing is rolled back when a hard step fails, so a partially written
project directory can remain on disk.

Template System
---------------
Files are rendered from Jinja2 templates in ``mcpc/templates/<language>/``.
Each subclass lists its templates in ``TEMPLATES`` as a mapping of
template name to output path (relative to the project root). Every
template receives:

    - name: The project name
    - package_manager: The JavaScript command name (TypeScript only)
    - mcpc_version: Version of mcpc for attribution
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from jinja2 import Environment, PackageLoader, select_autoescape
from rich.console import Console
from rich.markup import escape

from mcpc import __version__
from mcpc.models import Tool


# Progress goes to stdout, warnings to stderr
console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Errors and Results
# =============================================================================

class GenerationError(RuntimeError):
    """A hard failure while creating directories or writing files."""


@dataclass(frozen=True)
class SoftFailure:
    """
    A failed optional step that did not stop generation.

    Attributes
    ----------
    step : str
        Pipeline step that failed (``create_files``, ``package_manager``,
        ``git``, ``validate``).

    message : str
        What went wrong.

    remedy : str | None
        What the user can run by hand to recover.
    """

    step: str
    message: str
    remedy: str | None = None


@dataclass
class GenerationResult:
    """
    Outcome of a completed generation run.

    A result is only returned when both hard steps succeeded. Soft
    failures and validation problems end up in ``warnings``.

    Attributes
    ----------
    project_path : Path
        Path of the generated project.

    directories_created : list[Path]
        Directories created, project root first.

    files_created : list[Path]
        Files written, in write order.

    warnings : list[SoftFailure]
        Non-fatal problems reported during the run.

    validation_passed : bool
        Whether post-generation validation found no problems.

    next_steps : list[str]
        Shell lines the user runs next, comments included.
    """

    project_path: Path
    directories_created: list[Path] = field(default_factory=list)
    files_created: list[Path] = field(default_factory=list)
    warnings: list[SoftFailure] = field(default_factory=list)
    validation_passed: bool = False
    next_steps: list[str] = field(default_factory=list)


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for the scaffold templates.

    Autoescaping is disabled because the output is source code and
    configuration, not HTML.
    """
    return Environment(
        loader=PackageLoader("mcpc", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


# =============================================================================
# External Commands
# =============================================================================

def run_command(argv: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Run an external command and wait for it to exit.

    Raises
    ------
    subprocess.CalledProcessError
        If the command exits non-zero.
    OSError
        If the command cannot be launched (e.g. not on PATH).
    """
    return subprocess.run(
        argv,
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )


def describe_failure(exc: Exception) -> str:
    """Turn a command failure into a one-line reason."""
    if isinstance(exc, subprocess.CalledProcessError):
        detail = (exc.stderr or "").strip()
        reason = f"exited with status {exc.returncode}"
        return f"{reason}: {detail}" if detail else reason
    return str(exc)


# =============================================================================
# Generator Base Class
# =============================================================================

class Generator(ABC):
    """
    Base class for language-specific project generators.

    Construction is pure: nothing touches the filesystem until
    ``generate`` (or one of the step methods) is called.

    Parameters
    ----------
    project_name : str
        Name of the project. The target directory is this name taken
        verbatim as a relative path.

    tool : Tool
        Resolved package manager.

    verbose : bool, default=True
        If True, print progress to stdout. Warnings are printed
        regardless.
    """

    #: Template name -> output path relative to the project root
    TEMPLATES: ClassVar[dict[str, str]] = {}

    #: Subdirectories created under the project root
    SUBDIRECTORIES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, project_name: str, tool: Tool, *, verbose: bool = True) -> None:
        self.project_name = project_name
        self.tool = tool
        self.project_path = Path(project_name)
        self.verbose = verbose
        self.file_warnings: list[SoftFailure] = []

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def generate(self) -> GenerationResult:
        """
        Run the four pipeline steps in order.

        Returns
        -------
        GenerationResult
            Directories and files created, plus any soft failures.

        Raises
        ------
        GenerationError
            If directory creation or a file write fails. Later steps
            are not run.
        """
        result = GenerationResult(project_path=self.project_path)

        self.say("[bold]📁 Creating directory structure...[/]")
        result.directories_created.extend(self.create_directories())

        self.say("[bold]📝 Writing files...[/]")
        result.files_created.extend(self.create_files())
        result.warnings.extend(self.file_warnings)

        result.warnings.extend(self.init_package_manager())

        self.say("[bold]🔧 Initializing git repository...[/]")
        result.warnings.extend(self.init_git())

        result.next_steps = self.next_steps()
        return result

    def create_directories(self) -> list[Path]:
        """
        Create the project root and the variant's subdirectories.

        Raises
        ------
        GenerationError
            If the root already exists or any directory cannot be made.
        """
        created: list[Path] = []

        try:
            self.project_path.mkdir()
        except OSError as e:
            raise GenerationError(
                f"Failed to create project directory: {self.project_path}: {e}"
            ) from e
        created.append(self.project_path)

        for name in self.SUBDIRECTORIES:
            path = self.project_path / name
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise GenerationError(f"Failed to create directory: {name}: {e}") from e
            created.append(path)
            self.say(f"  Created {escape(str(path))}/")

        return created

    def create_files(self) -> list[Path]:
        """
        Render every template and write it into the project.

        Files are written one at a time. The first failing write raises
        and the rest are skipped.

        Raises
        ------
        GenerationError
            If a file cannot be written.
        """
        env = create_jinja_env()
        context = self.template_context()
        created: list[Path] = []

        for template_name, output in self.TEMPLATES.items():
            content = env.get_template(template_name).render(**context)
            path = self.project_path / output
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                raise GenerationError(f"Failed to create {output}: {e}") from e
            created.append(path)
            self.say(f"  Created {escape(output)}")

        return created

    @abstractmethod
    def init_package_manager(self) -> list[SoftFailure]:
        """Bootstrap the project's dependencies with the external tool."""

    def init_git(self) -> list[SoftFailure]:
        """
        Run ``git init`` in the project directory.

        A missing or failing git is reported as a warning, never raised.
        """
        try:
            run_command(["git", "init"], cwd=self.project_path)
        except (subprocess.CalledProcessError, OSError) as e:
            return [self.warn(
                "git",
                f"Failed to initialize git repository: {describe_failure(e)}",
                "Please run 'git init' manually in the project directory",
            )]

        self.say("  [green]✓[/] Git repository initialized")
        return []

    @abstractmethod
    def next_steps(self) -> list[str]:
        """Shell lines the user runs after generation, comments included."""

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def template_context(self) -> dict[str, Any]:
        """Values available to every template of this generator."""
        return {
            "name": self.project_name,
            "mcpc_version": __version__,
        }

    def expected_files(self) -> list[Path]:
        """Paths of every file ``create_files`` writes."""
        return [self.project_path / output for output in self.TEMPLATES.values()]

    def say(self, message: str) -> None:
        """Print a progress line when verbose."""
        if self.verbose:
            console.print(message)

    def warn(self, step: str, message: str, remedy: str | None = None) -> SoftFailure:
        """Print a warning to stderr and return it as a ``SoftFailure``."""
        err_console.print(f"[yellow]⚠️ Warning:[/] {escape(message)}")
        if remedy:
            err_console.print(escape(remedy))
        return SoftFailure(step=step, message=message, remedy=remedy)
