"""
mcpc.models - Configuration Models
==================================

This module defines the data models used when generating a project:
the target language, the package-manager tool, and the validated
descriptor that ties a project name to both.

Architecture Notes
------------------
The models are intentionally small:

    ProjectDescriptor (main)
    ├── name: str
    ├── language: Language (enum)
    └── tool: Tool (enum)

The mapping from a language to its default tool is a flat lookup table
(``DEFAULT_TOOLS``) rather than a method on either enum, so the whole
mapping can be read in one place.

Usage Example
-------------
>>> from mcpc.models import Language, ProjectDescriptor
>>> descriptor = ProjectDescriptor.resolve("weather", Language.PYTHON)
>>> descriptor.tool
<Tool.UV: 'uv'>
>>> descriptor.path
PosixPath('weather')
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Enumerations
# =============================================================================

class Language(str, Enum):
    """
    Languages a project can be generated in.

    Attributes
    ----------
    PYTHON : str
        A FastMCP server script managed with uv.

    TYPESCRIPT : str
        A Node.js server built with the MCP TypeScript SDK.

    Examples
    --------
    >>> Language.from_string("TS")
    <Language.TYPESCRIPT: 'typescript'>
    """

    PYTHON = "python"
    TYPESCRIPT = "typescript"

    @property
    def display_name(self) -> str:
        """Human-readable name for prompts and messages."""
        return "TypeScript" if self is Language.TYPESCRIPT else "Python"

    @classmethod
    def from_string(cls, value: str) -> Language:
        """
        Parse a language name or its short alias.

        Matching is case-insensitive and ignores surrounding whitespace.

        Raises
        ------
        ValueError
            If the value is neither a language name nor an alias.
        """
        key = value.lower().strip()
        try:
            return LANGUAGE_ALIASES[key]
        except KeyError:
            valid = ", ".join(LANGUAGE_ALIASES)
            msg = f"Invalid language '{value}'. Valid: {valid}"
            raise ValueError(msg) from None


class Tool(str, Enum):
    """
    Package and environment managers used to bootstrap dependencies.

    ``UV`` is the only Python tool. The other three are JavaScript
    package managers for TypeScript projects.
    """

    UV = "uv"
    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"

    @property
    def executable(self) -> str:
        """Command name looked up on PATH and used to invoke the tool."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Tool:
        """
        Parse a tool name, case-insensitively.

        Raises
        ------
        ValueError
            If the value names no known tool.
        """
        try:
            return cls(value.lower().strip())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            msg = f"Invalid tool '{value}'. Valid: {valid}"
            raise ValueError(msg) from None


LANGUAGE_ALIASES: dict[str, Language] = {
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
}


# =============================================================================
# Tool Resolution Tables
# =============================================================================

DEFAULT_TOOLS: dict[Language, Tool] = {
    Language.PYTHON: Tool.UV,
    Language.TYPESCRIPT: Tool.PNPM,
}

COMPATIBLE_TOOLS: dict[Language, frozenset[Tool]] = {
    Language.PYTHON: frozenset({Tool.UV}),
    Language.TYPESCRIPT: frozenset({Tool.PNPM, Tool.YARN, Tool.NPM}),
}


def default_tool(language: Language) -> Tool:
    """
    Return the tool used for a language when none is given explicitly.

    Parameters
    ----------
    language : Language
        The resolved project language.

    Returns
    -------
    Tool
        ``uv`` for Python, ``pnpm`` for TypeScript.
    """
    return DEFAULT_TOOLS[language]


# =============================================================================
# Project Descriptor
# =============================================================================

class ProjectDescriptor(BaseModel):
    """
    Everything needed to generate one project.

    The descriptor is created once when a run starts and never changes
    afterwards. The project path is the name taken verbatim as a path
    relative to the current directory.

    Attributes
    ----------
    name : str
        Project name. Also used as the directory name, the package name
        in the generated manifests, and the TypeScript ``bin`` command.

    language : Language
        Target language.

    tool : Tool
        Package manager used to bootstrap dependencies. Must be one of
        ``COMPATIBLE_TOOLS[language]``.

    Examples
    --------
    >>> ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT, Tool.NPM).tool
    <Tool.NPM: 'npm'>
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(
        description="Project name, used verbatim as the directory name",
        min_length=1,
    )]
    language: Language = Field(
        default=Language.TYPESCRIPT,
        description="Language of the generated server",
    )
    tool: Tool = Field(
        default=Tool.PNPM,
        description="Package manager used to install dependencies",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are empty once whitespace is stripped."""
        if not v.strip():
            msg = "Project name cannot be blank."
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_tool_for_language(self) -> ProjectDescriptor:
        """Reject tools that cannot bootstrap the chosen language."""
        allowed = COMPATIBLE_TOOLS[self.language]
        if self.tool not in allowed:
            valid = ", ".join(sorted(t.value for t in allowed))
            msg = (
                f"Tool '{self.tool.value}' cannot be used with "
                f"{self.language.display_name} projects. Valid: {valid}"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def resolve(
        cls,
        name: str,
        language: Language,
        tool: Tool | None = None,
    ) -> ProjectDescriptor:
        """
        Build a descriptor, filling in the language's default tool.

        Raises
        ------
        pydantic.ValidationError
            If the name is blank or the tool does not fit the language.
        """
        return cls(
            name=name,
            language=language,
            tool=tool if tool is not None else default_tool(language),
        )

    @property
    def path(self) -> Path:
        """Target directory, relative to the current working directory."""
        return Path(self.name)
