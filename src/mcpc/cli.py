"""
mcpc.cli - Command Line Interface
=================================

This module provides the command-line interface for mcpc using Typer.
It is a single command:

    mcpc PROJECT_NAME [--language LANG] [--tool TOOL] [--interactive] [--quiet]

The command resolves the effective tool (explicit, or the language's
default), hands a validated ``ProjectDescriptor`` to
``create_project``, and turns each failure category into a message on
stderr and exit code 1.

Output Contract
---------------
- stdout: progress, the success panel, next steps
- stderr: errors and warnings

Usage Examples
--------------
    $ mcpc weather                       # TypeScript + pnpm
    $ mcpc weather -l python             # Python + uv
    $ mcpc weather -l ts -t yarn         # TypeScript + yarn
    $ mcpc weather -i                    # prompt for language and tool

See Also
--------
- scaffold.py: Orchestration of the generation run
- models.py: Language, Tool and ProjectDescriptor
"""

from __future__ import annotations

from typing import Annotated

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mcpc import __version__
from mcpc.dependencies import Dependency
from mcpc.generators import GenerationError, GenerationResult
from mcpc.models import COMPATIBLE_TOOLS, Language, ProjectDescriptor, Tool, default_tool
from mcpc.scaffold import MissingDependenciesError, create_project


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="mcpc",
    help="Generate MCP server project templates.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]mcpc[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]MCP server project generator[/]\n"
            f"[dim]Languages: Python (uv), TypeScript (pnpm, yarn, npm)[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def prompt_language(default: Language) -> Language:
    """
    Interactively prompt for the project language.

    Returns
    -------
    Language
        The selected language.
    """
    choices = [
        questionary.Choice(title=lang.display_name, value=lang)
        for lang in Language
    ]

    result = questionary.select(
        "Which language?",
        choices=choices,
        default=default,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_tool(language: Language, default: Tool) -> Tool:
    """
    Interactively prompt for a package manager that fits the language.

    Returns
    -------
    Tool
        The selected tool.
    """
    choices = [
        questionary.Choice(title=tool.value, value=tool)
        for tool in Tool
        if tool in COMPATIBLE_TOOLS[language]
    ]

    result = questionary.select(
        "Which package manager?",
        choices=choices,
        default=default if default in COMPATIBLE_TOOLS[language] else default_tool(language),
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


# =============================================================================
# Reporting
# =============================================================================

def report_missing_dependencies(missing: list[Dependency]) -> None:
    """Print every missing dependency with its install instructions."""
    err_console.print("[bold red]❌ Missing required dependencies:[/]")
    for dep in missing:
        err_console.print(f"  - [yellow]{escape(dep.name)}[/]")
        if dep.install_instructions:
            err_console.print(
                f"    [blue]Install with[/]: [green]{escape(dep.install_instructions)}[/]"
            )


def print_success(descriptor: ProjectDescriptor, result: GenerationResult) -> None:
    """Print the success panel and the next steps."""
    steps = "\n".join(
        f"  [dim]{escape(line)}[/]" if line.startswith("#") else f"  {escape(line)}"
        for line in result.next_steps
    )

    console.print()
    console.print(Panel(
        f"[bold green]✅ Successfully created MCP server project:[/] "
        f"[bold]{escape(descriptor.name)}[/]\n\n"
        f"[bold blue]📁 Project location:[/] {escape(str(result.project_path.resolve()))}\n\n"
        f"[bold yellow]🚀 Next steps:[/]\n{steps}",
        title="[bold green]Success[/]",
        border_style="green",
    ))

    if descriptor.language is Language.PYTHON:
        console.print(
            "[dim]Running server.py without --test appears to hang: it is waiting "
            "for MCP protocol messages on stdin. See README.md to connect a client.[/]"
        )


def print_summary(descriptor: ProjectDescriptor) -> None:
    """Show the resolved configuration before an interactive run."""
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", escape(descriptor.name))
    table.add_row("Language", descriptor.language.display_name)
    table.add_row("Tool", descriptor.tool.value)

    console.print()
    console.print(table)
    console.print()


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main(
    project_name: Annotated[
        str,
        typer.Argument(
            help="Name of the project (also the directory to create)",
        ),
    ],
    language: Annotated[
        str,
        typer.Option(
            "--language",
            "-l",
            help="Programming language: python (py), typescript (ts)",
        ),
    ] = Language.TYPESCRIPT.value,
    tool: Annotated[
        str | None,
        typer.Option(
            "--tool",
            "-t",
            help="Package manager: uv, pnpm, yarn, npm (default depends on language)",
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive",
            "-i",
            help="Prompt for language and package manager",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print warnings, errors and the final result",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Generate an MCP server project.

    Creates [cyan]PROJECT_NAME/[/] with a runnable weather server,
    installs dependencies and initializes git.

    [bold]Examples:[/]

        mcpc weather

        mcpc weather --language python

        mcpc weather -l ts -t npm
    """
    # Resolve language and tool
    try:
        resolved_language = Language.from_string(language)
        resolved_tool = Tool.from_string(tool) if tool is not None else None
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if interactive:
        resolved_language = prompt_language(resolved_language)
        resolved_tool = prompt_tool(
            resolved_language,
            resolved_tool or default_tool(resolved_language),
        )

    # Build the descriptor
    try:
        descriptor = ProjectDescriptor.resolve(project_name, resolved_language, resolved_tool)
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if interactive:
        print_summary(descriptor)
        if not questionary.confirm("Create project with these settings?", default=True).ask():
            raise typer.Abort()

    # Create the project
    try:
        result = create_project(descriptor, verbose=not quiet)
    except MissingDependenciesError as e:
        report_missing_dependencies(e.missing)
        raise typer.Exit(1)
    except FileExistsError as e:
        err_console.print(f"[bold red]❌[/] {escape(str(e))}")
        raise typer.Exit(1)
    except GenerationError as e:
        err_console.print(f"[bold red]❌ Failed to create project:[/] {escape(str(e))}")
        raise typer.Exit(1)

    print_success(descriptor, result)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
