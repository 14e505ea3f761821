"""
mcpc.generators.typescript - TypeScript MCP Server Generator
============================================================

Generates a Node.js server built with the MCP TypeScript SDK:

    {name}/
    ├── package.json
    ├── tsconfig.json
    ├── .gitignore
    ├── .prettierrc
    ├── .prettierignore
    ├── README.md
    ├── src/
    │   └── index.ts
    └── build/

Dependencies are installed in two separate invocations of the package
manager, one for runtime and one for development dependencies. Each
invocation can fail on its own without stopping generation.
"""

from __future__ import annotations

import subprocess
from typing import Any

from mcpc.generators.base import Generator, SoftFailure, describe_failure, run_command
from mcpc.models import Tool


RUNTIME_DEPENDENCIES = ["@modelcontextprotocol/sdk", "zod"]
DEV_DEPENDENCIES = ["@types/node", "typescript"]

# Command name per tool; anything else falls back to npm
PACKAGE_MANAGER_COMMANDS: dict[Tool, str] = {
    Tool.PNPM: Tool.PNPM.executable,
    Tool.YARN: Tool.YARN.executable,
    Tool.NPM: Tool.NPM.executable,
}
FALLBACK_COMMAND = Tool.NPM.executable

RUNTIME_INSTALL_ARGS: dict[str, list[str]] = {
    "yarn": ["add"],
    "pnpm": ["install"],
    "npm": ["install"],
}

DEV_INSTALL_ARGS: dict[str, list[str]] = {
    "yarn": ["add", "--dev"],
    "pnpm": ["install", "-D"],
    "npm": ["install", "--save-dev"],
}


def package_manager_command(tool: Tool) -> str:
    """
    Resolve the JavaScript package manager command for a tool.

    >>> package_manager_command(Tool.YARN)
    'yarn'
    >>> package_manager_command(Tool.UV)
    'npm'
    """
    return PACKAGE_MANAGER_COMMANDS.get(tool, FALLBACK_COMMAND)


class TypeScriptGenerator(Generator):
    """Generator for TypeScript MCP servers."""

    TEMPLATES = {
        "typescript/package.json.j2": "package.json",
        "typescript/tsconfig.json.j2": "tsconfig.json",
        "typescript/gitignore.j2": ".gitignore",
        "typescript/prettierrc.j2": ".prettierrc",
        "typescript/prettierignore.j2": ".prettierignore",
        "typescript/index.ts.j2": "src/index.ts",
        "typescript/README.md.j2": "README.md",
    }

    SUBDIRECTORIES = ("src", "build")

    @property
    def command(self) -> str:
        """Package manager executable for this project."""
        return package_manager_command(self.tool)

    def runtime_install_argv(self) -> list[str]:
        return [self.command, *RUNTIME_INSTALL_ARGS[self.command], *RUNTIME_DEPENDENCIES]

    def dev_install_argv(self) -> list[str]:
        return [self.command, *DEV_INSTALL_ARGS[self.command], *DEV_DEPENDENCIES]

    def template_context(self) -> dict[str, Any]:
        context = super().template_context()
        context["package_manager"] = self.command
        return context

    def init_package_manager(self) -> list[SoftFailure]:
        """
        Install runtime, then development dependencies.

        Both installs are attempted even if the first one fails.
        """
        self.say(f"[bold]📦 Installing dependencies with {self.command}...[/]")
        warnings: list[SoftFailure] = []

        installs = [
            ("runtime", self.runtime_install_argv()),
            ("development", self.dev_install_argv()),
        ]
        for kind, argv in installs:
            self.say(f"  Installing {kind} dependencies...")
            try:
                run_command(argv, cwd=self.project_path)
            except (subprocess.CalledProcessError, OSError) as e:
                warnings.append(self.warn(
                    "package_manager",
                    f"Failed to install {kind} dependencies: {describe_failure(e)}",
                    f"Please run '{' '.join(argv)}' manually",
                ))

        if warnings:
            warnings.append(self.warn(
                "package_manager",
                "Some dependencies may not have been installed properly.",
                "Please check the output above and install any missing dependencies manually.",
            ))
        else:
            self.say("  [green]✓[/] Dependencies installed successfully")

        return warnings

    def next_steps(self) -> list[str]:
        install = {"yarn": "yarn", "pnpm": "pnpm install"}.get(self.command, "npm install")
        dev = {"yarn": "yarn dev", "pnpm": "pnpm dev"}.get(self.command, "npm run dev")
        return [
            f"cd {self.project_name}",
            "# Install dependencies",
            install,
            "# Build the server",
            f"{self.command} run build",
            "# Run the server",
            dev,
        ]
