"""
mcpc.generators.python - Python MCP Server Generator
====================================================

Generates a flat, single-script FastMCP server:

    {name}/
    ├── pyproject.toml
    ├── requirements.txt
    ├── .gitignore
    ├── server.py        (executable on POSIX)
    └── README.md

The virtual environment is always created with ``uv venv``; uv is the
only Python tool mcpc supports.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from mcpc.generators.base import Generator, SoftFailure, describe_failure, run_command
from mcpc.models import Tool


class PythonGenerator(Generator):
    """Generator for Python MCP servers."""

    TEMPLATES = {
        "python/pyproject.toml.j2": "pyproject.toml",
        "python/requirements.txt.j2": "requirements.txt",
        "python/gitignore.j2": ".gitignore",
        "python/server.py.j2": "server.py",
        "python/README.md.j2": "README.md",
    }

    VENV_COMMAND = [Tool.UV.executable, "venv"]

    def create_files(self) -> list[Path]:
        created = super().create_files()

        if os.name == "posix":
            script = self.project_path / "server.py"
            try:
                script.chmod(0o755)
            except OSError as e:
                self.file_warnings.append(self.warn(
                    "create_files",
                    f"Could not mark server.py as executable: {e}",
                    "Run it with 'python server.py' or 'chmod +x server.py'",
                ))

        return created

    def init_package_manager(self) -> list[SoftFailure]:
        """
        Create ``.venv`` with ``uv venv``.

        The resolved tool is not consulted: uv is used unconditionally.
        """
        self.say("[bold]📦 Creating Python virtual environment with uv...[/]")

        try:
            run_command(self.VENV_COMMAND, cwd=self.project_path)
        except (subprocess.CalledProcessError, OSError) as e:
            return [self.warn(
                "package_manager",
                f"Failed to create virtual environment: {describe_failure(e)}",
                "Please run 'uv venv' manually in the project directory",
            )]

        self.say("  [green]✓[/] Virtual environment created successfully")
        return []

    def next_steps(self) -> list[str]:
        return [
            f"cd {self.project_name}",
            "# Activate virtual environment",
            "source .venv/bin/activate  # On Windows: .venv\\Scripts\\activate",
            "# Install dependencies",
            "uv pip install -r requirements.txt",
            "# Verify the server works without an MCP client",
            "python server.py --test",
            "# Run the server (waits for MCP messages on stdin)",
            "python server.py",
        ]
