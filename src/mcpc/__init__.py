"""
mcpc - MCP Server Project Generator
===================================

A CLI tool that scaffolds a working Model Context Protocol (MCP) server
project in Python or TypeScript, initializes git, and bootstraps the
package manager.

Quick Start
-----------
```bash
# TypeScript server with pnpm (the default)
mcpc weather

# Python server with uv
mcpc weather --language python

# TypeScript server with npm
mcpc weather -l ts -t npm
```

Example
-------
>>> from mcpc import Language, ProjectDescriptor, create_project
>>> create_project(ProjectDescriptor.resolve("weather", Language.PYTHON))

Architecture
------------
- ``cli``: Typer-based command line interface
- ``scaffold``: Orchestration (preflight checks, dispatch, validation)
- ``dependencies``: PATH probes for git, runtimes and package managers
- ``generators``: One generator per language
- ``templates``: Jinja2 templates for generated files
- ``models``: Language/Tool enums and the project descriptor

License
-------
MIT License
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from mcpc.dependencies import Dependency, check_dependencies
from mcpc.models import Language, ProjectDescriptor, Tool, default_tool
from mcpc.scaffold import MissingDependenciesError, create_project


__all__ = [
    "Dependency",
    "Language",
    "MissingDependenciesError",
    "ProjectDescriptor",
    "Tool",
    "__version__",
    "check_dependencies",
    "create_project",
    "default_tool",
]
