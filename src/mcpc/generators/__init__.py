"""
mcpc.generators - Language-Specific Project Generators
======================================================

- ``base``: The ``Generator`` contract, results and shared helpers
- ``python``: FastMCP server script managed with uv
- ``typescript``: Node.js server using the MCP TypeScript SDK
"""

from mcpc.generators.base import GenerationError, GenerationResult, Generator, SoftFailure
from mcpc.generators.python import PythonGenerator
from mcpc.generators.typescript import TypeScriptGenerator


__all__ = [
    "GenerationError",
    "GenerationResult",
    "Generator",
    "PythonGenerator",
    "SoftFailure",
    "TypeScriptGenerator",
]
