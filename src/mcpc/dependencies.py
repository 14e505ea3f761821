"""
mcpc.dependencies - Preflight Dependency Checks
===============================================

Before anything is written to disk, mcpc verifies that the executables
the chosen language and tool need are reachable on PATH. The check is a
pure read-only probe: it only calls ``shutil.which``.

Check Order
-----------
1. Git (always)
2. The language runtime (Python 3 or Node.js)
3. The package manager, when the tool has a probe for that language

Every missing dependency is reported, not just the first one, in the
order above.

Usage
-----
>>> from mcpc.dependencies import check_dependencies
>>> from mcpc.models import Language, Tool
>>> missing = check_dependencies(Language.PYTHON, Tool.UV)
>>> [dep.name for dep in missing]
[]
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from mcpc.models import Language, Tool


@dataclass(frozen=True)
class Dependency:
    """
    An external executable a generated project needs.

    Attributes
    ----------
    name : str
        Human-readable name shown in the error report.

    install_instructions : str | None
        Where or how to install it.

    executables : tuple[str, ...]
        Command names probed on PATH. The dependency is satisfied when
        any one of them resolves.
    """

    name: str
    install_instructions: str | None = None
    executables: tuple[str, ...] = ()

    def is_installed(self) -> bool:
        """True if at least one of the executables is on PATH."""
        return any(shutil.which(exe) is not None for exe in self.executables)


# =============================================================================
# Known Dependencies
# =============================================================================

GIT = Dependency(
    name="Git",
    install_instructions="https://git-scm.com/downloads",
    executables=("git",),
)

PYTHON = Dependency(
    name="Python 3.10+",
    install_instructions="https://www.python.org/downloads/",
    executables=("python", "python3"),
)

NODE = Dependency(
    name="Node.js 18+",
    install_instructions="https://nodejs.org/",
    executables=("node",),
)

TOOL_DEPENDENCIES: dict[Tool, Dependency] = {
    Tool.UV: Dependency(
        name="uv",
        install_instructions="pip install uv",
        executables=(Tool.UV.executable,),
    ),
    Tool.PNPM: Dependency(
        name="pnpm",
        install_instructions="npm install -g pnpm",
        executables=(Tool.PNPM.executable,),
    ),
    Tool.YARN: Dependency(
        name="yarn",
        install_instructions="npm install -g yarn",
        executables=(Tool.YARN.executable,),
    ),
    Tool.NPM: Dependency(
        name="npm",
        install_instructions="It comes with Node.js, please install Node.js",
        executables=(Tool.NPM.executable,),
    ),
}

# Tools that get a PATH probe for each language. Any other tool is
# accepted without a check.
PROBED_TOOLS: dict[Language, frozenset[Tool]] = {
    Language.PYTHON: frozenset({Tool.UV}),
    Language.TYPESCRIPT: frozenset({Tool.PNPM, Tool.YARN, Tool.NPM}),
}


# =============================================================================
# Checks
# =============================================================================

def required_dependencies(language: Language, tool: Tool) -> list[Dependency]:
    """
    List everything a (language, tool) pair needs, in check order.

    This is the full allow-list for the pair: ``check_dependencies``
    never reports anything outside it.

    Parameters
    ----------
    language : Language
        Resolved project language.

    tool : Tool
        Resolved package manager.

    Returns
    -------
    list[Dependency]
        Git, then the runtime, then the tool if it is probed.
    """
    runtime = PYTHON if language is Language.PYTHON else NODE
    required = [GIT, runtime]

    if tool in PROBED_TOOLS[language]:
        required.append(TOOL_DEPENDENCIES[tool])

    return required


def check_dependencies(language: Language, tool: Tool) -> list[Dependency]:
    """
    Find the required executables that are not on PATH.

    Parameters
    ----------
    language : Language
        Resolved project language.

    tool : Tool
        Resolved package manager (never the unresolved optional).

    Returns
    -------
    list[Dependency]
        Missing dependencies in check order. Empty means every
        required executable was found.
    """
    return [
        dep for dep in required_dependencies(language, tool)
        if not dep.is_installed()
    ]
