"""
mcpc.templates - Jinja2 Template Files
======================================

This package contains the Jinja2 templates rendered into generated
projects, one subdirectory per language. Templates use the ``.j2``
extension and are listed in each generator's ``TEMPLATES`` mapping.

Template Naming Convention
--------------------------
- Templates end with the `.j2` extension
- Dotfiles drop their leading dot (`gitignore.j2` → `.gitignore`)

Available Templates
-------------------
python/:
    - pyproject.toml.j2, requirements.txt.j2, gitignore.j2
    - server.py.j2: FastMCP weather server
    - README.md.j2

typescript/:
    - package.json.j2, tsconfig.json.j2, gitignore.j2
    - prettierrc.j2, prettierignore.j2
    - index.ts.j2: MCP SDK weather server
    - README.md.j2

Template Context
----------------
    name : str
        Project name

    package_manager : str
        JavaScript package manager command (TypeScript only)

    mcpc_version : str
        Version of mcpc for attribution
"""
