"""
mcpc test suite
===============

Test Modules
------------
- test_models.py: Language/Tool enums, default tools, ProjectDescriptor
- test_dependencies.py: Preflight PATH checks
- test_generators.py: Python and TypeScript generator pipelines
- test_scaffold.py: Orchestration and post-generation validation
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_generators.py

    # Run specific test class
    pytest tests/test_generators.py::TestTypeScriptGenerator
"""
