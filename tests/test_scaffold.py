"""
Tests for mcpc.scaffold
=======================

Test Organization
-----------------
- TestPreflight: Dependency and target checks before any write
- TestSelectGenerator: Language -> generator dispatch
- TestValidateProject: Post-generation file checks
- TestCreateProject: End-to-end runs with faked commands
"""

import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mcpc.generators import PythonGenerator, SoftFailure, TypeScriptGenerator
from mcpc.models import Language, ProjectDescriptor, Tool
from mcpc.scaffold import (
    MissingDependenciesError,
    create_project,
    select_generator,
    validate_project,
)


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under root to its content."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


# =============================================================================
# Preflight Tests
# =============================================================================

class TestPreflight:
    """Tests for the checks create_project runs before writing."""

    def test_missing_dependencies_abort(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test nothing is created or run when a dependency is missing."""
        fake_path.discard("uv")
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        with pytest.raises(MissingDependenciesError) as exc:
            create_project(descriptor, verbose=False)

        assert [dep.name for dep in exc.value.missing] == ["uv"]
        assert "uv" in str(exc.value)
        assert list(work_dir.iterdir()) == []
        fake_run.assert_not_called()

    def test_existing_directory_aborts(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        (work_dir / "demo-ts").mkdir()
        descriptor = ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT)

        with pytest.raises(FileExistsError, match="Directory 'demo-ts' already exists"):
            create_project(descriptor, verbose=False)

        assert list((work_dir / "demo-ts").iterdir()) == []
        fake_run.assert_not_called()

    def test_existing_file_aborts(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test a plain file at the target is left untouched."""
        (work_dir / "demo-ts").write_text("keep me")
        descriptor = ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT)

        with pytest.raises(FileExistsError):
            create_project(descriptor, verbose=False)

        assert (work_dir / "demo-ts").read_text() == "keep me"

    @pytest.mark.posix
    @pytest.mark.skipif(os.name != "posix", reason="symlinks need POSIX")
    def test_dangling_symlink_aborts(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test a broken symlink at the target counts as existing."""
        (work_dir / "demo-py").symlink_to(work_dir / "nowhere")
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        with pytest.raises(FileExistsError, match="already exists"):
            create_project(descriptor, verbose=False)

        assert (work_dir / "demo-py").is_symlink()
        assert not (work_dir / "nowhere").exists()
        fake_run.assert_not_called()

    def test_dependencies_checked_before_target(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        (work_dir / "demo-py").mkdir()
        fake_path.discard("git")
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        with pytest.raises(MissingDependenciesError):
            create_project(descriptor, verbose=False)


# =============================================================================
# Dispatch Tests
# =============================================================================

class TestSelectGenerator:
    """Tests for select_generator."""

    def test_python(self) -> None:
        generator = select_generator(ProjectDescriptor.resolve("demo", Language.PYTHON))

        assert isinstance(generator, PythonGenerator)
        assert generator.tool is Tool.UV

    def test_typescript(self) -> None:
        descriptor = ProjectDescriptor.resolve("demo", Language.TYPESCRIPT, Tool.YARN)
        generator = select_generator(descriptor, verbose=False)

        assert isinstance(generator, TypeScriptGenerator)
        assert generator.tool is Tool.YARN
        assert generator.verbose is False


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidateProject:
    """Tests for validate_project."""

    @pytest.fixture
    def generated(self, work_dir: Path) -> TypeScriptGenerator:
        generator = TypeScriptGenerator("demo-ts", Tool.PNPM, verbose=False)
        generator.create_directories()
        generator.create_files()
        return generator

    def test_fresh_project_passes(self, generated: TypeScriptGenerator) -> None:
        assert validate_project(generated) == []

    def test_fresh_python_project_passes(self, work_dir: Path) -> None:
        generator = PythonGenerator("demo-py", Tool.UV, verbose=False)
        generator.create_directories()
        generator.create_files()

        assert validate_project(generator) == []

    def test_detects_corrupt_json(self, generated: TypeScriptGenerator) -> None:
        Path("demo-ts/package.json").write_text("{not json")

        issues = validate_project(generated)

        assert len(issues) == 1
        assert issues[0].startswith("Invalid package.json")

    def test_detects_missing_file(self, generated: TypeScriptGenerator) -> None:
        Path("demo-ts/src/index.ts").unlink()

        issues = validate_project(generated)

        assert issues == [f"Missing expected file: {Path('src/index.ts')}"]

    def test_detects_invalid_python(self, work_dir: Path) -> None:
        generator = PythonGenerator("demo-py", Tool.UV, verbose=False)
        generator.create_directories()
        generator.create_files()
        Path("demo-py/server.py").write_text("def broken(:\n")

        issues = validate_project(generator)

        assert len(issues) == 1
        assert issues[0].startswith("Invalid server.py")


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestCreateProject:
    """Tests for create_project."""

    def test_python_project(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        result = create_project(descriptor, verbose=False)

        assert result.project_path == Path("demo-py")
        assert result.validation_passed is True
        assert result.warnings == []
        assert len(list((work_dir / "demo-py").iterdir())) == 5

    def test_typescript_project(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        descriptor = ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT, Tool.NPM)

        result = create_project(descriptor, verbose=False)

        manifest = json.loads((work_dir / "demo-ts/package.json").read_text())
        assert manifest["bin"] == {"demo-ts": "./build/index.js"}
        assert result.validation_passed is True
        assert fake_run.call_args_list[0].args[0][:2] == ["npm", "install"]

    def test_soft_failures_still_succeed(
        self, work_dir: Path, fake_path: set[str], fail_commands
    ) -> None:
        """Test failing external tools leave a complete project behind."""
        fail_commands("uv", "git")
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        result = create_project(descriptor, verbose=False)

        assert [w.step for w in result.warnings] == ["package_manager", "git"]
        assert result.validation_passed is True
        assert (work_dir / "demo-py/server.py").exists()

    def test_second_run_leaves_first_untouched(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test generating the same name twice fails without changes."""
        descriptor = ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT)
        create_project(descriptor, verbose=False)
        before = snapshot(work_dir / "demo-ts")

        with pytest.raises(FileExistsError):
            create_project(descriptor, verbose=False)

        assert snapshot(work_dir / "demo-ts") == before

    def test_validation_problems_become_warnings(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test a failed validation still returns a result."""
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        with patch(
            "mcpc.scaffold.validate_project",
            return_value=["Invalid server.py: invalid syntax"],
        ):
            result = create_project(descriptor, verbose=False)

        assert result.validation_passed is False
        assert result.warnings == [
            SoftFailure(step="validate", message="Invalid server.py: invalid syntax"),
        ]
        assert (work_dir / "demo-py/server.py").exists()

    def test_corrupt_render_is_reported(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        """Test a broken generated manifest is caught after generation."""
        descriptor = ProjectDescriptor.resolve("demo-ts", Language.TYPESCRIPT)
        original = TypeScriptGenerator.create_files

        def corrupt(generator: TypeScriptGenerator) -> list[Path]:
            created = original(generator)
            (generator.project_path / "package.json").write_text("{", encoding="utf-8")
            return created

        with patch.object(TypeScriptGenerator, "create_files", corrupt):
            result = create_project(descriptor, verbose=False)

        assert result.validation_passed is False
        assert [w.step for w in result.warnings] == ["validate"]
        assert result.warnings[0].message.startswith("Invalid package.json")

    def test_skip_validation(
        self, work_dir: Path, fake_path: set[str], fake_run: MagicMock
    ) -> None:
        descriptor = ProjectDescriptor.resolve("demo-py", Language.PYTHON)

        result = create_project(descriptor, verbose=False, validate=False)

        assert result.validation_passed is False
        assert result.warnings == []
