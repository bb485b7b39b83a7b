"""Tests for FileValidator."""

from unittest.mock import patch

from readme_validator.errors import ErrorKind
from readme_validator.validators.files import FileValidator


def make_files(module_dir, names, content="x\n"):
    module_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (module_dir / name).write_text(content)


class TestFileValidator:
    """Tests for required file checks."""

    def test_all_files_present(self, tmp_path):
        """Test a complete module passes."""
        make_files(tmp_path, ["README.md", "outputs.tf", "variables.tf", "terraform.tf"])

        assert FileValidator(tmp_path / "README.md", tmp_path).validate() == []

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported by base name."""
        make_files(tmp_path, ["README.md", "outputs.tf", "variables.tf"])

        errors = FileValidator(tmp_path / "README.md", tmp_path).validate()

        assert [str(e) for e in errors] == ["file does not exist: terraform.tf"]
        assert errors[0].kind is ErrorKind.FILE

    def test_empty_file(self, tmp_path):
        """Test an empty file is reported."""
        make_files(tmp_path, ["README.md", "outputs.tf", "terraform.tf"])
        (tmp_path / "variables.tf").write_text("")

        errors = FileValidator(tmp_path / "README.md", tmp_path).validate()

        assert [str(e) for e in errors] == ["file is empty: variables.tf"]

    def test_additional_files(self, tmp_path):
        """Test extra files may be relative to the module or absolute."""
        make_files(tmp_path, ["README.md", "outputs.tf", "variables.tf", "terraform.tf"])
        absolute = tmp_path / "elsewhere" / "Makefile"

        validator = FileValidator(
            tmp_path / "README.md", tmp_path, ["examples/main.tf", str(absolute)]
        )

        assert validator.files[-2:] == [tmp_path / "examples" / "main.tf", absolute]
        assert [str(e) for e in validator.validate()] == [
            "file does not exist: main.tf",
            "file does not exist: Makefile",
        ]

    def test_access_error(self, tmp_path):
        """Test other stat failures are reported as access errors."""
        with patch("pathlib.Path.stat", side_effect=PermissionError(13, "Permission denied")):
            error = FileValidator.validate_file(tmp_path / "README.md")

        assert str(error).startswith("error accessing file: README.md: ")
        assert "Permission denied" in str(error)

    def test_readme_outside_module(self, tmp_path):
        """Test the README is checked at its own path."""
        module = tmp_path / "module"
        make_files(module, ["outputs.tf", "variables.tf", "terraform.tf"])
        docs = tmp_path / "docs"
        make_files(docs, ["README.md"])

        assert FileValidator(docs / "README.md", module).validate() == []
