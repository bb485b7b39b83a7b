"""Tests for the top-level ReadmeValidator."""

from pathlib import Path

import pytest

from readme_validator.config_manager import Options
from readme_validator.errors import ConfigError, ErrorKind, ValidationError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.validator import ReadmeValidator, build_default_validators
from readme_validator.validators.base import Validator


class StaticValidator(Validator):
    """Validator returning a fixed list of errors."""

    def __init__(self, name: str, messages: list[str]):
        self.name = name
        self.messages = messages
        self.calls = 0

    def validate(self) -> list[ValidationError]:
        self.calls += 1
        return [ValidationError(message, ErrorKind.FILE) for message in self.messages]


def options_for(readme: Path, **kwargs) -> Options:
    kwargs.setdefault("provider_prefixes", ["azurerm_"])
    kwargs.setdefault("skip_urls", True)
    return Options(readme_path=readme, module_path=readme.parent, **kwargs)


class TestBuildDefaultValidators:
    """Tests for build_default_validators()."""

    def test_all_enabled_in_order(self, document_module):
        """Test every check runs in reporting order."""
        validator = ReadmeValidator(options_for(document_module, skip_urls=False))

        assert [v.name for v in validator.validators] == [
            "sections",
            "files",
            "urls",
            "resources",
            "variables",
            "outputs",
        ]

    def test_skip_flags(self, document_module):
        """Test skipped checks are left out."""
        options = options_for(document_module, skip_files=True, skip_outputs=True)
        validator = ReadmeValidator(options)

        validators = build_default_validators(options, validator.markdown, validator.terraform)

        assert [v.name for v in validators] == ["sections", "resources", "variables"]


class TestReadmeValidator:
    """Tests for ReadmeValidator.validate()."""

    def test_document_module_is_consistent(self, document_module):
        """Test a consistent document-format module has no errors."""
        validator = ReadmeValidator(options_for(document_module))

        assert validator.format is MarkdownFormat.DOCUMENT
        assert validator.validate() == []

    def test_table_module_is_consistent(self, table_module):
        """Test a consistent table-format module has no errors."""
        validator = ReadmeValidator(options_for(table_module))

        assert validator.format is MarkdownFormat.TABLE
        assert validator.validate() == []

    def test_explicit_format(self, document_module):
        """Test an explicit format skips detection."""
        validator = ReadmeValidator(options_for(document_module, format=MarkdownFormat.DOCUMENT))

        assert validator.format is MarkdownFormat.DOCUMENT
        assert validator.markdown.detection is None

    def test_errors_in_validator_order(self, document_module):
        """Test errors from every validator are concatenated in order."""
        first = StaticValidator("first", ["a", "b"])
        second = StaticValidator("second", ["c"])
        validator = ReadmeValidator(options_for(document_module), validators=[first, second])

        assert [str(e) for e in validator.validate()] == ["a", "b", "c"]

    def test_fail_fast_returns_first_error(self, document_module):
        """Test fail-fast stops at the first validator with errors."""
        clean = StaticValidator("clean", [])
        failing = StaticValidator("failing", ["first", "second"])
        never = StaticValidator("never", ["unreached"])
        validator = ReadmeValidator(
            options_for(document_module), validators=[clean, failing, never]
        )

        error = validator.validate_fail_fast()

        assert str(error) == "first"
        assert never.calls == 0

    def test_fail_fast_without_errors(self, document_module):
        """Test fail-fast returns None for a consistent module."""
        validator = ReadmeValidator(options_for(document_module))

        assert validator.validate_fail_fast() is None

    def test_unreadable_readme(self, tmp_path):
        """Test a missing README is a configuration error."""
        with pytest.raises(ConfigError, match="failed to read file"):
            ReadmeValidator(options_for(tmp_path / "README.md"))

    def test_readme_path_from_environment(self, document_module, monkeypatch):
        """Test README_PATH is used when options carry no path."""
        monkeypatch.setenv("README_PATH", str(document_module))

        validator = ReadmeValidator(Options(provider_prefixes=["azurerm_"], skip_urls=True))

        assert validator.readme_path == document_module.resolve()
        assert validator.module_path == document_module.parent.resolve()
        assert validator.validate() == []

    def test_no_readme_path(self):
        """Test construction fails without any README path."""
        with pytest.raises(ConfigError, match="README path not provided"):
            ReadmeValidator(Options())
