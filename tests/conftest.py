"""
Shared test fixtures for readme_validator tests.

This module provides common fixtures used across all test types:
- Sample READMEs in document (heading) and table format
- A module directory builder on tmp_path
- Environment isolation for config resolution
"""

from pathlib import Path

import pytest

from tests.fixtures.sample_modules import DOCUMENT_README, MODULE_FILES, TABLE_README

# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Remove validator environment variables and run in an empty directory.

    Keeps a developer's README_PATH, FORMAT, or .readme-validator.toml from
    leaking into tests.
    """
    for name in ("README_PATH", "MODULE_PATH", "FORMAT", "VERBOSE", "GITHUB_WORKSPACE"):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


# ============================================================================
# MODULE FIXTURES
# ============================================================================


@pytest.fixture
def document_readme():
    """README in terraform-docs document (heading) format."""
    return DOCUMENT_README


@pytest.fixture
def table_readme():
    """README in terraform-docs table format."""
    return TABLE_README


@pytest.fixture
def make_module(tmp_path):
    """Build a module directory with a README and Terraform files.

    Returns a function taking the README text and an optional mapping of
    file names to contents (defaults to MODULE_FILES). Returns the README path.
    """
    counter = {"n": 0}

    def _make(readme: str, files: dict[str, str] | None = None) -> Path:
        counter["n"] += 1
        module_dir = tmp_path / f"module{counter['n']}"
        module_dir.mkdir()
        for name, content in (MODULE_FILES if files is None else files).items():
            path = module_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        readme_path = module_dir / "README.md"
        readme_path.write_text(readme)
        return readme_path

    return _make


@pytest.fixture
def document_module(make_module):
    """Consistent module documented in document format."""
    return make_module(DOCUMENT_README)


@pytest.fixture
def table_module(make_module):
    """Consistent module documented in table format."""
    return make_module(TABLE_README)
