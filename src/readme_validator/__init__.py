"""readme_validator - Terraform module README consistency checker

Philosophy:
- Report every mismatch, never stop at the first
- Brick architecture (self-contained modules)
- Parsers are collaborators, reconciliation is the core

Cross-references the resources, data sources, variables, and outputs a
Terraform module declares with those its terraform-docs style README lists.
"""

__version__ = "0.1.0"

from readme_validator.config_manager import ConfigManager, Options  # noqa: E402
from readme_validator.errors import (  # noqa: E402
    ConfigError,
    ErrorKind,
    MarkdownExtractionError,
    ReadmeValidatorError,
    TerraformParseError,
    ValidationError,
)
from readme_validator.modules.format_detector import MarkdownFormat  # noqa: E402
from readme_validator.modules.terraform_content import ScanMode  # noqa: E402
from readme_validator.validator import ReadmeValidator, build_default_validators  # noqa: E402

__all__ = [
    "ConfigError",
    "ConfigManager",
    "ErrorKind",
    "MarkdownExtractionError",
    "MarkdownFormat",
    "Options",
    "ReadmeValidator",
    "ReadmeValidatorError",
    "ScanMode",
    "TerraformParseError",
    "ValidationError",
    "__version__",
    "build_default_validators",
]
