"""Exception hierarchy and reported validation errors.

Collaborators (markdown extraction, HCL parsing, config resolution) raise the
ReadmeValidatorError subclasses. Validators catch those at their boundary and
turn them into ValidationError values, which are reported, never raised.

Public API:
    ErrorKind: Category of a reported problem
    ValidationError: A single reported documentation problem
    ReadmeValidatorError: Base exception
    ConfigError: Configuration could not be resolved
    MarkdownExtractionError: README content could not be extracted
    TerraformParseError: Terraform file could not be read or parsed
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Category of a reported documentation problem."""

    MISSING_IN_MARKDOWN = "missing_in_markdown"
    MISSING_IN_TERRAFORM = "missing_in_terraform"
    MISSING_SECTION = "missing_section"
    MISSPELLED_SECTION = "misspelled_section"
    MALFORMED_TABLE = "malformed_table"
    EXTRACTION_FAILURE = "extraction_failure"
    FILE = "file"
    URL = "url"


class ReadmeValidatorError(Exception):
    """Base exception for readme_validator errors."""

    pass


class ConfigError(ReadmeValidatorError):
    """Raised when validator configuration cannot be resolved."""

    pass


class MarkdownExtractionError(ReadmeValidatorError):
    """Raised when expected content cannot be extracted from the README."""

    pass


class TerraformParseError(ReadmeValidatorError):
    """Raised when a Terraform file cannot be read or parsed."""

    pass


@dataclass(eq=False)
class ValidationError(ReadmeValidatorError):
    """A single documentation problem found by a validator.

    Attributes:
        message: Human readable description, also returned by str()
        kind: Category of the problem
    """

    message: str
    kind: ErrorKind = ErrorKind.EXTRACTION_FAILURE

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_exception(
        cls, exc: Exception, kind: ErrorKind = ErrorKind.EXTRACTION_FAILURE
    ) -> "ValidationError":
        """Wrap a collaborator exception as a reported error."""
        return cls(str(exc), kind)


__all__ = [
    "ConfigError",
    "ErrorKind",
    "MarkdownExtractionError",
    "ReadmeValidatorError",
    "TerraformParseError",
    "ValidationError",
]
