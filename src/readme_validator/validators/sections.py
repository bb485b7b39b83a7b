"""Section presence and spelling checks."""

import logging

from readme_validator.errors import ErrorKind, ValidationError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.modules.section_matcher import is_similar_section
from readme_validator.validators.base import Validator

logger = logging.getLogger(__name__)

COMMON_SECTIONS = ("Resources", "Providers", "Requirements")
TABLE_SECTIONS = ("Inputs", "Outputs")
DOCUMENT_SECTIONS = ("Required Inputs", "Optional Inputs", "Outputs")


def required_sections(format: MarkdownFormat) -> list[str]:
    """Return the sections every README must have in the given format."""
    extra = TABLE_SECTIONS if format is MarkdownFormat.TABLE else DOCUMENT_SECTIONS
    return [*COMMON_SECTIONS, *extra]


class SectionValidator(Validator):
    """Check that required and additional sections exist and are spelled right.

    A section is satisfied by an exact heading. Otherwise the first unclaimed
    heading that looks like a misspelling of it is reported as such, and
    failing that the section is reported missing. Extra and duplicate headings
    are ignored. In table format the section tables' columns are checked too.
    """

    name = "sections"

    def __init__(self, markdown: MarkdownContent, additional_sections: list[str] | None = None):
        self.markdown = markdown
        self.required_sections = required_sections(markdown.format)
        self.additional_sections = list(additional_sections or [])

    def validate(self) -> list[ValidationError]:
        errors: list[ValidationError] = []
        found_sections = self.markdown.get_all_sections()
        claimed: set[str] = set()
        missing: set[str] = set()

        for section in self.required_sections:
            error = self._check_section(section, found_sections, claimed, "required")
            if error is not None:
                if error.kind is ErrorKind.MISSING_SECTION:
                    missing.add(section)
                errors.append(error)

        for section in self.additional_sections:
            if section in claimed or section in missing:
                continue
            error = self._check_section(section, found_sections, claimed, "additional")
            if error is not None:
                errors.append(error)

        if self.markdown.format is MarkdownFormat.TABLE:
            errors.extend(self.markdown.validate_table_columns())

        logger.debug("Section validation found %d problems", len(errors))
        return errors

    @staticmethod
    def _check_section(
        section: str, found_sections: list[str], claimed: set[str], label: str
    ) -> ValidationError | None:
        if section in found_sections:
            claimed.add(section)
            return None

        for found in found_sections:
            if found not in claimed and is_similar_section(found, section):
                claimed.add(found)
                return ValidationError(
                    f"section '{found}' appears to be misspelled (should be '{section}')",
                    ErrorKind.MISSPELLED_SECTION,
                )

        return ValidationError(f"{label} section missing: '{section}'", ErrorKind.MISSING_SECTION)


__all__ = ["SectionValidator", "required_sections"]
