"""Variable and output documentation checks."""

import logging
from pathlib import Path

from readme_validator.errors import TerraformParseError, ValidationError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.modules.reconciler import reconcile
from readme_validator.modules.terraform_content import TerraformContent
from readme_validator.validators.base import Validator

logger = logging.getLogger(__name__)


class ItemValidator(Validator):
    """Reconcile one Terraform block kind against the README sections documenting it.

    Skipped entirely when none of the sections exist and Terraform declares
    no items of the kind.
    """

    def __init__(
        self,
        markdown: MarkdownContent,
        terraform: TerraformContent,
        item_type: str,
        block_type: str,
        sections: list[str],
        file_name: str | Path,
    ):
        """Initialize item validator.

        Args:
            markdown: Parsed README
            terraform: Terraform extractor
            item_type: Label used in messages, e.g. "Variables"
            block_type: Terraform block kind, e.g. "variable"
            sections: README sections listing the items
            file_name: File declaring the items, e.g. "variables.tf"
        """
        self.markdown = markdown
        self.terraform = terraform
        self.item_type = item_type
        self.block_type = block_type
        self.sections = list(sections)
        self.file_name = file_name
        self.name = item_type.lower()

    def validate(self) -> list[ValidationError]:
        file_path = self.terraform.resolve_item_file(self.file_name)
        try:
            tf_items = self.terraform.extract_items(file_path, self.block_type)
        except TerraformParseError as e:
            return [ValidationError.from_exception(e)]

        section_exists = any(self.markdown.has_section(section) for section in self.sections)
        if not section_exists and not tf_items:
            logger.debug(
                "No %s sections and no %s blocks, skipping", self.item_type, self.block_type
            )
            return []

        md_items = self.markdown.extract_section_items(*self.sections)
        return reconcile(tf_items, md_items, self.item_type)


def variables_validator(markdown: MarkdownContent, terraform: TerraformContent) -> ItemValidator:
    """Build the validator for input variables in the README's format."""
    if markdown.format is MarkdownFormat.TABLE:
        sections = ["Inputs"]
    else:
        sections = ["Required Inputs", "Optional Inputs"]
    return ItemValidator(markdown, terraform, "Variables", "variable", sections, "variables.tf")


def outputs_validator(markdown: MarkdownContent, terraform: TerraformContent) -> ItemValidator:
    """Build the validator for outputs."""
    return ItemValidator(markdown, terraform, "Outputs", "output", ["Outputs"], "outputs.tf")


__all__ = ["ItemValidator", "outputs_validator", "variables_validator"]
