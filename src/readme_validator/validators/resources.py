"""Resource and data source documentation check."""

import logging

from readme_validator.errors import (
    ErrorKind,
    MarkdownExtractionError,
    TerraformParseError,
    ValidationError,
)
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.modules.reconciler import reconcile
from readme_validator.modules.terraform_content import TerraformContent
from readme_validator.validators.base import Validator

logger = logging.getLogger(__name__)

RESOURCES_SECTION = "Resources"


class TerraformDefinitionValidator(Validator):
    """Reconcile declared resources and data sources against README links.

    Outcomes when the README yields nothing:
    - Terraform declares items: each is reported as missing in markdown
    - Terraform declares nothing and there is no Resources heading: no errors
    - Terraform declares nothing but a Resources heading exists: one error
    """

    name = "resources"

    def __init__(self, markdown: MarkdownContent, terraform: TerraformContent):
        self.markdown = markdown
        self.terraform = terraform

    def validate(self) -> list[ValidationError]:
        try:
            tf_resources, tf_data_sources = self.terraform.extract_resources_and_data_sources()
        except TerraformParseError as e:
            return [ValidationError.from_exception(e)]

        try:
            md_resources, md_data_sources = self.markdown.extract_resources_and_data_sources()
        except MarkdownExtractionError as e:
            if tf_resources or tf_data_sources:
                md_resources, md_data_sources = [], []
            elif self.markdown.has_section(RESOURCES_SECTION):
                return [ValidationError.from_exception(e, ErrorKind.EXTRACTION_FAILURE)]
            else:
                logger.debug("No resources declared or documented, skipping")
                return []

        errors = reconcile(tf_resources, md_resources, "Resources")
        errors.extend(reconcile(tf_data_sources, md_data_sources, "Data Sources"))
        return errors


__all__ = ["TerraformDefinitionValidator"]
