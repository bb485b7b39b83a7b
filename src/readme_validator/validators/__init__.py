"""Documentation validators run by ReadmeValidator."""

from readme_validator.validators.base import Validator
from readme_validator.validators.files import FileValidator
from readme_validator.validators.items import ItemValidator, outputs_validator, variables_validator
from readme_validator.validators.resources import TerraformDefinitionValidator
from readme_validator.validators.sections import SectionValidator
from readme_validator.validators.urls import URLValidator

__all__ = [
    "FileValidator",
    "ItemValidator",
    "SectionValidator",
    "TerraformDefinitionValidator",
    "URLValidator",
    "Validator",
    "outputs_validator",
    "variables_validator",
]
