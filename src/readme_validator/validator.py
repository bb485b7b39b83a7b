"""Top-level README validation.

Public API:
    ReadmeValidator: Resolves options, builds extractors, runs every validator
    build_default_validators: Compose the standard validator list
"""

import logging
from pathlib import Path

from readme_validator.config_manager import ConfigManager, Options
from readme_validator.errors import ConfigError, ValidationError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.modules.terraform_content import TerraformContent
from readme_validator.validators import (
    FileValidator,
    SectionValidator,
    TerraformDefinitionValidator,
    URLValidator,
    Validator,
    outputs_validator,
    variables_validator,
)

logger = logging.getLogger(__name__)


def build_default_validators(
    options: Options, markdown: MarkdownContent, terraform: TerraformContent
) -> list[Validator]:
    """Compose the validators enabled in options, in reporting order.

    Args:
        options: Resolved options
        markdown: Parsed README
        terraform: Terraform extractor for the module

    Returns:
        List of validators; skipped checks are left out
    """
    candidates: list[tuple[bool, Validator]] = [
        (options.skip_sections, SectionValidator(markdown, options.additional_sections)),
        (
            options.skip_files,
            FileValidator(options.readme_path, options.module_path, options.additional_files),
        ),
        (options.skip_urls, URLValidator(markdown)),
        (options.skip_resources, TerraformDefinitionValidator(markdown, terraform)),
        (options.skip_variables, variables_validator(markdown, terraform)),
        (options.skip_outputs, outputs_validator(markdown, terraform)),
    ]

    validators = []
    for skipped, validator in candidates:
        if skipped:
            logger.debug("Skipping %s validator", validator.name)
            continue
        validators.append(validator)
    return validators


class ReadmeValidator:
    """Validate a Terraform module README against the module's code.

    Example:
        >>> validator = ReadmeValidator(Options(readme_path=Path("README.md"),
        ...                                     provider_prefixes=["azurerm_"]))
        >>> for error in validator.validate():
        ...     print(error)
    """

    def __init__(
        self,
        options: Options | None = None,
        validators: list[Validator] | None = None,
    ):
        """Resolve configuration and build the validator list.

        Args:
            options: Options to use; resolved against the environment when
                readme_path or module_path is still unset
            validators: Replace the default validator list

        Raises:
            ConfigError: If no README path is available or the README cannot be read
        """
        options = options or Options()
        if options.readme_path is None or options.module_path is None:
            options = ConfigManager.finalize(options)
        self.options = options
        self.readme_path = Path(options.readme_path)
        self.module_path = Path(options.module_path)

        try:
            data = self.readme_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to read file: {e}") from e

        self.markdown = MarkdownContent(data, options.format, options.provider_prefixes)
        self.terraform = TerraformContent(self.module_path, options.scan_mode)

        if validators is None:
            validators = build_default_validators(options, self.markdown, self.terraform)
        self.validators = validators

        logger.debug(
            "Validating %s against %s (%s format, %d validators)",
            self.readme_path,
            self.module_path,
            self.format.value,
            len(self.validators),
        )

    @property
    def format(self) -> MarkdownFormat:
        """Format the README is validated in."""
        return self.markdown.format

    def validate(self) -> list[ValidationError]:
        """Run every validator and return all errors in validator order."""
        errors: list[ValidationError] = []
        for validator in self.validators:
            found = validator.validate()
            logger.debug("%s: %d errors", validator.name, len(found))
            errors.extend(found)
        return errors

    def validate_fail_fast(self) -> ValidationError | None:
        """Run validators in order and return the first error, if any."""
        for validator in self.validators:
            found = validator.validate()
            if found:
                return found[0]
        return None


__all__ = ["ReadmeValidator", "build_default_validators"]
