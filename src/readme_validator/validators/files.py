"""Required file checks for a Terraform module."""

import logging
from pathlib import Path

from readme_validator.errors import ErrorKind, ValidationError
from readme_validator.validators.base import Validator

logger = logging.getLogger(__name__)

REQUIRED_MODULE_FILES = ("outputs.tf", "variables.tf", "terraform.tf")


class FileValidator(Validator):
    """Check that the README and required module files exist and are not empty.

    Additional files may be given relative to the module directory or as
    absolute paths.
    """

    name = "files"

    def __init__(
        self,
        readme_path: str | Path,
        module_path: str | Path,
        additional_files: list[str] | None = None,
    ):
        self.readme_path = Path(readme_path)
        self.module_path = Path(module_path)
        self.files = [self.readme_path]
        self.files.extend(self.module_path / name for name in REQUIRED_MODULE_FILES)
        for extra in additional_files or []:
            extra_path = Path(extra)
            if not extra_path.is_absolute():
                extra_path = self.module_path / extra_path
            self.files.append(extra_path)

    def validate(self) -> list[ValidationError]:
        errors = []
        for file_path in self.files:
            error = self.validate_file(file_path)
            if error is not None:
                errors.append(error)
        return errors

    @staticmethod
    def validate_file(file_path: Path) -> ValidationError | None:
        """Check one file, returning an error if it is missing, unreadable, or empty."""
        try:
            size = file_path.stat().st_size
        except FileNotFoundError:
            return ValidationError(f"file does not exist: {file_path.name}", ErrorKind.FILE)
        except OSError as e:
            return ValidationError(f"error accessing file: {file_path.name}: {e}", ErrorKind.FILE)

        if size == 0:
            return ValidationError(f"file is empty: {file_path.name}", ErrorKind.FILE)

        logger.debug("File ok: %s (%d bytes)", file_path, size)
        return None


__all__ = ["FileValidator", "REQUIRED_MODULE_FILES"]
