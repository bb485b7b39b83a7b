"""Validator interface shared by every documentation check."""

from abc import ABC, abstractmethod

from readme_validator.errors import ValidationError


class Validator(ABC):
    """A single documentation check.

    validate() reports problems as a list and never raises for extraction
    failures; those become a single reported error instead.
    """

    name: str = "validator"

    @abstractmethod
    def validate(self) -> list[ValidationError]:
        """Run the check and return every problem found."""


__all__ = ["Validator"]
