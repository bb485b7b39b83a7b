"""Bidirectional diff of Terraform items against documented items.

Public API:
    reconcile: Compare two raw name lists and report one-sided items
"""

import logging

from readme_validator.errors import ErrorKind, ValidationError
from readme_validator.modules.item_index import build_item_index

logger = logging.getLogger(__name__)


def reconcile(tf_items: list[str], md_items: list[str], item_type: str) -> list[ValidationError]:
    """Report every item present on exactly one side.

    Both lists go through build_item_index, so matching is case-insensitive
    and a qualified name matches its bare type. Errors for the Terraform side
    come first, each side sorted by normalized key.

    Args:
        tf_items: Names extracted from Terraform files
        md_items: Names extracted from the README
        item_type: Label used in messages, e.g. "Variables" or "Resources"

    Returns:
        List of ValidationError, empty when both sides agree

    Example:
        >>> errors = reconcile(["azurerm_vnet.main"], [], "Resources")
        >>> str(errors[0])
        'Resources in Terraform but missing in markdown: azurerm_vnet.main'
    """
    tf_index = build_item_index(tf_items)
    md_index = build_item_index(md_items)

    errors = [
        ValidationError(
            f"{item_type} in Terraform but missing in markdown: {item.original}",
            ErrorKind.MISSING_IN_MARKDOWN,
        )
        for item in tf_index.items()
        if not md_index.has_match(item)
    ]
    errors.extend(
        ValidationError(
            f"{item_type} in markdown but missing in Terraform: {item.original}",
            ErrorKind.MISSING_IN_TERRAFORM,
        )
        for item in md_index.items()
        if not tf_index.has_match(item)
    )

    logger.debug(
        "Reconciled %s: %d terraform, %d markdown, %d mismatches",
        item_type,
        len(tf_index),
        len(md_index),
        len(errors),
    )
    return errors


__all__ = ["reconcile"]
