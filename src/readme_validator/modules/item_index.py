"""Canonical item index for Terraform/markdown name comparison.

Normalizes raw item names (``type`` or ``type.label``) into a lookup structure
that supports case-insensitive, qualification-aware matching.

Philosophy:
- Built fresh per comparison, never mutated afterwards
- First occurrence of a key wins
- A qualified name supersedes the bare name sharing its base

Public API (the "studs"):
    NormalizedItem: One normalized raw name
    ItemIndex: Lookup structure with exact and by-base queries
    build_item_index: Build an index from raw names
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizedItem:
    """Normalized form of a raw item name.

    Attributes:
        original: Trimmed name as it appeared in the source
        key: Lowercased original, unique within an index
        base: Lowercased portion before the first '.'
        has_dot: Whether the name is qualified (``type.label``)
    """

    original: str
    key: str
    base: str
    has_dot: bool

    @classmethod
    def from_raw(cls, raw: str) -> "NormalizedItem | None":
        """Normalize a raw name, returning None for blank input."""
        original = raw.strip()
        if not original:
            return None
        key = original.lower()
        base, dot, _ = key.partition(".")
        return cls(original=original, key=key, base=base.strip(), has_dot=bool(dot))


@dataclass
class ItemIndex:
    """Index of normalized items keyed by name and by base name."""

    entries: dict[str, NormalizedItem] = field(default_factory=dict)
    by_base: dict[str, list[NormalizedItem]] = field(default_factory=dict)

    def has_match(self, item: NormalizedItem) -> bool:
        """Check whether an item is present, exactly or through its base name.

        Args:
            item: Normalized item from the other side of a comparison

        Returns:
            True if the key exists verbatim or any entry shares its base
        """
        if item.key in self.entries:
            return True
        return bool(self.by_base.get(item.base))

    def items(self) -> list[NormalizedItem]:
        """Return all surviving entries sorted by key."""
        return sorted(self.entries.values(), key=lambda entry: entry.key)

    def __len__(self) -> int:
        return len(self.entries)


def build_item_index(items: list[str] | None) -> ItemIndex:
    """Build an item index from raw names.

    Blank names are skipped and later duplicates (case-insensitive) dropped.
    Once any qualified name exists for a base, bare entries of that base are
    removed.

    Args:
        items: Raw item names, may be None

    Returns:
        ItemIndex with the surviving entries

    Example:
        >>> index = build_item_index(["azurerm_subnet", "azurerm_subnet.this"])
        >>> [item.original for item in index.items()]
        ['azurerm_subnet.this']
    """
    entries: dict[str, NormalizedItem] = {}
    for raw in items or []:
        item = NormalizedItem.from_raw(raw)
        if item is None or item.key in entries:
            continue
        entries[item.key] = item

    qualified_bases = {item.base for item in entries.values() if item.has_dot}
    entries = {
        key: item
        for key, item in entries.items()
        if item.has_dot or item.base not in qualified_bases
    }

    by_base: dict[str, list[NormalizedItem]] = {}
    for item in entries.values():
        by_base.setdefault(item.base, []).append(item)

    return ItemIndex(entries=entries, by_base=by_base)


__all__ = ["ItemIndex", "NormalizedItem", "build_item_index"]
