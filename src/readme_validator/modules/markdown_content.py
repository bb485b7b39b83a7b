"""Markdown content extraction for terraform-docs style READMEs.

Parses the README once and answers the questions the validators ask: which
sections exist, which items a section documents, which resources and data
sources are linked, and whether section tables have the expected columns.

Philosophy:
- One parse per document, indexes built up front
- Section lookups are fuzzy and memoized per instance
- Item extraction follows the active format (TABLE or DOCUMENT)
- Provider prefixes are always passed in, never assumed

Public API (the "studs"):
    MarkdownContent: Query object over one parsed README
    TableContract: Required and optional columns for a section table
    TABLE_CONTRACTS: Column contracts checked in table format
"""

import logging
import re
from dataclasses import dataclass

from markdown_it.tree import SyntaxTreeNode

from readme_validator.errors import ErrorKind, MarkdownExtractionError, ValidationError
from readme_validator.modules.format_detector import (
    FormatDetection,
    FormatDetector,
    MarkdownFormat,
)
from readme_validator.modules.markdown_tree import (
    WalkStatus,
    extract_text,
    heading_level,
    iter_siblings_after,
    parse_markdown,
    walk,
)
from readme_validator.modules.section_matcher import matches_section_name

logger = logging.getLogger(__name__)

INPUT_ANCHOR_RE = re.compile(r'(?i)<a\s+name="input_([^"\s]+)"')
OUTPUT_ANCHOR_RE = re.compile(r'(?i)<a\s+name="output_([^"\s]+)"')

ANCHOR_PATTERNS = {"input": INPUT_ANCHOR_RE, "output": OUTPUT_ANCHOR_RE}

DATA_SOURCE_MARKER = "/data-sources/"
SECTION_LEVEL = 2
ITEM_LEVEL = 3


@dataclass(frozen=True)
class TableContract:
    """Columns a section table must and may have."""

    required: tuple[str, ...]
    optional: tuple[str, ...] = ()

    @property
    def columns(self) -> tuple[str, ...]:
        return self.required + self.optional


TABLE_CONTRACTS: dict[str, TableContract] = {
    "Resources": TableContract(required=("Name", "Type")),
    "Providers": TableContract(required=("Name", "Version")),
    "Requirements": TableContract(required=("Name", "Version")),
    "Inputs": TableContract(
        required=("Name", "Description", "Required"), optional=("Type", "Default")
    ),
    "Outputs": TableContract(required=("Name", "Description")),
}


class MarkdownContent:
    """Query object over a single parsed README.

    Instances memoize per-document state and must not be shared between
    validations of different documents.

    Example:
        >>> content = MarkdownContent(readme_text, provider_prefixes=["azurerm_"])
        >>> content.has_section("Resources")
        True
        >>> resources, data_sources = content.extract_resources_and_data_sources()
    """

    def __init__(
        self,
        data: str,
        format: MarkdownFormat = MarkdownFormat.AUTO,
        provider_prefixes: list[str] | None = None,
    ):
        """Parse the README and build heading and anchor indexes.

        Args:
            data: Raw README text
            format: DOCUMENT, TABLE, or AUTO to detect from the content
            provider_prefixes: Resource name prefixes to recognize, e.g. ["azurerm_"]
        """
        self._data = data
        self._root = parse_markdown(data)
        self._provider_prefixes = [p.lower() for p in (provider_prefixes or []) if p]

        self._sections: dict[str, bool] = {}
        self._section_matches: dict[str, list[SyntaxTreeNode]] = {}
        self._h2_headings: list[tuple[SyntaxTreeNode, str]] = []
        self._anchor_types: dict[str, set[str]] = {}

        self._index_headings()
        self._index_anchors()

        self._detection: FormatDetection | None = None
        if format is MarkdownFormat.AUTO:
            self._detection = FormatDetector().detect(self._root)
            self._format = self._detection.format
        else:
            self._format = format

        logger.debug(
            "Parsed README: %d sections, %d anchors, format=%s",
            len(self._h2_headings),
            len(self._anchor_types),
            self._format.value,
        )

    @property
    def content(self) -> str:
        """Raw README text."""
        return self._data

    @property
    def format(self) -> MarkdownFormat:
        """Active format, never AUTO."""
        return self._format

    @property
    def detection(self) -> FormatDetection | None:
        """Detection result, None when the format was given explicitly."""
        return self._detection

    def has_section(self, name: str) -> bool:
        """Check whether any level-2 heading fuzzy-matches name.

        Results are cached per requested name.
        """
        if name in self._sections:
            return self._sections[name]
        found = bool(self._match_section_headings(name))
        self._sections[name] = found
        return found

    def get_all_sections(self) -> list[str]:
        """Return the text of every level-2 heading in document order.

        Duplicates are preserved.
        """
        return [text for _, text in self._h2_headings if text]

    def extract_section_items(self, *section_names: str) -> list[str]:
        """Extract documented item names from the named sections.

        Matching headings are read with the active format's strategy. When no
        heading matches, the raw text is scanned for ``input_``/``output_``
        anchors instead. In both cases items whose anchors contradict the
        sections' input/output intent are dropped.

        Args:
            *section_names: Section names to look for, matched fuzzily

        Returns:
            Item names in document order
        """
        headings = self._collect_section_headings(section_names)
        if not headings:
            items = self._fallback_section_items(section_names)
            logger.debug("No heading for %s, anchor fallback found %d", section_names, len(items))
        else:
            items = []
            for heading in headings:
                if self._format is MarkdownFormat.TABLE:
                    items.extend(self._items_from_table(heading))
                else:
                    items.extend(self._items_under_heading(heading))

        return self._filter_items_by_anchor_type(section_names, items)

    def extract_resources_and_data_sources(self) -> tuple[list[str], list[str]]:
        """Extract resource and data source names from provider-prefixed links.

        Links under the Resources section are used, or links anywhere in the
        document when there is no Resources heading. Each link contributes its
        full name and its base type. Links to ``/data-sources/`` pages are
        data sources.

        Returns:
            Tuple of (resources, data_sources)

        Raises:
            MarkdownExtractionError: If neither list has any entry
        """
        resources: list[str] = []
        data_sources: list[str] = []

        headings = self._collect_section_headings(("Resources",))
        if headings:
            for heading in headings:
                for node in self._section_body(heading, heading_level(heading)):
                    self._collect_resource_links(node, resources, data_sources)
        else:
            self._collect_resource_links(self._root, resources, data_sources)

        if not resources and not data_sources:
            raise MarkdownExtractionError("resources section not found or empty")

        logger.debug(
            "Extracted %d resources and %d data sources from README",
            len(resources),
            len(data_sources),
        )
        return resources, data_sources

    def validate_table_columns(self) -> list[ValidationError]:
        """Check the column headers of every section table with a contract.

        Only meaningful in TABLE format; sections that are absent are skipped.

        Returns:
            List of MALFORMED_TABLE errors
        """
        errors: list[ValidationError] = []
        for section, contract in TABLE_CONTRACTS.items():
            for heading in self._match_section_headings(section):
                table = self._first_table_after(heading)
                if table is None:
                    errors.append(
                        ValidationError(
                            f"missing table after header: {section}", ErrorKind.MALFORMED_TABLE
                        )
                    )
                    continue

                columns = self._table_header_cells(table)
                if columns is None:
                    errors.append(
                        ValidationError(
                            f"table has no header row under header: {section}",
                            ErrorKind.MALFORMED_TABLE,
                        )
                    )
                    continue

                errors.extend(self._validate_columns(section, contract, columns))
        return errors

    # Indexing

    def _index_headings(self) -> None:
        def visit(node: SyntaxTreeNode) -> WalkStatus:
            if node.type != "heading":
                return WalkStatus.CONTINUE
            if heading_level(node) == SECTION_LEVEL:
                self._h2_headings.append((node, extract_text(node).strip()))
            return WalkStatus.SKIP_CHILDREN

        walk(self._root, visit)

    def _index_anchors(self) -> None:
        for anchor_type, pattern in ANCHOR_PATTERNS.items():
            for match in pattern.finditer(self._data):
                name = match.group(1).strip().lower()
                if name:
                    self._anchor_types.setdefault(name, set()).add(anchor_type)

    # Section lookup

    def _match_section_headings(self, name: str) -> list[SyntaxTreeNode]:
        key = name.strip()
        if not key:
            return []
        if key not in self._section_matches:
            self._section_matches[key] = [
                node for node, text in self._h2_headings if matches_section_name(text, name)
            ]
        return self._section_matches[key]

    def _collect_section_headings(self, section_names) -> list[SyntaxTreeNode]:
        seen: set[int] = set()
        headings: list[SyntaxTreeNode] = []
        for name in section_names:
            for heading in self._match_section_headings(name):
                if id(heading) in seen:
                    continue
                seen.add(id(heading))
                headings.append(heading)
        return headings

    def _section_body(self, heading: SyntaxTreeNode, max_level: int | None):
        """Yield the siblings after heading up to the next heading of level <= max_level."""
        for node in iter_siblings_after(heading):
            level = heading_level(node)
            if level is not None and max_level is not None and level <= max_level:
                return
            yield node

    # Item strategies

    def _items_under_heading(self, heading: SyntaxTreeNode) -> list[str]:
        items = []
        for node in self._section_body(heading, heading_level(heading)):
            if heading_level(node) == ITEM_LEVEL:
                name = self._item_name_from_heading(node)
                if name:
                    items.append(name)
        return items

    @staticmethod
    def _item_name_from_heading(heading: SyntaxTreeNode) -> str:
        name = extract_text(heading).strip().strip(" []")
        name = name.removeprefix('<a name="input_').removeprefix('<a name="output_')
        name = name.removesuffix('"></a>').removesuffix("</a>")
        return name.strip()

    def _items_from_table(self, heading: SyntaxTreeNode) -> list[str]:
        table = self._first_table_after(heading)
        if table is None:
            return []

        items = []
        for row in self._table_rows(table, "tbody"):
            cells = [child for child in row.children if child.type in ("td", "th")]
            if not cells:
                continue
            name = extract_text(cells[0]).strip().replace("`", "").strip()
            if name and name != "Name":
                items.append(name)
        return items

    def _fallback_section_items(self, section_names) -> list[str]:
        lowered = [name.lower() for name in section_names]
        wanted = [
            anchor_type
            for anchor_type in ANCHOR_PATTERNS
            if any(anchor_type in name for name in lowered)
        ]

        items: list[str] = []
        for anchor_type in wanted:
            for match in ANCHOR_PATTERNS[anchor_type].finditer(self._data):
                name = match.group(1).strip()
                if name and name not in items:
                    items.append(name)
        return items

    def _filter_items_by_anchor_type(self, section_names, items: list[str]) -> list[str]:
        expected = self._expected_anchor_type(section_names)
        if not items or expected is None:
            return items
        return [
            item
            for item in items
            if not self._anchor_types.get(item.lower())
            or expected in self._anchor_types[item.lower()]
        ]

    @staticmethod
    def _expected_anchor_type(section_names) -> str | None:
        for name in section_names:
            lower = name.lower()
            if "input" in lower:
                return "input"
            if "output" in lower:
                return "output"
        return None

    # Resources

    def _collect_resource_links(
        self, root: SyntaxTreeNode, resources: list[str], data_sources: list[str]
    ) -> None:
        def visit(node: SyntaxTreeNode) -> WalkStatus:
            if node.type != "link":
                return WalkStatus.CONTINUE
            self._append_resource_from_link(node, resources, data_sources)
            return WalkStatus.SKIP_CHILDREN

        walk(root, visit)

    def _append_resource_from_link(
        self, link: SyntaxTreeNode, resources: list[str], data_sources: list[str]
    ) -> None:
        text = extract_text(link)
        if not self._has_provider_prefix(text):
            return

        name = text.split("]", 1)[0].removeprefix("[")
        base = name.split(".", 1)[0]
        destination = str(link.attrs.get("href", ""))
        target = data_sources if DATA_SOURCE_MARKER in destination else resources
        for entry in (name, base):
            if entry not in target:
                target.append(entry)

    def _has_provider_prefix(self, text: str) -> bool:
        lowered = text.lower()
        return any(lowered.startswith(prefix) for prefix in self._provider_prefixes)

    # Tables

    def _first_table_after(self, heading: SyntaxTreeNode) -> SyntaxTreeNode | None:
        for node in self._section_body(heading, SECTION_LEVEL):
            if node.type == "table":
                return node
        return None

    @staticmethod
    def _table_rows(table: SyntaxTreeNode, section_type: str) -> list[SyntaxTreeNode]:
        rows = []
        for part in table.children:
            if part.type == section_type:
                rows.extend(row for row in part.children if row.type == "tr")
        return rows

    def _table_header_cells(self, table: SyntaxTreeNode) -> list[str] | None:
        header_rows = self._table_rows(table, "thead")
        if not header_rows:
            return None
        return [
            extract_text(cell).strip()
            for cell in header_rows[0].children
            if cell.type in ("th", "td")
        ]

    @staticmethod
    def _validate_columns(
        section: str, contract: TableContract, columns: list[str]
    ) -> list[ValidationError]:
        errors = []
        for column in columns:
            if column in contract.columns:
                continue
            message = f"unexpected column '{column}' in table under header: {section}"
            suggestion = _suggest_column(column, contract.columns)
            if suggestion:
                message += f" (did you mean '{suggestion}'?)"
            errors.append(ValidationError(message, ErrorKind.MALFORMED_TABLE))

        for required in contract.required:
            if required not in columns:
                errors.append(
                    ValidationError(
                        f"missing required column '{required}' in table under header: {section}",
                        ErrorKind.MALFORMED_TABLE,
                    )
                )
        return errors


def _suggest_column(column: str, candidates: tuple[str, ...]) -> str | None:
    """Return the contract column an unexpected header most likely meant."""
    lowered = column.strip().lower()
    if not lowered:
        return None
    for candidate in candidates:
        if candidate.lower().startswith(lowered):
            return candidate
    for candidate in candidates:
        if matches_section_name(column, candidate):
            return candidate
    return None


__all__ = ["MarkdownContent", "TABLE_CONTRACTS", "TableContract"]
