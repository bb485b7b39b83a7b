"""Document format detection for terraform-docs style READMEs.

Scores structural signals to decide whether items are documented as table
rows (TABLE) or as level-3 headings under each section (DOCUMENT).

Philosophy:
- Each known section votes independently by looking at what follows it
- A level-3 heading anywhere is a strong global hint for DOCUMENT
- Secondary heuristics only break exact ties
- A final tie resolves to DOCUMENT

Public API (the "studs"):
    MarkdownFormat: Documentation layout enum
    FormatDetection: Detection result with scores and confidence
    FormatDetector: Scores a parsed document
"""

import logging
from dataclasses import dataclass
from enum import Enum

from markdown_it.tree import SyntaxTreeNode

from readme_validator.modules.markdown_tree import (
    WalkStatus,
    extract_text,
    find_nodes,
    heading_level,
    next_sibling,
    walk,
)
from readme_validator.modules.section_matcher import matches_section_name

logger = logging.getLogger(__name__)


class MarkdownFormat(str, Enum):
    """Layout used to document module items."""

    DOCUMENT = "document"
    TABLE = "table"
    AUTO = "auto"

    @classmethod
    def from_string(cls, value: str) -> "MarkdownFormat":
        """Parse a format name case-insensitively.

        Raises:
            ValueError: If value names no known format
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown markdown format: {value}")


@dataclass(frozen=True)
class FormatDetection:
    """Outcome of format detection.

    Attributes:
        format: Chosen format, DOCUMENT or TABLE
        confidence: |table - heading| / (table + heading), 0.0 without signals
        table_score: Final table-style score
        heading_score: Final heading-style score
    """

    format: MarkdownFormat
    confidence: float
    table_score: int
    heading_score: int


class FormatDetector:
    """Decide between table-style and heading-style documentation."""

    SECTION_NAMES = (
        "Inputs",
        "Required Inputs",
        "Optional Inputs",
        "Outputs",
        "Resources",
        "Requirements",
        "Providers",
    )
    GLOBAL_HEADING_BONUS = 2
    TYPE_KEYWORDS = ("object(", "list(", "map(")
    CODE_NODE_TYPES = ("fence", "code_block")

    def detect(self, root: SyntaxTreeNode) -> FormatDetection:
        """Score the document and pick a format.

        Args:
            root: Parsed document tree

        Returns:
            FormatDetection with format DOCUMENT or TABLE
        """
        table_score = 0
        heading_score = 0
        has_h3 = False

        def visit(node: SyntaxTreeNode) -> WalkStatus:
            nonlocal table_score, heading_score, has_h3
            level = heading_level(node)
            if level is None:
                return WalkStatus.CONTINUE
            if level == 3:
                has_h3 = True
            elif level == 2 and self._is_known_section(extract_text(node)):
                signal = self._classify_section(node)
                if signal is MarkdownFormat.TABLE:
                    table_score += 1
                elif signal is MarkdownFormat.DOCUMENT:
                    heading_score += 1
            return WalkStatus.SKIP_CHILDREN

        walk(root, visit)

        if has_h3:
            heading_score += self.GLOBAL_HEADING_BONUS

        if table_score == heading_score:
            if self._has_type_annotations(root):
                heading_score += 1
            if len(find_nodes(root, "table")) > 1:
                table_score += 1

        chosen = MarkdownFormat.TABLE if table_score > heading_score else MarkdownFormat.DOCUMENT
        total = table_score + heading_score
        confidence = abs(table_score - heading_score) / total if total else 0.0

        logger.debug(
            "Format detection: table=%d heading=%d -> %s (confidence %.2f)",
            table_score,
            heading_score,
            chosen.value,
            confidence,
        )
        return FormatDetection(
            format=chosen,
            confidence=confidence,
            table_score=table_score,
            heading_score=heading_score,
        )

    def _is_known_section(self, text: str) -> bool:
        return any(matches_section_name(text, name) for name in self.SECTION_NAMES)

    def _classify_section(self, heading: SyntaxTreeNode) -> MarkdownFormat | None:
        """Return the style signalled by the nodes right after a section heading."""
        following = next_sibling(heading)
        if following is None:
            return None
        if following.type == "table":
            return MarkdownFormat.TABLE
        # A single introduction paragraph may precede the first item heading
        if following.type == "paragraph":
            following = next_sibling(following)
        if heading_level(following) == 3:
            return MarkdownFormat.DOCUMENT
        return None

    def _has_type_annotations(self, root: SyntaxTreeNode) -> bool:
        for node_type in self.CODE_NODE_TYPES:
            for block in find_nodes(root, node_type):
                if any(keyword in block.content for keyword in self.TYPE_KEYWORDS):
                    return True
        return False


__all__ = ["FormatDetection", "FormatDetector", "MarkdownFormat"]
