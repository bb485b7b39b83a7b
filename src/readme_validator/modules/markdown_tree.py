"""Parsing and walking primitives for markdown syntax trees.

Wraps markdown-it-py so the rest of the package only deals with
``SyntaxTreeNode`` objects and a small visitor protocol.

Public API:
    WalkStatus: Visitor continuation value
    parse_markdown: Parse text into a SyntaxTreeNode tree
    walk: Depth-first pre-order traversal driven by WalkStatus
    extract_text: Visible text of a node (text and inline code)
    heading_level: Level of a heading node, None for other nodes
    next_sibling: Following sibling of a node
    iter_siblings_after: All following siblings of a node
    find_nodes: Collect nodes of a given type
"""

from collections.abc import Callable, Iterator
from enum import Enum

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

TEXT_NODE_TYPES = frozenset({"text", "text_special", "code_inline"})


class WalkStatus(Enum):
    """Continuation value returned by a walk visitor."""

    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    STOP = "stop"


Visitor = Callable[[SyntaxTreeNode], WalkStatus | None]


def parse_markdown(text: str) -> SyntaxTreeNode:
    """Parse markdown text into a syntax tree.

    Uses the CommonMark preset with GFM tables enabled. Inline HTML is kept
    as ``html_inline``/``html_block`` nodes.
    """
    parser = MarkdownIt("commonmark").enable("table")
    return SyntaxTreeNode(parser.parse(text))


def walk(node: SyntaxTreeNode, visitor: Visitor) -> WalkStatus:
    """Visit node and its descendants depth-first, pre-order.

    The visitor decides how traversal continues: CONTINUE descends into the
    children, SKIP_CHILDREN moves on to the next sibling, STOP ends the whole
    walk. A visitor returning None is treated as CONTINUE.

    Args:
        node: Root of the subtree to walk
        visitor: Callable invoked once per node

    Returns:
        STOP if the visitor stopped the walk, CONTINUE otherwise
    """
    status = visitor(node) or WalkStatus.CONTINUE
    if status is WalkStatus.STOP:
        return WalkStatus.STOP
    if status is WalkStatus.SKIP_CHILDREN:
        return WalkStatus.CONTINUE

    for child in node.children:
        if walk(child, visitor) is WalkStatus.STOP:
            return WalkStatus.STOP
    return WalkStatus.CONTINUE


def extract_text(node: SyntaxTreeNode) -> str:
    """Concatenate the text and inline-code content below node.

    HTML fragments such as ``<a name="input_x"></a>`` are not included.
    """
    parts: list[str] = []

    def collect(current: SyntaxTreeNode) -> WalkStatus:
        if current.type in TEXT_NODE_TYPES:
            parts.append(current.content)
        return WalkStatus.CONTINUE

    walk(node, collect)
    return "".join(parts)


def heading_level(node: SyntaxTreeNode | None) -> int | None:
    """Return 1-6 for heading nodes, None for anything else."""
    if node is None or node.type != "heading":
        return None
    return int(node.tag[1:])


def next_sibling(node: SyntaxTreeNode) -> SyntaxTreeNode | None:
    return node.next_sibling


def iter_siblings_after(node: SyntaxTreeNode) -> Iterator[SyntaxTreeNode]:
    """Yield every sibling that follows node, in document order."""
    current = node.next_sibling
    while current is not None:
        yield current
        current = current.next_sibling


def find_nodes(root: SyntaxTreeNode, node_type: str) -> list[SyntaxTreeNode]:
    """Collect every node of node_type below root, without descending into matches."""
    found: list[SyntaxTreeNode] = []

    def collect(current: SyntaxTreeNode) -> WalkStatus:
        if current.type == node_type:
            found.append(current)
            return WalkStatus.SKIP_CHILDREN
        return WalkStatus.CONTINUE

    walk(root, collect)
    return found


__all__ = [
    "WalkStatus",
    "extract_text",
    "find_nodes",
    "heading_level",
    "iter_siblings_after",
    "next_sibling",
    "parse_markdown",
    "walk",
]
