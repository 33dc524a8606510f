"""Tree-sitter parsing of Kotlin sources.

Extraction walks nodes directly (children, parent, type) instead of going
through the Query API, whose Python surface changed in tree-sitter 0.25.
"""

from collections.abc import Iterator
from functools import cache
from pathlib import Path

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_language

from resolver_check import log
from resolver_check.errors import SourceParseError, SourceReadError

KOTLIN_LANGUAGE = "kotlin"


@cache
def get_parser(language: str = KOTLIN_LANGUAGE) -> Parser:
    return Parser(get_language(language))


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def walk_tree(node: Node) -> Iterator[Node]:
    """Depth-first generator over a node and all its descendants."""
    yield node
    for child in node.children:
        yield from walk_tree(child)


def children_of_type(node: Node, *types: str) -> Iterator[Node]:
    return (child for child in node.children if child.type in types)


def first_child_of_type(node: Node, *types: str) -> Node | None:
    return next(children_of_type(node, *types), None)


def enclosing_node_of_type(node: Node, type_name: str) -> Node | None:
    """Walk up the parent chain looking for a node of the given type."""
    parent = node.parent
    while parent is not None:
        if parent.type == type_name:
            return parent
        parent = parent.parent
    return None


def find_syntax_errors(tree: Tree) -> list[tuple[int, int]]:
    """1-based (line, column) positions of ERROR and MISSING nodes."""
    if not tree.root_node.has_error:
        return []
    return [
        (node.start_point[0] + 1, node.start_point[1] + 1)
        for node in walk_tree(tree.root_node)
        if node.type == "ERROR" or node.is_missing
    ]


def parse_source_file(path: Path, strict: bool = False) -> Tree:
    """Read and parse one Kotlin file.

    Tree-sitter recovers from syntax errors, so a tree is produced even for
    malformed input. Such trees are reported as warnings unless strict is set.

    Raises:
        SourceReadError: If the file cannot be read
        SourceParseError: If the parser fails, or the tree has errors in strict mode
    """
    try:
        source = path.read_bytes()
    except OSError as e:
        raise SourceReadError(f"Cannot read source file ({e.strerror})", path) from e

    parser = get_parser()
    try:
        tree = parser.parse(source)
    except Exception as e:
        raise SourceParseError(f"Kotlin parser failed ({e})", path) from e

    errors = find_syntax_errors(tree)
    if errors:
        positions = ", ".join(f"{line}:{column}" for line, column in errors[:5])
        if strict:
            raise SourceParseError(f"Kotlin syntax error(s) at {positions}", path)
        log.warning(f"Kotlin syntax error(s) at {positions} in {path}, extraction may be incomplete")

    return tree
