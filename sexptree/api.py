"""High-level API for sexptree.

Simple functional wrappers around the parser and the query engine for the
common cases: parse a document, look a path up, count or collect matches.
"""

from typing import Any, Dict, Iterator, Optional, Union

from .config import ParseConfig, QueryConfig, TreeRepresentation
from .core.atom import Atom
from .core.builder import SexpBuilder
from .core.node import Sexp
from .core.parser import parse
from .core.query import SexpIterator, find_all, find_first
from .core.vector import VectorSexp


TreeOrData = Union[Sexp, str, bytes]


def parse_sexp(
    data: Union[str, bytes],
    representation: Union[TreeRepresentation, str] = TreeRepresentation.HEAD_TAIL,
    whitespace: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> SexpBuilder:
    """Parse a document without building a ParseConfig by hand.

    Args:
        data: The document
        representation: ``"sexp"`` (head/tail, default) or ``"vector"``
        whitespace: Token delimiters (default: space, tab, newline)
        max_depth: Maximum list nesting (default: unlimited)

    Returns:
        Root Sexp or VectorSexp

    Example:
        >>> tree = parse_sexp("(point (x 1) (y 2))")
        >>> str(tree.find_first("point/y").get_child(0).head)
        '2'
    """
    config_kwargs: Dict[str, Any] = {}
    if whitespace is not None:
        config_kwargs['whitespace'] = whitespace
    if max_depth is not None:
        config_kwargs['max_depth'] = max_depth

    tree_type = _tree_type(_parse_representation(representation))
    return parse(data, tree_type, ParseConfig(**config_kwargs))


def query_first(tree: TreeOrData, path: str, separator: str = "/") -> Optional[Sexp]:
    """Return the first node matching ``path``, parsing ``tree`` first if needed.

    Args:
        tree: A parsed Sexp, or a document to parse
        path: Path of head tokens
        separator: Path separator

    Returns:
        Matching node or None
    """
    return find_first(_ensure_tree(tree), path, QueryConfig(separator=separator))


def query_all(tree: TreeOrData, path: str, separator: str = "/") -> SexpIterator:
    """Iterate every sibling matching the final segment of ``path``.

    Args:
        tree: A parsed Sexp, or a document to parse
        path: Path of head tokens
        separator: Path separator

    Returns:
        Lazy iterator over the matches
    """
    return find_all(_ensure_tree(tree), path, QueryConfig(separator=separator))


def count_matches(tree: TreeOrData, path: str, separator: str = "/") -> int:
    """Count the nodes ``query_all`` would yield."""
    count = 0
    for _ in query_all(tree, path, separator):
        count += 1
    return count


def iter_atoms(tree: Sexp) -> Iterator[Atom]:
    """Yield every atom of the tree in document order.

    Example:
        >>> [str(a) for a in iter_atoms(parse_sexp("(a (b c) d)"))]
        ['a', 'b', 'c', 'd']
    """
    for node, _ in tree.walk():
        if node.head is not None:
            yield node.head


def get_tree_stats(tree: Sexp) -> Dict[str, Any]:
    """Get statistics about a parsed tree.

    Args:
        tree: Root of the tree

    Returns:
        Dictionary with total_nodes, leaf_nodes, internal_nodes, atoms,
        quoted_atoms, max_depth and a per-depth node count
    """
    stats: Dict[str, Any] = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'atoms': 0,
        'quoted_atoms': 0,
        'max_depth': 0,
        'depths': {},
    }

    for node, depth in tree.walk():
        stats['total_nodes'] += 1
        if node.is_leaf():
            stats['leaf_nodes'] += 1
        if node.head is not None:
            stats['atoms'] += 1
            if node.head.is_quoted():
                stats['quoted_atoms'] += 1
        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


# Helper functions

def _ensure_tree(tree: TreeOrData) -> Sexp:
    if isinstance(tree, (str, bytes)):
        return parse(tree)
    if not isinstance(tree, Sexp):
        raise TypeError(f"Expected a Sexp or a document, got {type(tree).__name__}")
    return tree


def _tree_type(representation: TreeRepresentation):
    if representation is TreeRepresentation.VECTOR:
        return VectorSexp
    return Sexp


def _parse_representation(representation: Union[TreeRepresentation, str]) -> TreeRepresentation:
    """Parse representation from string or enum.

    Args:
        representation: Representation as enum or string

    Returns:
        TreeRepresentation enum value
    """
    if isinstance(representation, TreeRepresentation):
        return representation

    representation_map = {
        'sexp': TreeRepresentation.HEAD_TAIL,
        'head_tail': TreeRepresentation.HEAD_TAIL,
        'vector': TreeRepresentation.VECTOR,
        'vector_sexp': TreeRepresentation.VECTOR,
    }

    key = representation.lower() if isinstance(representation, str) else str(representation)
    if key in representation_map:
        return representation_map[key]

    raise ValueError(f"Unknown tree representation: {representation}")
