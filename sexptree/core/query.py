"""Path queries over Sexp trees.

A path such as ``"foo/bar/bax"`` is split into segments and matched against
``head`` atoms at successive nesting levels: the node the query starts from
must have head ``foo``, one of its tail children head ``bar``, and so on.

``find_first`` returns the leftmost match in document order. ``find_all``
uses the same leftmost search for every segment but the last, then lazily
enumerates each sibling at that final level whose head matches the last
segment.
"""

import logging
import threading
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from cachetools import LRUCache, cached

from ..config import DEFAULT_QUERY_CONFIG, QueryConfig
from ..errors import ConfigurationError

if TYPE_CHECKING:
    from .node import Sexp


logger = logging.getLogger(__name__)

PATH_CACHE_SIZE = 1024

_path_cache: LRUCache = LRUCache(maxsize=PATH_CACHE_SIZE)
_path_cache_lock = threading.Lock()


@cached(cache=_path_cache, lock=_path_cache_lock)
def _split(path: str, separator: str) -> Tuple[str, ...]:
    return tuple(path.split(separator))


def split_path(path: str, config: Optional[QueryConfig] = None) -> Tuple[str, ...]:
    """Split a query path into segments.

    Results are memoized, since the same handful of paths tend to be
    queried over and over.

    Args:
        path: Separator-delimited path, e.g. ``"foo/bar/bax"``
        config: Query settings (default: ``/`` separator)

    Returns:
        Tuple of segments. Doubled or trailing separators yield empty
        segments, which never match a parsed atom.

    Raises:
        ConfigurationError: If ``config`` fails validation
    """
    if config is None:
        config = DEFAULT_QUERY_CONFIG
    config_errors = config.validate()
    if config_errors:
        raise ConfigurationError(config_errors)
    return _split(path, config.separator)


def path_cache_info() -> Dict[str, int]:
    """Report the size of the path-split cache."""
    info = {"currsize": int(_path_cache.currsize), "maxsize": int(_path_cache.maxsize)}
    logger.debug("Path cache: %d/%d entries", info["currsize"], info["maxsize"])
    return info


def clear_path_cache() -> None:
    with _path_cache_lock:
        _path_cache.clear()


class SexpIterator:
    """Lazy, forward-only cursor over matching siblings.

    Holds a borrowed reference to a parent's ``tail`` list, the index of the
    next match and the key being matched. Advancing scans linearly for the
    next sibling whose head equals the key.

    The iterator reads the tree in place and must not be used after the
    tree is modified. Parsed trees are never modified, so in practice it is
    valid for as long as the tree is.
    """

    __slots__ = ("_key", "_siblings", "_position")

    def __init__(self, key, siblings: List['Sexp'], position: int):
        self._key = key
        self._siblings = siblings
        self._position = position

    @classmethod
    def singleton(cls, node: 'Sexp') -> 'SexpIterator':
        """Iterator yielding only ``node``."""
        return cls(node.head, [node], 0)

    @classmethod
    def empty(cls) -> 'SexpIterator':
        """Iterator that is already exhausted."""
        return cls(None, [], 0)

    @property
    def done(self) -> bool:
        return self._position >= len(self._siblings)

    def __iter__(self) -> 'SexpIterator':
        return self

    def __next__(self) -> 'Sexp':
        if self.done:
            raise StopIteration
        node = self._siblings[self._position]
        self._position = self._advance(self._position + 1)
        return node

    def _advance(self, position: int) -> int:
        siblings = self._siblings
        while position < len(siblings):
            head = siblings[position].head
            if head is not None and head == self._key:
                break
            position += 1
        return position

    def __repr__(self) -> str:
        return f"SexpIterator(key={self._key!r}, position={self._position}, size={len(self._siblings)})"


def _find_first(node: 'Sexp', segments: Tuple[str, ...], index: int) -> Optional['Sexp']:
    if node.head is None or node.head != segments[index]:
        return None
    if index + 1 == len(segments):
        return node
    if node.tail is not None:
        for child in node.tail:
            result = _find_first(child, segments, index + 1)
            if result is not None:
                return result
    return None


def _locate(node: 'Sexp', segments: Tuple[str, ...],
            index: int) -> Optional[Tuple['Sexp', Optional[List['Sexp']], int]]:
    """Leftmost match plus where it sits among its siblings.

    Returns:
        (match, siblings, position), where ``siblings`` is the tail list the
        match was found in, or None when the match is the starting node.
        None if nothing matches.
    """
    if node.head is None or node.head != segments[index]:
        return None
    if index + 1 == len(segments):
        return (node, None, 0)
    if node.tail is not None:
        for position, child in enumerate(node.tail):
            found = _locate(child, segments, index + 1)
            if found is not None:
                if found[1] is not None:
                    return found
                return (found[0], node.tail, position)
    return None


def find_first(node: 'Sexp', path: str, config: Optional[QueryConfig] = None) -> Optional['Sexp']:
    """Find the first node in document order whose head chain equals ``path``.

    Args:
        node: Node the search starts at; its head must match the first segment
        path: Separator-delimited head tokens
        config: Query settings

    Returns:
        The matching node, or None if there is none

    Example:
        >>> from sexptree import parse
        >>> tree = parse("(foo bar baz)")
        >>> tree.find_first("foo/bar").head
        Atom('bar')
        >>> tree.find_first("foo/qux") is None
        True
    """
    return _find_first(node, split_path(path, config), 0)


def find_all(node: 'Sexp', path: str, config: Optional[QueryConfig] = None) -> SexpIterator:
    """Lazily enumerate every sibling matching the final segment of ``path``.

    The non-final segments are resolved with the same leftmost search as
    ``find_first``. Only siblings sharing the parent of the first final
    match are enumerated; matches under other parents are not.

    Args:
        node: Node the search starts at
        path: Separator-delimited head tokens
        config: Query settings

    Returns:
        A fresh SexpIterator. It yields one node when the path resolves to
        ``node`` itself and nothing when no node matches.
    """
    segments = split_path(path, config)
    found = _locate(node, segments, 0)
    if found is None:
        return SexpIterator.empty()
    match, siblings, position = found
    if siblings is None:
        return SexpIterator.singleton(match)
    return SexpIterator(segments[-1], siblings, position)
