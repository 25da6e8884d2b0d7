"""VectorSexp: uniform-children alternative to Sexp.

Each node holds either an atom or a list of child nodes. There is no
head/tail split: ``(a b c)`` is a list node whose children are the atom
nodes ``a``, ``b`` and ``c``. Use it when canonical list semantics are more
convenient than the head/tail convention.
"""

import weakref
from typing import List, Optional, Tuple, Union

from .atom import Atom
from .builder import SexpBuilder
from .query import split_path
from ..config import QueryConfig


class VectorSexp(SexpBuilder):
    """Tagged node: ``data`` is an Atom or a list of VectorSexp."""

    __slots__ = ("data", "_parent", "__weakref__")

    def __init__(self, data: Union[Atom, List['VectorSexp'], None] = None,
                 parent: Optional['VectorSexp'] = None):
        self.data: Union[Atom, List['VectorSexp']] = [] if data is None else data
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def is_atom(self) -> bool:
        return isinstance(self.data, Atom)

    @property
    def atom(self) -> Optional[Atom]:
        """The atom held by this node, or None for a list node."""
        return self.data if isinstance(self.data, Atom) else None

    @property
    def children(self) -> List['VectorSexp']:
        """Child nodes of a list node (empty for an atom node)."""
        return self.data if isinstance(self.data, list) else []

    def _list(self) -> List['VectorSexp']:
        if not isinstance(self.data, list):
            raise TypeError("cannot add tokens to an atom node")
        return self.data

    def push_atom(self, atom: Atom) -> None:
        self._list().append(VectorSexp(atom, parent=self))

    def start_list(self) -> 'VectorSexp':
        data_list = self._list()
        # Only the still-empty document root stands in for the outermost list
        if self._parent is None and not data_list:
            return self
        child = VectorSexp([], parent=self)
        data_list.append(child)
        return child

    def end_list(self) -> 'VectorSexp':
        if self._parent is not None:
            parent = self._parent()
            if parent is not None:
                return parent
        return self

    def find(self, path: str, config: Optional[QueryConfig] = None) -> Optional['VectorSexp']:
        """Find the first node matching ``path``.

        A list node matches a segment when its first child is an atom equal
        to that segment; the remaining segments are then looked up among
        its other children, leftmost first. An atom node matches only the
        final segment. A list whose first atom does not match passes the
        same segment down to its children, so a path need not start at the
        root: ``find("bar")`` on ``(foo (bar baz))`` returns ``(bar baz)``.

        Args:
            path: Separator-delimited atom values
            config: Query settings (default: ``/`` separator)

        Returns:
            The matching node (a list node, or an atom node for a final
            segment naming a bare atom), or None
        """
        return self._find(split_path(path, config), 0)

    def _find(self, segments: Tuple[str, ...], index: int) -> Optional['VectorSexp']:
        segment = segments[index]
        last = index + 1 == len(segments)
        if isinstance(self.data, Atom):
            if last and self.data == segment:
                return self
            return None

        children = self.data
        if children and children[0].is_atom and children[0].data == segment:
            if last:
                return self
            for child in children[1:]:
                result = child._find(segments, index + 1)
                if result is not None:
                    return result
            return None

        # Not anchored here: look for the same segment further down
        for child in children:
            result = child._find(segments, index)
            if result is not None:
                return result
        return None

    def __repr__(self) -> str:
        """Debug representation, not a serialization."""
        if isinstance(self.data, Atom):
            return f"VectorSexp({self.data.text!r})"
        return f"VectorSexp([{len(self.data)} children])"
