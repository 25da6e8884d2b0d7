"""Sexp: the default head/tail tree representation.

A list's first token is stored as the node's ``head``; every later token
becomes a child in ``tail``. ``(a b c)`` therefore parses to a node whose
head is ``a`` and whose tail is ``[Sexp(b), Sexp(c)]``. Path queries rely
on this split: a path segment is matched against ``head`` at each level.
"""

import weakref
from typing import Iterator, List, Optional, Tuple

from .atom import Atom
from .builder import SexpBuilder
from . import query


class Sexp(SexpBuilder):
    """Node of the default tree representation.

    Attributes:
        head: First token of the node, or None for an empty list/document
        tail: Remaining tokens as child nodes, or None while the node has
            at most one token

    The parent link is a weak reference and is only followed by
    ``end_list`` while the tree is being built. The root owns the whole tree
    through the ``tail`` lists.
    """

    __slots__ = ("head", "tail", "_parent", "__weakref__")

    def __init__(self, head: Optional[Atom] = None, parent: Optional['Sexp'] = None):
        self.head: Optional[Atom] = head
        self.tail: Optional[List['Sexp']] = None
        self._parent = weakref.ref(parent) if parent is not None else None

    # Builder contract

    def push_atom(self, atom: Atom) -> None:
        if self.head is None:
            self.head = atom
        else:
            self._append(Sexp(atom, parent=self))

    def start_list(self) -> 'Sexp':
        # A node without a head becomes the list itself. This is how the
        # root absorbs the outermost parenthesized list.
        if self.head is None:
            return self
        child = Sexp(parent=self)
        self._append(child)
        return child

    def end_list(self) -> 'Sexp':
        if self._parent is not None:
            parent = self._parent()
            if parent is not None:
                return parent
        return self

    def _append(self, child: 'Sexp') -> None:
        if self.tail is None:
            self.tail = [child]
        else:
            self.tail.append(child)

    # Read API

    def get_child(self, n: int) -> 'Sexp':
        """Return the ``n``-th tail child.

        The caller is expected to know the node's arity; asking for a child
        that does not exist is a programming error.

        Raises:
            IndexError: If ``n`` is outside the tail
        """
        if self.tail is None or not 0 <= n < len(self.tail):
            size = 0 if self.tail is None else len(self.tail)
            raise IndexError(f"child index {n} out of range for tail of size {size}")
        return self.tail[n]

    def is_leaf(self) -> bool:
        """True if the node has no tail children."""
        return self.tail is None

    def find_first(self, path: str, config=None) -> Optional['Sexp']:
        """Leftmost depth-first match for ``path``; see ``query.find_first``."""
        return query.find_first(self, path, config)

    def find_all(self, path: str, config=None) -> 'query.SexpIterator':
        """Every sibling matching the last segment of ``path``; see ``query.find_all``."""
        return query.find_all(self, path, config)

    def walk(self) -> Iterator[Tuple['Sexp', int]]:
        """Depth-first pre-order walk over this node and its tail.

        Uses an explicit stack, so trees nested deeper than the interpreter's
        recursion limit can be walked.

        Yields:
            Tuples of (node, depth) where depth is relative to this node
        """
        stack: List[Tuple['Sexp', int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            yield (node, depth)
            if node.tail is not None:
                # Reversed so the leftmost child is popped first
                for child in reversed(node.tail):
                    stack.append((child, depth + 1))

    def __repr__(self) -> str:
        """Debug representation, not a serialization."""
        head = None if self.head is None else self.head.text
        size = 0 if self.tail is None else len(self.tail)
        return f"Sexp(head={head!r}, tail={size})"
