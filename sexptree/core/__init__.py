"""Core components of sexptree.

This package holds the atom view, the builder contract, the parser, both
tree representations and the path query engine.
"""

from .atom import Atom
from .builder import SexpBuilder
from .node import Sexp
from .vector import VectorSexp
from .query import SexpIterator, find_first, find_all, split_path
from .parser import parse

__all__ = [
    "Atom",
    "SexpBuilder",
    "Sexp",
    "VectorSexp",
    "SexpIterator",
    "find_first",
    "find_all",
    "split_path",
    "parse",
]
