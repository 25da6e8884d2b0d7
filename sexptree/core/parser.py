"""Single-pass S-expression tokenizer/parser.

The parser walks the input buffer once, character by character, and drives
a SexpBuilder through ``push_atom``/``start_list``/``end_list``. It never
copies token text: every atom is an ``Atom`` view into the original buffer.

Token rules:
- whitespace outside a string delimits tokens; runs of it count once
- ``(`` and ``)`` outside a string open and close lists
- ``"`` toggles string mode; the quotes stay part of the atom
- inside a string ``\\`` makes the next character literal

The builder's returned handles carry the nesting. The parser only counts
open lists to reject unbalanced input.
"""

import logging
from typing import Optional, Type, Union

from .atom import Atom
from .builder import SexpBuilder
from .node import Sexp
from ..config import DEFAULT_PARSE_CONFIG, ParseConfig
from ..errors import (
    ConfigurationError,
    MalformedSexpError,
    NestingTooDeepError,
    UnmatchedCloseError,
    UnterminatedListError,
)


logger = logging.getLogger(__name__)


class _Tokenizer:
    """State machine for one parse call."""

    def __init__(self, data: Union[str, bytes], root: SexpBuilder, config: ParseConfig):
        self.data = data
        self.root = root
        self.current = root
        self.max_depth = config.max_depth
        self.depth = 0
        self.atom_count = 0

        # Indexing bytes yields ints, so compare against code points there.
        # Non-ASCII delimiters have no single-byte form and are skipped.
        if isinstance(data, bytes):
            self.open_paren, self.close_paren = ord("("), ord(")")
            self.quote, self.backslash = ord('"'), ord("\\")
            self.whitespace = frozenset(ord(c) for c in config.whitespace if ord(c) < 128)
        else:
            self.open_paren, self.close_paren = "(", ")"
            self.quote, self.backslash = '"', "\\"
            self.whitespace = frozenset(config.whitespace)

        self.escaped = False
        self.in_string = False
        self.non_empty = False
        self.start = 0

    def skip_whitespace(self, pos: int) -> int:
        """Return the first index at or after ``pos`` that is not whitespace."""
        data = self.data
        length = len(data)
        while pos < length and data[pos] in self.whitespace:
            pos += 1
        return pos

    def flush(self, end: int) -> None:
        """Push the pending token, if any characters were accumulated."""
        if self.non_empty:
            self.current.push_atom(Atom(self.data, self.start, end))
            self.atom_count += 1
            self.non_empty = False

    def run(self) -> SexpBuilder:
        data = self.data
        length = len(data)
        self.start = pos = self.skip_whitespace(0)

        while pos < length:
            ch = data[pos]

            if self.escaped:
                self.escaped = False
            elif ch == self.backslash:
                self.escaped = self.in_string
                self.non_empty = True
            elif ch == self.quote:
                self.in_string = not self.in_string
                self.non_empty = True
            elif self.in_string:
                # Whitespace and parens are plain content inside a string
                pass
            elif ch == self.open_paren:
                self.flush(pos)
                self.depth += 1
                if self.max_depth is not None and self.depth > self.max_depth:
                    logger.debug("Nesting limit %d exceeded at offset %d", self.max_depth, pos)
                    raise NestingTooDeepError(self.max_depth, pos)
                self.current = self.current.start_list()
                self.start = pos = self.skip_whitespace(pos + 1)
                continue
            elif ch == self.close_paren:
                if self.depth == 0:
                    logger.debug("Unmatched ')' at offset %d", pos)
                    raise UnmatchedCloseError(pos)
                self.flush(pos)
                self.depth -= 1
                self.current = self.current.end_list()
                self.start = pos = self.skip_whitespace(pos + 1)
                continue
            elif ch in self.whitespace:
                self.flush(pos)
                self.start = pos = self.skip_whitespace(pos + 1)
                continue
            else:
                self.non_empty = True

            pos += 1

        if self.depth != 0:
            logger.debug("Input ended with %d open list(s)", self.depth)
            raise UnterminatedListError(self.depth, length)

        if self.current is not self.root:
            logger.debug("Builder %s did not return to the document root",
                         type(self.root).__name__)
            raise MalformedSexpError("builder did not return to the document root", length)

        self.flush(length)
        return self.root


def parse(data: Union[str, bytes],
          tree_type: Type[SexpBuilder] = Sexp,
          config: Optional[ParseConfig] = None) -> SexpBuilder:
    """Parse one S-expression document into a tree.

    Args:
        data: The document. Atoms in the result are views into this buffer.
        tree_type: SexpBuilder subclass to build (default: Sexp)
        config: Tokenizer settings (default: ParseConfig())

    Returns:
        The root node, an instance of ``tree_type``

    Raises:
        TypeError: If ``data`` is not str/bytes or ``tree_type`` is not a SexpBuilder
        ConfigurationError: If ``config`` fails validation
        MalformedSexpError: If the parentheses are unbalanced

    Example:
        >>> tree = parse("(foo bar baz)")
        >>> str(tree.head), [str(child.head) for child in tree.tail]
        ('foo', ['bar', 'baz'])
    """
    if not isinstance(data, (str, bytes)):
        raise TypeError(f"parse() expects str or bytes, not {type(data).__name__}")
    if not (isinstance(tree_type, type) and issubclass(tree_type, SexpBuilder)):
        raise TypeError(f"tree_type must be a SexpBuilder subclass, got {tree_type!r}")

    if config is None:
        config = DEFAULT_PARSE_CONFIG
    config_errors = config.validate()
    if config_errors:
        raise ConfigurationError(config_errors)

    logger.debug("Parsing %d characters into %s", len(data), tree_type.__name__)
    tokenizer = _Tokenizer(data, tree_type(), config)
    root = tokenizer.run()
    logger.debug("Parsed %d atoms", tokenizer.atom_count)
    return root
