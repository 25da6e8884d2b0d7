"""Configuration for sexptree.

ParseConfig controls how the tokenizer splits the input buffer and how deep
nesting may go. QueryConfig controls how query paths are split into
segments. Both are plain dataclasses with a ``validate()`` method that
returns every problem found rather than stopping at the first one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional


class TreeRepresentation(Enum):
    """Which tree type the high-level API builds."""
    HEAD_TAIL = "sexp"      # Sexp: first token is the head, the rest the tail
    VECTOR = "vector"       # VectorSexp: uniform list of children


DEFAULT_WHITESPACE = " \t\n"

# Characters the tokenizer gives structural meaning to.
STRUCTURAL_CHARACTERS: FrozenSet[str] = frozenset('()"\\')


@dataclass(frozen=True)
class ParseConfig:
    """Tokenizer settings.

    For ``bytes`` input only the ASCII characters of ``whitespace`` act as
    delimiters; a non-ASCII character has no single-byte form and is
    ignored there. ``str`` input honors every character.
    """

    whitespace: str = DEFAULT_WHITESPACE   # Token delimiters outside strings
    max_depth: Optional[int] = None        # Maximum list nesting (None = unlimited)

    @classmethod
    def default(cls) -> 'ParseConfig':
        """Space, tab and newline delimit tokens; nesting is unbounded."""
        return cls()

    @classmethod
    def lenient_newlines(cls) -> 'ParseConfig':
        """Also treat carriage returns as whitespace, for CRLF input.

        Returns:
            ParseConfig with ``\\r`` added to the delimiters
        """
        return cls(whitespace=DEFAULT_WHITESPACE + "\r")

    @classmethod
    def bounded(cls, max_depth: int) -> 'ParseConfig':
        """Reject documents nested deeper than ``max_depth`` lists.

        Args:
            max_depth: Largest number of simultaneously open lists allowed

        Returns:
            ParseConfig with a nesting limit
        """
        return cls(max_depth=max_depth)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.whitespace, str) or not self.whitespace:
            errors.append("whitespace must be a non-empty string")
        else:
            structural = sorted(STRUCTURAL_CHARACTERS.intersection(self.whitespace))
            if structural:
                errors.append(
                    f"whitespace cannot contain structural characters: {''.join(structural)}"
                )

        if self.max_depth is not None and self.max_depth <= 0:
            errors.append("max_depth must be positive")

        return errors


@dataclass(frozen=True)
class QueryConfig:
    """Path query settings."""

    separator: str = "/"

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if not isinstance(self.separator, str) or not self.separator:
            errors.append("separator must be a non-empty string")
        return errors


DEFAULT_PARSE_CONFIG = ParseConfig()
DEFAULT_QUERY_CONFIG = QueryConfig()
