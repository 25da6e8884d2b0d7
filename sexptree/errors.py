"""Exceptions raised by sexptree.

Parsing either returns a complete tree or raises a MalformedSexpError;
no partially built tree is ever handed back. Queries never raise for a
missing path, they return None or an exhausted iterator instead.
"""

from typing import List, Optional


class SexpError(Exception):
    """Base class for all sexptree errors."""
    pass


class MalformedSexpError(SexpError, ValueError):
    """Raised when the input is not a balanced S-expression document.

    Attributes:
        position: Offset into the input buffer where the problem was found
        reason: Short human readable description
    """

    def __init__(self, reason: str, position: Optional[int] = None):
        self.reason = reason
        self.position = position
        if position is None:
            message = reason
        else:
            message = f"{reason} (at offset {position})"
        super().__init__(message)


class UnmatchedCloseError(MalformedSexpError):
    """A ``)`` appeared with no open list to close."""

    def __init__(self, position: int):
        super().__init__("unmatched closing parenthesis", position)


class UnterminatedListError(MalformedSexpError):
    """Input ended while one or more lists were still open."""

    def __init__(self, open_lists: int, position: int):
        self.open_lists = open_lists
        plural = "list" if open_lists == 1 else "lists"
        super().__init__(f"{open_lists} unterminated {plural} at end of input", position)


class NestingTooDeepError(MalformedSexpError):
    """Nesting went past the configured ``max_depth``."""

    def __init__(self, max_depth: int, position: int):
        self.max_depth = max_depth
        super().__init__(f"nesting deeper than max_depth={max_depth}", position)


class ConfigurationError(SexpError, ValueError):
    """Raised when a ParseConfig or QueryConfig fails validation."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid configuration: {'; '.join(self.problems)}")
