"""Atom: a zero-copy view into the parsed input buffer.

An Atom never copies the characters it refers to. It records the buffer it
was cut from together with a ``[start, end)`` range, and compares itself
against strings by looking straight into that buffer. Text is only
materialized when explicitly asked for (``str(atom)``, ``atom.text``,
``bytes(atom)``).

Because the atom holds a reference to its buffer, the buffer stays alive for
as long as any atom (and therefore any tree) built from it does.
"""

from typing import Union


Buffer = Union[str, bytes]


class Atom:
    """Immutable ``[start, end)`` view into a ``str`` or ``bytes`` buffer."""

    __slots__ = ("_buffer", "_start", "_end")

    def __init__(self, buffer: Buffer, start: int, end: int):
        if not isinstance(buffer, (str, bytes)):
            raise TypeError(f"Atom buffer must be str or bytes, not {type(buffer).__name__}")
        if not 0 <= start <= end <= len(buffer):
            raise ValueError(f"Invalid atom span [{start}, {end}) for buffer of length {len(buffer)}")
        self._buffer = buffer
        self._start = start
        self._end = end

    @property
    def buffer(self) -> Buffer:
        """The original input buffer (not a copy)."""
        return self._buffer

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def text(self) -> str:
        """Materialize the atom as a ``str`` (bytes are decoded as UTF-8)."""
        raw = self._buffer[self._start:self._end]
        if isinstance(raw, bytes):
            return raw.decode("utf-8", errors="replace")
        return raw

    def raw(self) -> Buffer:
        """Materialize the atom with the buffer's own type."""
        return self._buffer[self._start:self._end]

    def is_quoted(self) -> bool:
        """True if the atom is a double-quoted string (quotes are kept in the span)."""
        quote = b'"' if isinstance(self._buffer, bytes) else '"'
        return (self._end - self._start >= 2
                and self._buffer.startswith(quote, self._start, self._start + 1)
                and self._buffer.endswith(quote, self._start, self._end))

    def _coerce(self, other):
        """Bring ``other`` to the buffer's type, or None if it can't be compared."""
        if isinstance(other, Atom):
            other = other.raw()
        if isinstance(self._buffer, str):
            if isinstance(other, str):
                return other
            if isinstance(other, bytes):
                try:
                    return other.decode("utf-8")
                except UnicodeDecodeError:
                    return None
            return None
        if isinstance(other, bytes):
            return other
        if isinstance(other, str):
            return other.encode("utf-8")
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Atom, str, bytes)):
            return NotImplemented
        key = self._coerce(other)
        if key is None or len(key) != self._end - self._start:
            return False
        return self._buffer.startswith(key, self._start, self._end)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """Hash like the equivalent ``str`` so atoms and strings share dict keys."""
        return hash(self.text)

    def __len__(self) -> int:
        return self._end - self._start

    def __str__(self) -> str:
        return self.text

    def __bytes__(self) -> bytes:
        raw = self.raw()
        if isinstance(raw, str):
            return raw.encode("utf-8")
        return raw

    def __repr__(self) -> str:
        return f"Atom({self.text!r})"
