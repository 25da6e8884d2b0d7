"""SexpBuilder abstraction for sexptree.

The parser never knows which tree it is building. It drives a SexpBuilder
through three calls and keeps whichever node the builder hands back as the
place the next token goes. Any tree representation that implements these
three calls can be produced by the same parser.
"""

from abc import ABC, abstractmethod

from .atom import Atom


class SexpBuilder(ABC):
    """Abstract contract every tree representation must satisfy.

    Implementations must be constructible without arguments: the parser
    creates the document root by calling the class.

    The handle returned from ``start_list`` and ``end_list`` is the node that
    subsequent tokens are pushed into. It may be ``self``.
    """

    __slots__ = ()

    @abstractmethod
    def push_atom(self, atom: Atom) -> None:
        """Append an atom token to this node.

        Args:
            atom: View of the token's span in the original buffer
        """
        pass

    @abstractmethod
    def start_list(self) -> 'SexpBuilder':
        """Begin a nested list.

        Returns:
            Node that receives the tokens of the new list
        """
        pass

    @abstractmethod
    def end_list(self) -> 'SexpBuilder':
        """Close the list this node represents.

        Closing at the top level is not an error here; it returns the root.
        The parser is responsible for rejecting unbalanced input.

        Returns:
            Node that is current again after the close
        """
        pass
