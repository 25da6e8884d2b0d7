"""sexptree - zero-copy S-expression parser with path queries.

Parse a document into a head/tail tree whose atoms are views into the
input buffer, then look sub-trees up by a path of head tokens:

    from sexptree import parse
    tree = parse('(foo (bar baz (bax 5.3) (bax 6.7)) :bam)')
    tree.find_first("foo/bar/bax")          # first (bax ...) node
    list(tree.find_all("foo/bar/bax"))      # both (bax ...) nodes

Any tree type implementing SexpBuilder can be produced by the same parser;
VectorSexp is the bundled uniform-children alternative.
"""

__version__ = "0.1.0"

from .core import (
    Atom,
    SexpBuilder,
    Sexp,
    VectorSexp,
    SexpIterator,
    find_first,
    find_all,
    split_path,
    parse,
)
from .config import ParseConfig, QueryConfig, TreeRepresentation
from .errors import (
    SexpError,
    MalformedSexpError,
    UnmatchedCloseError,
    UnterminatedListError,
    NestingTooDeepError,
    ConfigurationError,
)
from .api import (
    parse_sexp,
    query_first,
    query_all,
    count_matches,
    iter_atoms,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Core
    "Atom",
    "SexpBuilder",
    "Sexp",
    "VectorSexp",
    "SexpIterator",
    "find_first",
    "find_all",
    "split_path",
    "parse",
    # Config
    "ParseConfig",
    "QueryConfig",
    "TreeRepresentation",
    # Errors
    "SexpError",
    "MalformedSexpError",
    "UnmatchedCloseError",
    "UnterminatedListError",
    "NestingTooDeepError",
    "ConfigurationError",
    # API
    "parse_sexp",
    "query_first",
    "query_all",
    "count_matches",
    "iter_atoms",
    "get_tree_stats",
]
