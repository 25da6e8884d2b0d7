#!/usr/bin/env python3
"""
Basic parse-and-query example for sexptree.

This example demonstrates:
- Parsing a document into the head/tail tree
- Looking up one node with find_first
- Enumerating sibling matches with find_all
- The same document as a VectorSexp
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from sexptree import MalformedSexpError, VectorSexp, get_tree_stats, parse


DOCUMENT = """
(domain logistics
  (requirements :strips :typing)
  (types truck package location)
  (action drive (parameters ?t ?from ?to) (cost 3))
  (action load (parameters ?p ?t ?at) (cost 1))
  (action unload (parameters ?p ?t ?at) (cost 1)))
"""


def main():
    """Parse DOCUMENT (or the text given as the first argument) and query it."""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)
    args = [arg for arg in sys.argv[1:] if arg != "-v"]
    document = args[0] if args else DOCUMENT

    try:
        tree = parse(document)
    except MalformedSexpError as e:
        print(f"Could not parse document: {e}")
        return 1

    print(f"Root head: {tree.head}")

    requirements = tree.find_first("domain/requirements")
    if requirements is not None:
        print(f"Requirements: {[str(child.head) for child in requirements.tail or []]}")

    print("Actions:")
    for action in tree.find_all("domain/action"):
        name = action.get_child(0).head
        cost = action.find_first("action/cost")
        print(f"  {name}: cost {cost.get_child(0).head if cost else '?'}")

    stats = get_tree_stats(tree)
    print(f"\nTree: {stats['total_nodes']} nodes, {stats['atoms']} atoms, "
          f"max depth {stats['max_depth']}")

    vector = parse(document, VectorSexp)
    print(f"As VectorSexp: {len(vector.children)} top-level children")
    return 0


if __name__ == "__main__":
    sys.exit(main())
