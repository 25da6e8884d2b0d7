"""Tests for path queries: find_first and the lazy find_all iterator."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sexptree import ConfigurationError, QueryConfig, SexpIterator, parse, split_path
from sexptree.core.query import clear_path_cache, path_cache_info


FLAT = '(foo bar baz bax 5.3 "hello" "\\"there you" :bam)'
NESTED = '(foo (bar baz (bax 5.3) "hello") "\\"there you" :bam)'
REPEATED = '(foo (bar baz (bax 5.3) (bax 6.7) (bax 10) "hello") (bax "oh no") :bam)'


class TestFindFirst:
    """Leftmost depth-first lookup."""

    def test_flat_lookup(self):
        tree = parse("(foo bar baz)")
        assert tree.find_first("foo/bar") is tree.tail[0]
        assert tree.find_first("foo/baz") is tree.tail[1]

    def test_missing_segment(self):
        tree = parse("(foo bar baz)")
        assert tree.find_first("foo/qux") is None

    def test_single_segment_returns_root(self):
        tree = parse("(foo bar baz)")
        assert tree.find_first("foo") is tree

    def test_first_segment_must_match_root(self):
        tree = parse("(foo bar baz)")
        assert tree.find_first("bar") is None

    def test_flat_last_atom(self):
        tree = parse(FLAT)
        assert tree.find_first("foo/:bam") is tree.tail[6]

    def test_nested_lookup(self):
        tree = parse(NESTED)
        assert tree.find_first("foo/bar") is tree.tail[0]
        assert tree.find_first("foo/bar/bax") is tree.tail[0].tail[1]
        assert tree.find_first("foo/:bam") is tree.tail[2]

    def test_nested_result_shape(self):
        tree = parse('(foo (bar baz (bax 5.3) "hello") :bam)')
        bax = tree.find_first("foo/bar/bax")
        assert bax.head == "bax"
        assert [child.head.text for child in bax.tail] == ["5.3"]

    def test_leftmost_match_wins(self):
        tree = parse(REPEATED)
        bax = tree.find_first("foo/bar/bax")
        assert bax.get_child(0).head == "5.3"

    def test_backtracks_to_later_sibling(self):
        tree = parse("(foo (bar (x 1)) (bar (y 2)))")
        assert tree.find_first("foo/bar") is tree.tail[0]
        y = tree.find_first("foo/bar/y")
        assert y is tree.tail[1].tail[0]
        assert y.get_child(0).head == "2"

    def test_case_sensitive(self):
        tree = parse("(foo bar)")
        assert tree.find_first("FOO/bar") is None
        assert tree.find_first("foo/BAR") is None

    def test_empty_segments_never_match(self):
        tree = parse("(foo bar)")
        assert tree.find_first("foo/") is None
        assert tree.find_first("foo//bar") is None
        assert tree.find_first("") is None

    def test_empty_tree(self):
        assert parse("").find_first("foo") is None
        assert parse("()").find_first("") is None

    def test_quoted_segment(self):
        tree = parse('(foo "hello" bar)')
        assert tree.find_first('foo/"hello"') is tree.tail[0]
        assert tree.find_first("foo/hello") is None

    def test_bytes_tree_with_text_path(self):
        tree = parse(b"(foo (bar 1))")
        assert tree.find_first("foo/bar") is tree.tail[0]

    def test_custom_separator(self):
        tree = parse("(foo (bar/baz 1))")
        config = QueryConfig(separator=".")
        assert tree.find_first("foo.bar/baz", config) is tree.tail[0]
        assert tree.find_first("foo/bar/baz", config) is None


class TestFindAll:
    """Enumeration of matching siblings at the final path level."""

    def test_enumerates_matching_siblings(self):
        tree = parse(REPEATED)
        results = list(tree.find_all("foo/bar/bax"))
        assert len(results) == 3
        assert [node.get_child(0).head.text for node in results] == ["5.3", "6.7", "10"]

    def test_count_equals_matching_siblings(self):
        tree = parse(REPEATED)
        bar = tree.find_first("foo/bar")
        expected = [child for child in bar.tail if child.head == "bax"]
        results = list(tree.find_all("foo/bar/bax"))
        assert len(results) == len(expected)
        assert all(a is b for a, b in zip(results, expected))

    def test_other_parents_not_included(self):
        tree = parse(REPEATED)
        oh_no = tree.tail[1]
        assert oh_no not in list(tree.find_all("foo/bar/bax"))

    def test_shallower_level(self):
        tree = parse(REPEATED)
        results = list(tree.find_all("foo/bax"))
        assert len(results) == 1
        assert results[0].get_child(0).head == '"oh no"'

    def test_root_match_is_singleton(self):
        tree = parse(REPEATED)
        results = list(tree.find_all("foo"))
        assert results == [tree]

    def test_leaf_match_is_single_element(self):
        tree = parse("(foo bar baz)")
        results = list(tree.find_all("foo/baz"))
        assert len(results) == 1
        assert results[0] is tree.tail[1]

    def test_no_match_is_exhausted(self):
        tree = parse(REPEATED)
        iterator = tree.find_all("foo/nope")
        assert isinstance(iterator, SexpIterator)
        assert iterator.done
        assert list(iterator) == []

    def test_is_lazy_and_forward_only(self):
        tree = parse(REPEATED)
        iterator = tree.find_all("foo/bar/bax")
        assert iter(iterator) is iterator
        first = next(iterator)
        assert first.get_child(0).head == "5.3"
        assert not iterator.done
        assert [node.get_child(0).head.text for node in iterator] == ["6.7", "10"]
        assert iterator.done
        with pytest.raises(StopIteration):
            next(iterator)

    def test_each_call_returns_fresh_iterator(self):
        tree = parse(REPEATED)
        first_pass = list(tree.find_all("foo/bar/bax"))
        second_pass = list(tree.find_all("foo/bar/bax"))
        assert len(first_pass) == len(second_pass) == 3

    def test_skips_headless_siblings(self):
        tree = parse("(foo () (x 1) () (x 2))")
        results = list(tree.find_all("foo/x"))
        assert [node.get_child(0).head.text for node in results] == ["1", "2"]

    def test_bare_atom_siblings(self):
        tree = parse("(tags a b a c a)")
        results = list(tree.find_all("tags/a"))
        assert len(results) == 3
        assert all(node.is_leaf() for node in results)

    def test_intermediate_segments_use_leftmost_match(self):
        tree = parse("(foo (bar (x 1)) (bar (x 2) (x 3)))")
        results = list(tree.find_all("foo/bar/x"))
        assert [node.get_child(0).head.text for node in results] == ["1"]


class TestSplitPath:
    """Path splitting and its cache."""

    def test_split(self):
        assert split_path("foo/bar/bax") == ("foo", "bar", "bax")
        assert split_path("foo") == ("foo",)

    def test_empty_segments_preserved(self):
        assert split_path("foo//bar/") == ("foo", "", "bar", "")

    def test_custom_separator(self):
        assert split_path("a::b", QueryConfig(separator="::")) == ("a", "b")

    def test_invalid_separator(self):
        with pytest.raises(ConfigurationError):
            split_path("a/b", QueryConfig(separator=""))

    def test_results_are_cached(self):
        clear_path_cache()
        assert path_cache_info()["currsize"] == 0
        split_path("cached/path")
        split_path("cached/path")
        info = path_cache_info()
        assert info["currsize"] == 1
        assert info["maxsize"] > 0
