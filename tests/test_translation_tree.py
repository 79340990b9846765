"""Tests for translation tree flattening and pruning."""

import json
import tempfile
from pathlib import Path

import pytest

from codebase_analyzer.exceptions import TranslationFileError
from codebase_analyzer.features.translation_tree import (
    FlattenedKey,
    flatten_keys,
    is_ancestor_key,
    load_translation_file,
    prune_keys,
    remove_key,
    write_translation_file,
)


class TestFlattenKeys:
    """Test cases for flatten_keys."""

    def test_nested_tree(self):
        """Nested objects flatten to dot paths in document order."""
        tree = {"a": {"b": "x", "c": {"d": "y"}}, "e": "z"}

        keys = flatten_keys(tree)

        assert [k.path for k in keys] == ["a.b", "a.c.d", "e"]
        assert [k.value for k in keys] == ["x", "y", "z"]
        assert keys[1].original_path == ("a", "c", "d")

    def test_lists_and_null_are_leaves(self):
        """Only objects are recursed into."""
        tree = {"items": ["one", "two"], "missing": None, "count": 3}

        keys = flatten_keys(tree)

        assert keys == [
            FlattenedKey("items", ["one", "two"], ("items",)),
            FlattenedKey("missing", None, ("missing",)),
            FlattenedKey("count", 3, ("count",)),
        ]

    def test_empty_objects_produce_nothing(self):
        """Empty objects have no leaves."""
        assert flatten_keys({}) == []
        assert flatten_keys({"a": {}, "b": {"c": {}}}) == []

    def test_segment_containing_dot(self):
        """Raw segments are kept even when a segment contains a dot."""
        keys = flatten_keys({"a.b": {"c": "x"}})

        assert keys[0].path == "a.b.c"
        assert keys[0].original_path == ("a.b", "c")


class TestIsAncestorKey:
    """Test cases for is_ancestor_key."""

    def test_ancestor_relation(self):
        """A key is its own ancestor; prefixes must end on a segment."""
        assert is_ancestor_key("a.b", "a.b")
        assert is_ancestor_key("a.b", "a.b.c")
        assert is_ancestor_key("a", "a.b.c")
        assert not is_ancestor_key("a.b", "a.bc")
        assert not is_ancestor_key("a.b.c", "a.b")


class TestPruneKeys:
    """Test cases for prune_keys and remove_key."""

    def test_removes_leaf_and_empty_parents(self):
        """Parents left empty are removed as well."""
        tree = {"a": {"b": "x", "c": {"d": "y"}}, "e": "z"}
        unused = [k for k in flatten_keys(tree) if k.path == "a.c.d"]

        result = prune_keys(tree, unused)

        assert result is tree
        assert tree == {"a": {"b": "x"}, "e": "z"}

    def test_removing_every_key_empties_tree(self):
        """Pruning all leaves leaves an empty object."""
        tree = {"a": {"b": {"c": "x"}}, "d": "y"}

        prune_keys(tree, flatten_keys(tree))

        assert tree == {}

    def test_dotted_segment_is_removed_by_original_path(self):
        """Removal follows raw segments, not the dot path."""
        tree = {"a.b": {"c": "x"}, "a": {"b": {"c": "keep"}}}
        target = FlattenedKey("a.b.c", "x", ("a.b", "c"))

        prune_keys(tree, [target])

        assert tree == {"a": {"b": {"c": "keep"}}}

    def test_missing_path_is_ignored(self):
        """Removing a path that does not exist changes nothing."""
        tree = {"a": {"b": "x"}}

        remove_key(tree, ("a", "zzz"))
        remove_key(tree, ("nope", "b"))
        remove_key(tree, ())

        assert tree == {"a": {"b": "x"}}

    def test_non_empty_parent_is_kept(self):
        """Siblings keep their parent alive."""
        tree = {"common": {"save": "Save", "cancel": "Cancel"}}

        remove_key(tree, ("common", "cancel"))

        assert tree == {"common": {"save": "Save"}}


class TestTranslationFiles:
    """Test cases for loading and writing translation files."""

    def test_load_valid_file(self):
        """A JSON object is returned as a dict."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'en.json'
            path.write_text('{"a": {"b": "x"}}', encoding='utf-8')

            assert load_translation_file(path) == {"a": {"b": "x"}}

    def test_load_missing_file(self):
        """Missing files raise TranslationFileError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'missing.json'

            with pytest.raises(TranslationFileError) as exc_info:
                load_translation_file(path)

            assert "Failed to read or parse i18n file" in str(exc_info.value)

    def test_load_invalid_json(self):
        """Malformed JSON raises TranslationFileError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'en.json'
            path.write_text('{"a": ', encoding='utf-8')

            with pytest.raises(TranslationFileError):
                load_translation_file(path)

    def test_load_non_object(self):
        """A top-level array is rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'en.json'
            path.write_text('["a", "b"]', encoding='utf-8')

            with pytest.raises(TranslationFileError) as exc_info:
                load_translation_file(path)

            assert "list" in str(exc_info.value)

    def test_write_format(self):
        """Output is 2-space indented, non-ASCII kept, newline terminated."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'tr.json'

            write_translation_file(path, {"a": {"b": "Güle güle"}})

            content = path.read_text(encoding='utf-8')
            assert content == '{\n  "a": {\n    "b": "Güle güle"\n  }\n}\n'
            assert json.loads(content) == {"a": {"b": "Güle güle"}}
