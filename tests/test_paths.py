# python
"""
tests/test_paths.py
Unit tests for flattening specifications into path tables and rebasing them.
"""
import os

import pytest

from iff.errors import InvalidDirectorySpecError
from iff.paths import change_root_dir_of_paths, get_kinds, get_paths, join_root, slash

ROOT = os.path.join(os.sep, "r")


def _j(*parts: str) -> str:
    return os.path.join(ROOT, *parts)


def test_nested_directory_and_files() -> None:
    paths = get_paths({"a.txt": "a", "b": {"a.txt": "b-a"}}, ROOT)
    assert paths == {
        "a.txt": _j("a.txt"),
        "b": _j("b"),
        "b/a.txt": _j("b", "a.txt"),
    }


def test_multi_segment_key_implies_intermediate_dirs() -> None:
    paths = get_paths({"c/a/a.txt": "x"}, ROOT)
    assert list(paths) == ["c", "c/a", "c/a/a.txt"]
    assert paths["c/a/a.txt"] == _j("c", "a", "a.txt")


def test_order_follows_declaration_with_parents_first() -> None:
    spec = {
        "z.txt": "z",
        "d/e": {"f.txt": "f", "g": {}},
        "a.txt": "a",
    }
    assert list(get_paths(spec, ROOT)) == ["z.txt", "d", "d/e", "d/e/f.txt", "d/e/g", "a.txt"]


def test_repeated_directory_keeps_first_position() -> None:
    spec = {"b/x.txt": "x", "a.txt": "a", "b": {"y.txt": "y"}}
    assert list(get_paths(spec, ROOT)) == ["b", "b/x.txt", "a.txt", "b/y.txt"]


def test_empty_directory_node_is_listed() -> None:
    assert get_kinds({"empty": {}}) == {"empty": "dir"}


def test_empty_spec_gives_empty_table() -> None:
    assert get_paths({}, ROOT) == {}


def test_file_and_directory_at_same_path_is_rejected() -> None:
    with pytest.raises(InvalidDirectorySpecError) as excinfo:
        get_paths({"a": "file", "a/b.txt": "b"}, ROOT)
    assert excinfo.value.path == "a"


def test_file_declared_where_nested_dir_is_implied_is_rejected() -> None:
    with pytest.raises(InvalidDirectorySpecError):
        get_paths({"a": {"b.txt": "b"}, "a/b.txt/c": "c"}, ROOT)


def test_unix_style_uses_forward_slashes() -> None:
    paths = get_paths({"b/a.txt": "x"}, "C:\\fixtures", unix_style=True)
    assert paths["b/a.txt"].startswith("C:/fixtures")
    assert "\\" not in paths["b/a.txt"]


def test_slash() -> None:
    assert slash("C:\\a\\b") == "C:/a/b"
    assert slash("/already/posix") == "/already/posix"
    assert slash("\\\\?\\C:\\long\\path") == "\\\\?\\C:\\long\\path"


def test_rebase_moves_every_value_to_new_root() -> None:
    spec = {"a.txt": "a", "b": {"a.txt": "b-a"}}
    new_root = os.path.join(os.sep, "other", "root")
    rebased = change_root_dir_of_paths(get_paths(spec, ROOT), ROOT, new_root)
    assert rebased == get_paths(spec, new_root)


def test_rebase_does_not_touch_keys_echoing_the_root_name() -> None:
    # "r/r.txt" repeats the root's basename; only the prefix may move
    paths = get_paths({"r": {"r.txt": "x"}}, ROOT)
    rebased = change_root_dir_of_paths(paths, ROOT, os.path.join(os.sep, "new"))
    assert rebased["r/r.txt"] == os.path.join(os.sep, "new", "r", "r.txt")


def test_rebase_rejects_value_outside_old_root() -> None:
    paths = {"a.txt": os.path.join(os.sep, "rx", "a.txt")}
    with pytest.raises(ValueError):
        change_root_dir_of_paths(paths, ROOT, os.path.join(os.sep, "new"))


def test_rebase_unix_style() -> None:
    paths = get_paths({"b/a.txt": "x"}, "C:\\old", unix_style=True)
    rebased = change_root_dir_of_paths(paths, "C:\\old", "D:\\new", unix_style=True)
    assert rebased["b/a.txt"].startswith("D:/new")
    assert rebased["b/a.txt"].endswith("b/a.txt")


def test_join_root() -> None:
    assert join_root(ROOT, "a.txt") == _j("a.txt")
    assert join_root(ROOT, "/a.txt") == _j("a.txt")
    assert join_root(ROOT, "b", "a.txt") == _j("b", "a.txt")
    assert join_root(ROOT, "") == ROOT
    assert join_root(ROOT) == ROOT
