# python
"""
iff/paths.py
Flat path tables for directory specifications.

A path table maps a relative path ("b/a.txt", always "/"-separated) to the
absolute path of that entry under some root directory. Every file and every
directory the specification implies gets an entry, parents before children.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Dict, List

from .errors import InvalidDirectorySpecError

FILE = "file"
DIR = "dir"

_EXTENDED_LENGTH_PREFIX = "\\\\?\\"


def slash(path: str) -> str:
    """
    Convert Windows backslash separators to forward slashes.
    Extended-length paths (\\\\?\\C:\\...) are returned unchanged.
    """
    if path.startswith(_EXTENDED_LENGTH_PREFIX):
        return path
    return path.replace("\\", "/")


def _to_abs(root_dir: str, rel_path: str, unix_style: bool) -> str:
    abs_path = os.path.join(root_dir, *rel_path.split("/"))
    return slash(abs_path) if unix_style else abs_path


def join_root(root_dir: str, *paths: str, unix_style: bool = False) -> str:
    """
    Join segments onto root_dir. Leading separators on a segment do not
    escape the root, and the result is normalized ("a/../b" -> "b").
    """
    seps = "/" + os.sep
    parts = [p.lstrip(seps) for p in paths]
    joined = os.path.normpath(os.path.join(root_dir, *parts))
    return slash(joined) if unix_style else joined


class _Flattener:
    """Depth-first walk recording the kind of every relative path."""

    def __init__(self) -> None:
        self.kinds: Dict[str, str] = {}

    def declare(self, segments: List[str], kind: str) -> None:
        rel_path = "/".join(segments)
        seen = self.kinds.get(rel_path)
        if seen is None:
            self.kinds[rel_path] = kind
        elif seen != kind:
            raise InvalidDirectorySpecError(
                f"{rel_path!r} is declared both as a file and as a directory",
                path=rel_path,
            )

    def walk(self, directory: Mapping, prefix: List[str]) -> None:
        for key, item in directory.items():
            segments = key.split("/")
            for depth in range(1, len(segments)):
                self.declare(prefix + segments[:depth], DIR)
            rel = prefix + segments
            if isinstance(item, Mapping):
                self.declare(rel, DIR)
                self.walk(item, rel)
            else:
                self.declare(rel, FILE)


def get_kinds(directory: Mapping[str, Any]) -> Dict[str, str]:
    """Relative path -> FILE or DIR, in declaration order."""
    flattener = _Flattener()
    flattener.walk(directory, [])
    return flattener.kinds


def get_paths(directory: Mapping[str, Any], root_dir: str, unix_style: bool = False) -> Dict[str, str]:
    """
    Flatten `directory` into a path table rooted at root_dir.

    >>> get_paths({"c/a/a.txt": "x"}, "/r")
    {'c': '/r/c', 'c/a': '/r/c/a', 'c/a/a.txt': '/r/c/a/a.txt'}
    """
    return {rel: _to_abs(root_dir, rel, unix_style) for rel in get_kinds(directory)}


def change_root_dir_of_paths(
    paths: Mapping[str, str],
    old_root_dir: str,
    new_root_dir: str,
    unix_style: bool = False,
) -> Dict[str, str]:
    """
    Move every path in a table from old_root_dir to new_root_dir.

    Only the old_root_dir prefix is replaced; keys are unchanged. Raises
    ValueError for a value that does not live under old_root_dir.
    """
    old_prefix = slash(old_root_dir) if unix_style else old_root_dir
    seps = "/" + os.sep
    rebased: Dict[str, str] = {}
    for key, value in paths.items():
        rest = value[len(old_prefix):]
        under_root = value.startswith(old_prefix) and (
            not rest or rest[0] in seps or old_prefix[-1:] in tuple(seps)
        )
        if not under_root:
            raise ValueError(f"Path {value!r} for {key!r} is not under {old_root_dir!r}")
        rest = rest.lstrip(seps)
        new_path = os.path.join(new_root_dir, rest) if rest else new_root_dir
        rebased[key] = slash(new_path) if unix_style else new_path
    return rebased
