# python
"""
iff/materialize.py
Write a directory specification to disk.

Siblings are written concurrently; a directory always exists before anything
inside it is written. Failures propagate as OSError and nothing is rolled back.
"""
import asyncio
import logging
import os
from collections.abc import Mapping
from typing import Any, Union

logger = logging.getLogger(__name__)

FileContent = Union[str, bytes, bytearray]


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_file(path: str, content: FileContent) -> None:
    """Create or truncate `path` and write content (text as UTF-8, no newline translation)."""
    if isinstance(content, (bytes, bytearray)):
        with open(path, "wb") as f:
            f.write(content)
    else:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)


async def _materialize_item(name: str, item: Any, dir_path: str) -> None:
    item_path = os.path.join(dir_path, *name.split("/"))
    if isinstance(item, Mapping):
        await materialize(item, item_path)
        return
    if "/" in name:
        await asyncio.to_thread(ensure_dir, os.path.dirname(item_path))
    await asyncio.to_thread(write_file, item_path, item)
    logger.debug("Wrote %s", item_path)


async def materialize(directory: Mapping[str, Any], dir_path: str) -> None:
    """
    Ensure dir_path exists, then materialize every child of `directory`
    concurrently. Nested directories recurse the same way.
    """
    await asyncio.to_thread(ensure_dir, dir_path)
    logger.debug("Ensured directory %s", dir_path)
    if not directory:
        return
    await asyncio.gather(
        *(_materialize_item(name, item, dir_path) for name, item in directory.items())
    )
