# python
"""
iff/lineage.py
Generations: one specification each, linked backward to the generation
they extend. Forks share their ancestors by reference.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .materialize import materialize
from .paths import change_root_dir_of_paths, get_paths

logger = logging.getLogger(__name__)


def copy_directory(directory: Mapping[str, Any]) -> Dict[str, Any]:
    """Detached copy of a specification so later caller edits cannot leak in."""
    copied: Dict[str, Any] = {}
    for key, item in directory.items():
        if isinstance(item, Mapping):
            copied[key] = copy_directory(item)
        elif isinstance(item, bytearray):
            copied[key] = bytes(item)
        else:
            copied[key] = item
    return copied


@dataclass(frozen=True)
class Generation:
    directory: Dict[str, Any] = field(repr=False)
    root_dir: str
    prev: Optional[Generation] = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        directory: Mapping[str, Any],
        root_dir: str,
        prev: Optional[Generation] = None,
    ) -> Generation:
        return cls(directory=copy_directory(directory), root_dir=root_dir, prev=prev)

    @property
    def depth(self) -> int:
        """0 for a root generation."""
        return sum(1 for _ in self.ancestors())

    def ancestors(self) -> Iterator[Generation]:
        """Previous generations, nearest first."""
        node = self.prev
        while node is not None:
            yield node
            node = node.prev

    def lineage(self) -> List[Generation]:
        """Every generation from the oldest ancestor down to this one."""
        chain = [self, *self.ancestors()]
        chain.reverse()
        return chain

    def collect_paths(self, unix_style: bool = False) -> Dict[str, str]:
        """
        Path table for the whole lineage under this generation's root.
        Ancestor entries come first; this generation's entries override
        them at equal keys.
        """
        paths: Dict[str, str] = {}
        if self.prev is not None:
            inherited = self.prev.collect_paths(unix_style)
            paths.update(change_root_dir_of_paths(inherited, self.prev.root_dir, self.root_dir, unix_style))
        paths.update(get_paths(self.directory, self.root_dir, unix_style))
        return paths

    async def write(self, root_dir: Optional[str] = None) -> None:
        """Replay the lineage onto root_dir, oldest generation first."""
        target = self.root_dir if root_dir is None else root_dir
        for depth, generation in enumerate(self.lineage()):
            logger.debug("Replaying generation %d onto %s", depth, target)
            await materialize(generation.directory, target)
