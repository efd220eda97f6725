# python
"""
iff/fixture.py
Fixture handles and the creator that makes them.

    create_iff = define_iff_creator(generate_root_dir=lambda: join(tmp, uuid4().hex))
    iff = await create_iff({"a.txt": "a", "b": {"a.txt": "b-a"}})
    forked = await iff.fork({"c.txt": "c"})
"""
import asyncio
import logging
import os
import shutil
from typing import Any, Callable, Dict, Mapping, Optional

from .config import default_generate_root_dir, load_config
from .duplicate import copy_tree
from .errors import RootDirCollisionError
from .lineage import Generation
from .materialize import materialize
from .paths import join_root, slash
from .schema import validate_directory

logger = logging.getLogger(__name__)

Directory = Mapping[str, Any]


def _same_dir(a: str, b: str) -> bool:
    """True when a and b name the same directory, symlinks and aliases included."""
    if os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b)):
        return True
    try:
        return os.path.samefile(a, b)
    except FileNotFoundError:
        return False


def _remove(path: str) -> None:
    """rm -rf for one entry; a missing entry is not an error."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        pass


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


class IFF:
    """
    One generation of a fixture tree, as seen by a test.

    The handle is valid as long as the files it describes are on disk;
    rm_root_dir()/rm_fixtures() remove them and reset() brings them back.
    """

    def __init__(self, generation: Generation, creator: "IFFCreator"):
        self._generation = generation
        self._creator = creator
        # raises InvalidDirectorySpecError before anything is written
        self._paths = generation.collect_paths(creator.unix_style_path)

    def __repr__(self) -> str:
        return f"IFF(root_dir={self.root_dir!r}, generation={self._generation.depth})"

    @property
    def generation(self) -> Generation:
        return self._generation

    @property
    def root_dir(self) -> str:
        root_dir = self._generation.root_dir
        return slash(root_dir) if self._creator.unix_style_path else root_dir

    @property
    def paths(self) -> Dict[str, str]:
        return dict(self._paths)

    def join(self, *paths: str) -> str:
        """Path under root_dir. Does not need to exist."""
        return join_root(self._generation.root_dir, *paths, unix_style=self._creator.unix_style_path)

    async def read_file(self, path: str) -> str:
        return await asyncio.to_thread(_read_text, join_root(self._generation.root_dir, path))

    async def rm_root_dir(self) -> None:
        await asyncio.to_thread(_remove, self._generation.root_dir)

    async def rm_fixtures(self) -> None:
        """Delete everything inside root_dir, declared or not, keeping root_dir itself."""
        root_dir = self._generation.root_dir
        names = await asyncio.to_thread(os.listdir, root_dir)
        await asyncio.gather(
            *(asyncio.to_thread(_remove, os.path.join(root_dir, name)) for name in names)
        )

    async def write_fixtures(self, override_root_dir: Optional[str] = None) -> None:
        await self._generation.write(override_root_dir)

    async def add_fixtures(self, directory: Directory) -> "IFF":
        """Write `directory` into this root and return a handle covering old and new paths."""
        validate_directory(directory)
        generation = Generation.create(directory, self._generation.root_dir, prev=self._generation)
        iff = IFF(generation, self._creator)
        await materialize(generation.directory, generation.root_dir)
        logger.info("Added fixtures to %s (generation %d)", generation.root_dir, generation.depth)
        return iff

    async def fork(self, directory: Directory, override_root_dir: Optional[str] = None) -> "IFF":
        """
        Copy this fixture tree to a new root directory, then write `directory`
        on top of the copy. This handle's files are not touched.

        The new root is override_root_dir if given, otherwise a fresh one from
        the creator's generate_root_dir. Raises RootDirCollisionError if it is
        this handle's own root.
        """
        validate_directory(directory)
        if override_root_dir is not None:
            new_root_dir = override_root_dir
        else:
            new_root_dir = self._creator.generate_root_dir()
        if _same_dir(new_root_dir, self._generation.root_dir):
            raise RootDirCollisionError(self._generation.root_dir)

        generation = Generation.create(directory, os.path.abspath(new_root_dir), prev=self._generation)
        iff = IFF(generation, self._creator)
        backend = await copy_tree(self._generation.root_dir, generation.root_dir)
        await materialize(generation.directory, generation.root_dir)
        logger.info(
            "Forked %s -> %s (%s)", self._generation.root_dir, generation.root_dir, backend
        )
        return iff

    async def reset(self) -> None:
        """Delete root_dir and replay the whole lineage into it."""
        await self.rm_root_dir()
        await self.write_fixtures()
        logger.info("Reset fixtures in %s", self._generation.root_dir)


class IFFCreator:
    """
    Creates fixture handles. generate_root_dir is called once per fresh
    fixture and once per fork, unless a root directory is given explicitly.
    """

    def __init__(
        self,
        generate_root_dir: Optional[Callable[[], str]] = None,
        unix_style_path: Optional[bool] = None,
    ):
        self.generate_root_dir: Callable[[], str] = generate_root_dir or default_generate_root_dir
        if unix_style_path is None:
            unix_style_path = load_config()["unix_style_path"]
        self.unix_style_path = bool(unix_style_path)

    async def __call__(self, directory: Directory, override_root_dir: Optional[str] = None) -> IFF:
        validate_directory(directory)
        if override_root_dir is not None:
            root_dir = override_root_dir
        else:
            root_dir = self.generate_root_dir()
        generation = Generation.create(directory, os.path.abspath(root_dir))
        iff = IFF(generation, self)
        await iff.write_fixtures()
        logger.info("Created fixtures in %s", generation.root_dir)
        return iff


def define_iff_creator(
    generate_root_dir: Optional[Callable[[], str]] = None,
    unix_style_path: Optional[bool] = None,
) -> IFFCreator:
    """
    Return a creator. Without generate_root_dir, each fixture gets a fresh
    directory under the configured fixtures dir (IFF_FIXTURES_DIR).
    """
    return IFFCreator(generate_root_dir=generate_root_dir, unix_style_path=unix_style_path)
