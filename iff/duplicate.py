# python
"""
iff/duplicate.py
Recursive directory copy that prefers copy-on-write clones.

Each file is first cloned with the FICLONE ioctl. When the platform or the
filesystem cannot clone, the copy switches to shutil.copy2 for the rest of
the tree.
"""
import asyncio
import errno
import logging
import os
import shutil

try:
    import fcntl
except ImportError:  # pragma: no cover - not available on Windows
    fcntl = None

logger = logging.getLogger(__name__)

# _IOW(0x94, 9, int) from linux/fs.h
FICLONE = getattr(fcntl, "FICLONE", 0x40049409) if fcntl is not None else None

_UNSUPPORTED_ERRNOS = frozenset(
    code
    for code in (
        getattr(errno, "EOPNOTSUPP", None),
        getattr(errno, "ENOTSUP", None),
        errno.EXDEV,
        errno.EINVAL,
        errno.ENOTTY,
        errno.ENOSYS,
    )
    if code is not None
)


class CloneUnsupported(OSError):
    """The filesystem (or platform) cannot make a copy-on-write clone."""


def clone_file(src: str, dst: str) -> None:
    """Reflink src to dst. Raises CloneUnsupported when cloning is not possible."""
    if os.path.exists(dst) and os.path.samefile(src, dst):
        # opening dst for writing would truncate src
        raise shutil.SameFileError(f"{src!r} and {dst!r} are the same file")
    if fcntl is None or FICLONE is None:
        raise CloneUnsupported(errno.ENOSYS, "copy-on-write clone is not available on this platform")
    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        try:
            fcntl.ioctl(fdst.fileno(), FICLONE, fsrc.fileno())
        except OSError as exc:
            if exc.errno in _UNSUPPORTED_ERRNOS:
                raise CloneUnsupported(exc.errno, os.strerror(exc.errno)) from exc
            raise
    shutil.copystat(src, dst)


class TreeCopier:
    """
    copy_function for shutil.copytree. Tries clone_file until the first
    unsupported-operation failure, then uses shutil.copy2.
    """

    def __init__(self) -> None:
        self.clone = True

    @property
    def backend(self) -> str:
        return "clone" if self.clone else "copy"

    def __call__(self, src: str, dst: str) -> str:
        if self.clone:
            try:
                clone_file(src, dst)
                return dst
            except CloneUnsupported as exc:
                logger.debug("Copy-on-write clone unsupported (%s); falling back to byte copy", exc)
                self.clone = False
        return shutil.copy2(src, dst)


def copy_tree_sync(src: str, dst: str) -> str:
    """Copy src into dst, merging with whatever dst already holds. Returns the backend used."""
    if not os.path.isdir(src):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), src)
    copier = TreeCopier()
    shutil.copytree(src, dst, symlinks=True, copy_function=copier, dirs_exist_ok=True)
    logger.debug("Copied %s -> %s using %s", src, dst, copier.backend)
    return copier.backend


async def copy_tree(src: str, dst: str) -> str:
    return await asyncio.to_thread(copy_tree_sync, src, dst)
