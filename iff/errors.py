# python
"""
iff/errors.py
Exceptions raised by iff itself. Filesystem failures are plain OSError
subclasses and are never wrapped.
"""
from typing import Optional


class IFFError(Exception):
    """Base class for errors raised by iff."""


class InvalidDirectorySpecError(IFFError, ValueError):
    """
    The directory specification is malformed: bad key, bad leaf type, or a
    path declared both as a file and as a directory.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class RootDirCollisionError(IFFError, ValueError):
    """A fork was asked to write into the root directory it forks from."""

    def __init__(self, root_dir: str):
        super().__init__("New `root_dir` must be different from the current `root_dir`.")
        self.root_dir = root_dir
