# python
"""iff package: inline fixture files for tests"""
__version__ = "0.1"

from iff.env import load_env

# Load .env values at import time so IFF_* settings are visible to the defaults.
load_env()

from iff.errors import IFFError, InvalidDirectorySpecError, RootDirCollisionError  # noqa: E402
from iff.fixture import IFF, IFFCreator, define_iff_creator  # noqa: E402

__all__ = [
    "IFF",
    "IFFCreator",
    "IFFError",
    "InvalidDirectorySpecError",
    "RootDirCollisionError",
    "define_iff_creator",
    "__version__",
]
