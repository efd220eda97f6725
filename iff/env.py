"""
Utilities for loading environment variables from a project .env file.
"""
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv


@lru_cache(maxsize=1)
def load_env() -> Optional[str]:
    """
    Load environment variables from the nearest .env file once.
    The search starts at the current working directory and walks upward.
    Returns the path of the .env that was loaded, or None if there was none.
    """
    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        return None
    # override=False so variables set by the test runner win over the .env file
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return dotenv_path
