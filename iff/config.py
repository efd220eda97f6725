# python
"""
iff/config.py
Process-wide defaults: where fresh fixture roots go and which separator style
exposed paths use. Values come from the environment (and a .env file).
"""
import logging
import os
import tempfile
import uuid
from typing import Any, Dict

from .env import load_env

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "fixtures_dir": os.path.join(tempfile.gettempdir(), "iff"),
    "unix_style_path": False,
}

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def load_config() -> Dict[str, Any]:
    """
    Return the defaults overlaid with IFF_FIXTURES_DIR / IFF_UNIX_STYLE_PATH.
    A new dict is returned on every call.
    """
    load_env()
    config = dict(DEFAULT_CONFIG)
    fixtures_dir = os.getenv("IFF_FIXTURES_DIR")
    if fixtures_dir:
        config["fixtures_dir"] = os.path.abspath(fixtures_dir)
    unix_style = os.getenv("IFF_UNIX_STYLE_PATH")
    if unix_style is not None:
        config["unix_style_path"] = _env_flag(unix_style)
    return config


def default_generate_root_dir() -> str:
    """Fresh root directory under the configured fixtures dir."""
    root_dir = os.path.join(load_config()["fixtures_dir"], uuid.uuid4().hex)
    logger.debug("Generated fixture root %s", root_dir)
    return root_dir
