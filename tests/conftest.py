# Add project root to sys.path so pytest can import the iff package
import sys
from pathlib import Path

import pytest

# Insert project root (parent of this tests/ directory) at front of sys.path
# This makes `import iff` work when running `pytest` from the repo root.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from iff import define_iff_creator  # noqa: E402


@pytest.fixture()
def fixture_dir(tmp_path: Path) -> str:
    """Root directory used by creators in tests (not created up front)."""
    return str(tmp_path / "fixtures")


@pytest.fixture()
def create_iff(fixture_dir: str):
    """Creator whose every fresh fixture lands in fixture_dir."""
    return define_iff_creator(generate_root_dir=lambda: fixture_dir)
