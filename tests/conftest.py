import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import candor even if not installed
src_path = str(Path(__file__).parent.parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture
def write_file(tmp_path):
    """Writes raw bytes to a file under tmp_path and returns its path."""

    def _write(data: bytes, name: str = "words.txt") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
