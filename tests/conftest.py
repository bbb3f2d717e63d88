import pytest
import shutil
from unittest.mock import patch
from pathlib import Path


@pytest.fixture
def lock_dir(tmp_path):
    """A directory holding the lock files of a test."""
    path = tmp_path / "locks"
    path.mkdir()
    return path


@pytest.fixture
def make_files(tmp_path):
    """
    Factory creating real files with distinct content under a scratch directory.
    Returns the created paths in the order given.
    """
    counter = {"n": 0}

    def _make(*names: str) -> list[Path]:
        counter["n"] += 1
        directory = tmp_path / f"src{counter['n']}"
        directory.mkdir()
        created = []
        for name in names:
            path = directory / name
            path.write_text(f"content of {name}")
            created.append(path)
        return created

    return _make


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.compcache."""
    home = tmp_path / "home"
    monkeypatch.setenv("COMPCACHE_HOME", str(home))
    monkeypatch.delenv("COMPCACHE_GLOBAL_DIR", raising=False)
    monkeypatch.delenv("COMPCACHE_GLOBAL_URL", raising=False)
    return home


# --- Failure Injection Fixtures ---

@pytest.fixture
def mock_disk_full_error():
    """
    Simulates a 'disk full' error on every file copy.
    """
    with patch('shutil.copy2', side_effect=OSError(28, "No space left on device")) as mock_copy:
        yield mock_copy
