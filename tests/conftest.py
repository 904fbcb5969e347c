import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipebox` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest  # noqa: E402

from fakes import InMemoryStore  # noqa: E402


@pytest.fixture
def store(tmp_path):
    return InMemoryStore(tmp_path / "images")
