"""Shared fixtures for the tinystat test suite."""

import sys
from pathlib import Path

import matplotlib
import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# figures are only ever written to files in tests
matplotlib.use("Agg")


@pytest.fixture
def write_sample(tmp_path):
    """Return a helper that writes a measurement file and gives back its path."""

    def _write_sample(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write_sample
