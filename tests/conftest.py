"""Shared fixtures for the CalcPad test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logger import setup_logger


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Point the global logger at a per-test directory instead of ``~/CalcPad``."""

    return setup_logger(log_dir=tmp_path / "logs")
