"""Pytest configuration.

The library lives in the top-level `mimeparser/` namespace package.
Depending on how pytest is invoked and the active import mode, the
repository root may not be on `sys.path`, which breaks imports like
`from mimeparser.modules...` when the project is not installed.

This file makes test imports robust by explicitly adding the repo root to
`sys.path` during test collection.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]

# NOTE: Insert at the front so the working tree wins over an installed copy.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def clean_env(monkeypatch):
    """
    Remove every MIMEPARSER_* variable so config tests start from defaults.

    load_dotenv writes straight into os.environ, so variables a test's .env
    file introduced are removed again afterwards.
    """
    import os

    for key in list(os.environ):
        if key.startswith("MIMEPARSER_"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch
    for key in list(os.environ):
        if key.startswith("MIMEPARSER_"):
            del os.environ[key]
