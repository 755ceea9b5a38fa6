"""Shared pytest fixtures."""

from __future__ import annotations

import logging

import pytest

from segmark.utils import logging as logging_utils


@pytest.fixture
def sample_lines() -> list[int]:
    return [10, 8, 12]


@pytest.fixture
def two_lines() -> list[int]:
    return [5, 5]


@pytest.fixture
def restore_logging(monkeypatch: pytest.MonkeyPatch):
    """Remove the root handlers installed by ``setup_logging`` after the test."""

    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(logging_utils, "_CONFIGURED", False)
    monkeypatch.setattr(logging_utils, "_LOG_PATH", None)
    yield
    for handler in list(root.handlers):
        if type(handler).__module__ in {"logging", "logging.handlers"}:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.captureWarnings(False)
