"""
Pytest configuration and fixtures for fishvm tests.
"""
import io
import sys

import pytest


@pytest.fixture
def empty_stdin(monkeypatch):
    """Replace stdin with an empty binary-backed stream for CLI runs."""
    stream = io.TextIOWrapper(io.BytesIO(b""), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stream)
    return stream
