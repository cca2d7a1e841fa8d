"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_music_theory.core import ChordRegistry
from chuk_music_theory.settings import reset_note_settings


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry() -> ChordRegistry:
    """A private registry with the built-in chords."""
    return ChordRegistry.with_builtins()


@pytest.fixture(autouse=True)
def default_note_settings():
    """Every test starts and ends with the built-in note defaults."""
    reset_note_settings()
    yield
    reset_note_settings()
