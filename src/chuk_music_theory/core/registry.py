"""
Chord Registry - the name <-> interval-pattern table for chord types.

The registry maps chord names ("MAJ", "MIN7", "DOM7%6SUS"...) to interval
patterns, plus optional human-readable aliases ("MAJ6%9" -> "6/9").

Names are kept in a fixed order: longest first, then alphabetical. Every
scan (reverse lookup, substring sniffing) walks that order, so "MAJ7" is
tried before "MAJ" and multi-part names win over their prefixes.

A registry is an ordinary value owned by the caller. ``default_registry()``
returns a shared instance populated with the built-in chords for code that
does not pass one explicitly.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

import yaml

from chuk_music_theory.constants import (
    BUILTIN_CHORDS,
    BUILTIN_HUMAN_READABLE,
    ErrorMessages,
)
from chuk_music_theory.core.intervals import Intervals
from chuk_music_theory.core.note import Note

logger = logging.getLogger(__name__)


def _name_order(name: str) -> tuple[int, str]:
    return (-len(name), name)


class ChordRegistry:
    """
    A mutable table of chord names and their interval patterns.

    Writers (add/remove/load) replace the internal table under a lock
    instead of editing it in place; readers iterate over the table they
    grabbed, so lookups stay consistent while another thread adds chords.
    """

    def __init__(
        self,
        chords: dict[str, str | Intervals] | None = None,
        human_readable: dict[str, str] | None = None,
    ):
        """
        Initialize the registry.

        Args:
            chords: Initial name -> pattern mapping
            human_readable: Initial name -> alias mapping
        """
        self._lock = threading.RLock()
        self._chords: dict[str, Intervals] = {}
        self._human_readable: dict[str, str] = {}
        for name, intervals in (chords or {}).items():
            self.add(name, intervals)
        for name, alias in (human_readable or {}).items():
            self.put_human_readable(name, alias)

    @classmethod
    def with_builtins(cls) -> ChordRegistry:
        """A registry holding the built-in major, minor, dominant and other chords."""
        return cls(BUILTIN_CHORDS, BUILTIN_HUMAN_READABLE)

    @classmethod
    def from_yaml(cls, path: Path, include_builtins: bool = True) -> ChordRegistry:
        """
        Create a registry from a YAML chord library.

        Args:
            path: YAML file with ``chords`` and optional ``human_readable`` mappings
            include_builtins: Start from the built-in chords

        Returns:
            The populated registry
        """
        registry = cls.with_builtins() if include_builtins else cls()
        registry.load_yaml(path)
        return registry

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, name: str, intervals: str | Intervals) -> None:
        """
        Register (or replace) a chord.

        Args:
            name: Chord name; stored upper-cased
            intervals: Pattern like "1 3 5 b7" or an Intervals value
        """
        if isinstance(intervals, str):
            intervals = Intervals(intervals)
        name = name.upper()
        with self._lock:
            chords = {**self._chords, name: Intervals(intervals.pattern)}
            self._chords = dict(sorted(chords.items(), key=lambda item: _name_order(item[0])))
        logger.debug("Registered chord %s = %s", name, intervals.pattern)

    def remove(self, name: str) -> None:
        """Remove a chord. Unknown names are ignored."""
        with self._lock:
            chords = dict(self._chords)
            removed = chords.pop(name.upper(), None)
            self._chords = chords
        if removed is not None:
            logger.debug("Removed chord %s", name.upper())

    def put_human_readable(self, name: str, alias: str) -> None:
        """Associate a display alias with a chord name."""
        with self._lock:
            self._human_readable[name.upper()] = alias

    def load_yaml(self, path: Path) -> int:
        """
        Add chords from a YAML chord library.

        Format::

            chords:
              MAJ7X: "1 3 5 7 #11"
            human_readable:
              MAJ7X: "maj7#11"

        Returns:
            Number of chords added
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(ErrorMessages.INVALID_CHORD_LIBRARY.format(path=path))

        chords = data.get("chords", {}) or {}
        for name, pattern in chords.items():
            self.add(str(name), str(pattern))
        for name, alias in (data.get("human_readable", {}) or {}).items():
            self.put_human_readable(str(name), str(alias))

        logger.info("Loaded %d chords from %s", len(chords), path)
        return len(chords)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _snapshot(self) -> dict[str, Intervals]:
        with self._lock:
            return self._chords

    def names(self) -> list[str]:
        """All chord names, longest first then alphabetical."""
        return list(self._snapshot())

    def get_intervals(self, name: str) -> Intervals | None:
        """Interval pattern for a chord name, or None."""
        return self._snapshot().get(name.upper())

    def chord_type(self, intervals: Intervals | str) -> str | None:
        """
        Name of the first chord (in registry order) with this exact pattern.

        Returns:
            The chord name, or None when no chord matches
        """
        if isinstance(intervals, str):
            intervals = Intervals(intervals)
        for name, candidate in self._snapshot().items():
            if candidate == intervals:
                return name
        return None

    def human_readable_name(self, name: str) -> str:
        """The alias for a chord name, or the name itself."""
        with self._lock:
            return self._human_readable.get(name.upper(), name)

    def match_chord_name(self, text: str) -> str | None:
        """
        Find the registered chord name inside a chord string.

        The string is upper-cased and scanned for each chord name, longest
        first. A hit counts when the text before it is a note (with optional
        octave) and the text after it passes the qualifier check.

        Examples:
            "Cmaj7" -> "MAJ7"
            "F#5min" -> "MIN"
        """
        music_string = text.upper()
        for name in self._snapshot():
            index = music_string.find(name)
            if index < 0:
                continue
            possible_note = music_string[:index]
            qualifiers = music_string[index + len(name) - 1 : len(music_string) - 1]
            if Note.is_valid_note(possible_note) and Note.is_valid_qualifier(qualifiers):
                return name
        return None

    def is_valid_chord(self, text: str) -> bool:
        """True if the string holds a note followed by a known chord name."""
        return self.match_chord_name(text) is not None

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def copy(self) -> ChordRegistry:
        with self._lock:
            return ChordRegistry(dict(self._chords), dict(self._human_readable))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._snapshot()

    def __len__(self) -> int:
        return len(self._snapshot())

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


_default_lock = threading.Lock()
_default: ChordRegistry | None = None


def default_registry() -> ChordRegistry:
    """The shared registry with the built-in chords, created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = ChordRegistry.with_builtins()
        return _default
