"""
Core theory primitives.

- Note: A pitch (or rest) with duration, velocities and spelling
- IntervalName: Named seconds through sevenths (English and French)
- Intervals: Degree patterns like "1 b3 5 b7", optionally rooted
- ChordRegistry: Chord names <-> interval patterns
- Chord: Root + intervals + inversion, with inference from notes
- Scale: Interval pattern with a major/minor indicator
- Key: Root + scale
"""

from chuk_music_theory.core.chord import Chord, infer_chord_name, stacked_pitches
from chuk_music_theory.core.interval_names import IntervalName
from chuk_music_theory.core.intervals import Intervals
from chuk_music_theory.core.key import DEFAULT_KEY, Key
from chuk_music_theory.core.note import Note, sort_notes_by
from chuk_music_theory.core.registry import ChordRegistry, default_registry
from chuk_music_theory.core.scale import Scale, ScaleIndicator

__all__ = [
    # Note
    "Note",
    "sort_notes_by",
    # Intervals
    "IntervalName",
    "Intervals",
    # Chord
    "ChordRegistry",
    "default_registry",
    "Chord",
    "infer_chord_name",
    "stacked_pitches",
    # Scale / Key
    "Scale",
    "ScaleIndicator",
    "Key",
    "DEFAULT_KEY",
]
