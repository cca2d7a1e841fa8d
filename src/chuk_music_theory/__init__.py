"""
chuk-music-theory - notes, intervals, chords, scales and keys in a compact text notation.

Converts between notation strings and structured values, and infers chord
names from raw pitches.
"""

from chuk_music_theory.core import (
    DEFAULT_KEY,
    Chord,
    ChordRegistry,
    IntervalName,
    Intervals,
    Key,
    Note,
    Scale,
    ScaleIndicator,
    default_registry,
    infer_chord_name,
    sort_notes_by,
    stacked_pitches,
)
from chuk_music_theory.errors import NotationError, UnknownDegreeError
from chuk_music_theory.notation import Pattern, parse_chord, parse_duration, parse_key, parse_note
from chuk_music_theory.settings import (
    NoteSettings,
    configure_note_settings,
    get_note_settings,
    load_note_settings,
    reset_note_settings,
)

__all__ = [
    "Note",
    "IntervalName",
    "Intervals",
    "ChordRegistry",
    "default_registry",
    "Chord",
    "infer_chord_name",
    "stacked_pitches",
    "sort_notes_by",
    "Scale",
    "ScaleIndicator",
    "Key",
    "DEFAULT_KEY",
    "Pattern",
    "parse_note",
    "parse_duration",
    "parse_chord",
    "parse_key",
    "NotationError",
    "UnknownDegreeError",
    "NoteSettings",
    "get_note_settings",
    "configure_note_settings",
    "reset_note_settings",
    "load_note_settings",
]
