"""
Notation - the compact text form of notes, chords and keys.

Module-level functions use a shared NotationParser bound to the default chord
registry. The parser is created on first use because it depends on the core
types, which themselves render through Pattern.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from chuk_music_theory.notation.pattern import NoteProducer, Pattern, PatternProducer

if TYPE_CHECKING:
    from chuk_music_theory.core.chord import Chord
    from chuk_music_theory.core.key import Key
    from chuk_music_theory.core.note import Note
    from chuk_music_theory.core.registry import ChordRegistry
    from chuk_music_theory.notation.parser import NotationParser


@cache
def default_parser() -> NotationParser:
    from chuk_music_theory.notation.parser import NotationParser

    return NotationParser()


def parse_note(text: str) -> Note:
    return default_parser().parse_note(text)


def parse_duration(text: str) -> float:
    return default_parser().parse_duration(text)


def parse_chord(text: str, registry: ChordRegistry | None = None) -> Chord:
    return default_parser().parse_chord(text, registry)


def parse_key(text: str, registry: ChordRegistry | None = None) -> Key:
    return default_parser().parse_key(text, registry)


def matches_note(text: str) -> bool:
    return default_parser().matches_note(text)


__all__ = [
    "Pattern",
    "PatternProducer",
    "NoteProducer",
    "default_parser",
    "parse_note",
    "parse_duration",
    "parse_chord",
    "parse_key",
    "matches_note",
]
