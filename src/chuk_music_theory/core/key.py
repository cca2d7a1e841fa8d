"""
Key - a root note plus a scale.

A key can be read from notation ('K###', 'Ebmaj', 'Amin') or derived from a
chord: major chords give major keys, minor chords give minor keys, and any
other chord leaves the scale undefined.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chuk_music_theory.core.note import Note
from chuk_music_theory.core.scale import Scale

if TYPE_CHECKING:
    from chuk_music_theory.core.chord import Chord
    from chuk_music_theory.core.registry import ChordRegistry


@dataclass(frozen=True)
class Key:
    """
    A root note and a scale (None when it cannot be determined).

    Examples:
        Key(Note.parse("C"), Scale.MAJOR).key_signature() -> 'Cmaj'
        Key.parse("K##") -> D major
    """

    root: Note
    scale: Scale | None = None

    @classmethod
    def from_chord(cls, chord: Chord) -> Key:
        """Key rooted on the chord's root; major/minor from the chord's triad."""
        if chord.is_major():
            scale = Scale.MAJOR
        elif chord.is_minor():
            scale = Scale.MINOR
        else:
            scale = None
        return cls(chord.root, scale)

    @classmethod
    def parse(cls, text: str, registry: ChordRegistry | None = None) -> Key:
        """Create a key from notation like 'K#', 'Kbbb' or 'Cmaj'."""
        from chuk_music_theory.notation import parse_key

        return parse_key(text, registry)

    def key_signature(self) -> str:
        """Root note followed by the scale, e.g. 'Cmaj' or 'E4min'."""
        if self.scale is None:
            return str(self.root)
        return f"{self.root}{self.scale}"

    def __str__(self) -> str:
        return self.key_signature()


DEFAULT_KEY = Key(Note(48, octave_explicit=True, original_spelling="C"), Scale.MAJOR)
