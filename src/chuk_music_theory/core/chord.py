"""
Chord - a root note, an interval pattern and an inversion.

Chords expand into concrete notes (name -> pitches) and can be recovered from
an unordered set of notes (pitches -> name). Chord names come from a
ChordRegistry; every operation that needs one accepts ``registry=`` and falls
back to the shared default.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chuk_music_theory.constants import (
    CHORD_NOTE_SEPARATOR,
    INVERSION_MARKER,
    MAJOR_TRIAD,
    MINOR_TRIAD,
    OCTAVE,
    ErrorMessages,
)
from chuk_music_theory.core.intervals import Intervals
from chuk_music_theory.core.note import Note, sort_notes_by
from chuk_music_theory.core.registry import ChordRegistry, default_registry
from chuk_music_theory.notation.pattern import Pattern

if TYPE_CHECKING:
    from chuk_music_theory.core.key import Key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord.

    The inversion counts how many chord tones (in degree order) have been
    moved above the others; inversion 1 puts the second tone in the bass.

    Examples:
        Chord(Note.parse("C"), Intervals("1 3 5")) = C major
        Chord.parse("Cmaj^^") = C major, second inversion (G in the bass)
    """

    root: Note
    intervals: Intervals
    inversion: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.inversion < max(len(self.intervals), 1):
            raise ValueError(
                ErrorMessages.INVALID_INVERSION.format(
                    inversion=self.inversion, size=len(self.intervals)
                )
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, registry: ChordRegistry | None = None) -> Chord:
        """Create a chord from notation like 'Cmaj', 'E4min7^', 'Cmaj^E'."""
        from chuk_music_theory.notation import parse_chord

        return parse_chord(text, registry)

    @classmethod
    def from_key(cls, key: Key) -> Chord:
        """A chord built from a key's root and scale intervals."""
        if key.scale is None:
            raise ValueError(ErrorMessages.INVALID_KEY.format(text=key))
        return cls(key.root, Intervals(key.scale.intervals.pattern))

    @classmethod
    def from_notes(
        cls, notes: Sequence[Note] | str, registry: ChordRegistry | None = None
    ) -> Chord | None:
        """
        Recognize the chord formed by a set of notes.

        Args:
            notes: Notes, or space-separated note strings like "C# F G#"
            registry: Chord names to match against

        Returns:
            The chord, or None when no registered chord matches
        """
        registry = registry or default_registry()
        name = infer_chord_name(notes, registry)
        if name is None:
            return None
        return cls.parse(name, registry)

    @staticmethod
    def inversion_from_chord_string(text: str) -> int:
        """Count carets: 'Cmaj^^' -> 2. Bass-note inversions ('Cmaj^E') count as 1."""
        return text.count(INVERSION_MARKER)

    # ------------------------------------------------------------------
    # Inversion and bass
    # ------------------------------------------------------------------

    def with_inversion(self, inversion: int) -> Chord:
        return replace(self, inversion=inversion)

    def with_bass_note(self, bass: Note | str) -> Chord:
        """
        Set the inversion that puts ``bass`` in the bass.

        Each chord tone is compared with the bass by pitch class; the matching
        tone's index becomes the inversion. Unchanged when there is no root or
        no tone matches.
        """
        if self.root is None:
            return self
        if isinstance(bass, str):
            bass = Note.parse(bass)

        inversion = self.inversion
        for i, steps in enumerate(self.intervals.to_halfstep_array()):
            if bass.value % OCTAVE == (self.root.value + steps) % OCTAVE:
                inversion = i
        return replace(self, inversion=inversion)

    def bass_note(self) -> Note:
        """The bass tone implied by the inversion, spelled with the common names."""
        steps = Intervals.halfsteps(self.intervals.nth(self.inversion))
        value = self.root.value - OCTAVE + steps
        if value < 0:
            value += OCTAVE
        return Note(
            value,
            octave_explicit=self.root.octave_explicit,
            original_spelling=Note.tone_name(value),
        )

    def with_octave(self, octave: int) -> Chord:
        """Move the root to the given octave."""
        root = self.root.with_value(self.root.position_in_octave + octave * OCTAVE)
        return replace(self, root=root)

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def get_notes(self) -> list[Note]:
        """
        Expand into notes, bass first.

        Each tone is the root plus its interval, inheriting the root's
        duration and octave setting. When the root was written without an
        octave, tones are spelled following the root's accidental (flats
        after 'Eb', sharps after 'F#').

        Inversion n raises the first n tones by an octave and then starts the
        list at tone n, so Cmaj^^ returns G C E.
        """
        halfsteps = self.intervals.to_halfstep_array()
        disposition = self.root.accidental()

        notes = [self.root]
        for steps in halfsteps[1:]:
            value = self.root.value + steps
            note = Note(
                value,
                is_first=False,
                is_melodic=False,
                is_harmonic=True,
            )
            note = note.with_same_duration_as(self.root).with_same_octave_setting_as(self.root)
            if not self.root.octave_explicit:
                if disposition != 0:
                    spelling = Note.dispositioned_name(disposition, value)
                else:
                    spelling = Note.tone_name(value)
                note = note.with_original_spelling(spelling)
            notes.append(note)

        for i in range(min(self.inversion, len(notes))):
            notes[i] = notes[i].change_value(OCTAVE)

        return notes[self.inversion :] + notes[: self.inversion]

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def chord_type(self, registry: ChordRegistry | None = None) -> str | None:
        """Registered name of this chord's intervals (MAJ, MIN7...), or None."""
        return (registry or default_registry()).chord_type(self.intervals)

    def is_major(self) -> bool:
        return self.intervals == Intervals(MAJOR_TRIAD)

    def is_minor(self) -> bool:
        return self.intervals == Intervals(MINOR_TRIAD)

    def equals_notes(self, other: Chord) -> bool:
        """True if both chords contain the same pitch classes, ignoring inversion."""
        mine = {note.position_in_octave for note in self.get_notes()}
        theirs = {note.position_in_octave for note in other.get_notes()}
        return mine == theirs

    # ------------------------------------------------------------------
    # Pattern production
    # ------------------------------------------------------------------

    def get_pattern(self, registry: ChordRegistry | None = None) -> Pattern:
        """
        The chord as notation: root, chord name, carets, decorators.

        Falls back to stacked notes ('C5+E5+G5') when the intervals have no
        registered name.
        """
        name = self.chord_type(registry)
        if name is None:
            return self.pattern_with_notes()
        return Pattern(
            self.root.tone_string()
            + name
            + INVERSION_MARKER * self.inversion
            + self.root.decorator_string()
        )

    def pattern_with_notes(self) -> Pattern:
        return Pattern(stacked_pitches(self.get_notes()))

    def pattern_with_notes_except_root(self) -> Pattern:
        notes = [
            note
            for note in self.get_notes()
            if note.position_in_octave != self.root.position_in_octave
        ]
        return Pattern(stacked_pitches(notes))

    def pattern_with_notes_except_bass(self) -> Pattern:
        bass = self.bass_note().position_in_octave
        notes = [note for note in self.get_notes() if note.position_in_octave != bass]
        return Pattern(stacked_pitches(notes))

    def to_note_string(self) -> str:
        """The notes in parentheses, e.g. '(C5+E5+G5)'."""
        return f"({stacked_pitches(self.get_notes())})"

    def to_human_readable_string(self, registry: ChordRegistry | None = None) -> str:
        """Root plus the human-readable chord name, e.g. 'C6/9'."""
        registry = registry or default_registry()
        name = self.chord_type(registry)
        if name is None:
            return self.to_note_string()
        return f"{self.root}{registry.human_readable_name(name)}"

    def to_debug_string(self) -> str:
        lines = [f"Note {i}: {note.to_debug_string()}" for i, note in enumerate(self.get_notes())]
        lines.append(f"Chord Intervals = {self.intervals}")
        lines.append(f"Inversion = {self.inversion}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return str(self.get_pattern())


def stacked_pitches(notes: Sequence[Note]) -> str:
    """Notes joined as a harmony, e.g. 'C5+E5+G5'."""
    return CHORD_NOTE_SEPARATOR.join(str(note) for note in notes)


def _disposition(notes: Sequence[Note]) -> int:
    """
    Predominant accidental across the notes' spellings.

    Single flats count -1 and single sharps +1; double accidentals are
    ignored.

    Returns:
        -1 (more flats), +1 (more sharps) or 0
    """
    count = 0
    for note in notes:
        spelling = note.original_spelling or Note.tone_name_with_octave(note.value)
        if len(spelling) <= 1:
            continue
        tail = spelling[1:].upper()
        if "BB" in tail or "##" in tail:
            continue
        if "B" in tail:
            count -= 1
        elif "#" in tail:
            count += 1
    return (count > 0) - (count < 0)


def _unique_pitch_classes(notes: Sequence[Note]) -> list[Note]:
    """Keep the first note of each pitch class, preserving order."""
    seen: set[int] = set()
    unique = []
    for note in notes:
        if note.position_in_octave not in seen:
            seen.add(note.position_in_octave)
            unique.append(note)
    return unique


def infer_chord_name(
    notes: Sequence[Note] | str, registry: ChordRegistry | None = None
) -> str | None:
    """
    Name the chord formed by a set of notes.

    The lowest note is the bass. The distinct pitch classes are sorted and
    each rotation is tried as a root (lowest pitch class first); the first
    rotation whose interval pattern is registered wins. When that root is
    not the bass, '^' and the bass note are appended.

    Examples:
        C4 E4 G4 -> 'CMAJ'
        E4 G4 C5 -> 'CMAJ^E4'
        Eb5 G5 Bb5 -> 'EbMAJ'

    Args:
        notes: Notes, or space-separated note strings
        registry: Chord names to match against

    Returns:
        The chord string, or None when no rotation matches a registered chord
    """
    if isinstance(notes, str):
        notes = [Note.parse(text) for text in notes.split()]
    if not notes:
        raise ValueError(ErrorMessages.EMPTY_NOTES)
    registry = registry or default_registry()

    disposition = _disposition(notes)

    by_value = sort_notes_by(notes, lambda note: note.value)
    spans_octaves = by_value[-1].value - by_value[0].value > OCTAVE
    bass = by_value[0]

    by_position = sort_notes_by(by_value, lambda note: note.position_in_octave)
    candidates = _unique_pitch_classes(by_position)

    for i, root in enumerate(candidates):
        rotation = candidates[i:] + candidates[:i]
        name = registry.chord_type(Intervals.from_notes(rotation))
        if name is None:
            continue

        result = Note.dispositioned_name(disposition, root.value) + name
        if bass != root:
            if spans_octaves:
                bass_text = bass.original_spelling or Note.tone_name(bass.value)
            else:
                bass_text = bass.to_string_without_duration()
            result += INVERSION_MARKER + bass_text
        return result

    logger.debug("No registered chord matches %s", stacked_pitches(notes))
    return None
