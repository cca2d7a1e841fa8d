"""
Intervals - an ordered pattern of scale-degree tokens like "1 b3 5 b7".

Each token is a whole-number degree (1-15) with optional accidentals. The
degree maps to half-steps through a fixed table covering one extra octave of
compound intervals; each '#' adds a half-step and each 'b' removes one.

An Intervals value can be anchored to a root note, which is what turns the
abstract pattern into concrete pitches.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, replace

from chuk_music_theory.constants import (
    DEGREE_TO_HALFSTEPS,
    ErrorMessages,
    HALFSTEPS_TO_DEGREE,
    OCTAVE,
)
from chuk_music_theory.core.note import Note
from chuk_music_theory.errors import UnknownDegreeError
from chuk_music_theory.notation.pattern import Pattern

_NUMBER = re.compile(r"\d+")
_PLACEHOLDER = re.compile(r"\$(\d+|!)")


@dataclass(frozen=True, eq=False)
class Intervals:
    """
    A degree pattern with an optional root and replacement template.

    Equality and hashing use the pattern only, so "1 3 5" rooted on C
    equals "1 3 5" rooted on G.

    Examples:
        Intervals("1 3 5").with_root("C").get_notes() -> C5 E5 G5
        Intervals("1 3 5").rotate(1) -> "3 5 1"
    """

    pattern: str
    root: Note | None = None
    template: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", " ".join(self.pattern.split()))

    # ------------------------------------------------------------------
    # Degree arithmetic
    # ------------------------------------------------------------------

    @staticmethod
    def halfsteps(token: str) -> int:
        """
        Half-steps above the root for a degree token.

        Examples:
            "3" -> 4, "b3" -> 3, "#5" -> 8, "9" -> 14

        Raises:
            UnknownDegreeError: if the degree is missing or outside 1-15
        """
        match = _NUMBER.search(token)
        degree = int(match.group()) if match else 0
        if degree not in DEGREE_TO_HALFSTEPS:
            raise UnknownDegreeError(ErrorMessages.UNKNOWN_DEGREE.format(token=token))
        return DEGREE_TO_HALFSTEPS[degree] + Intervals._accidental_delta(token)

    @staticmethod
    def _accidental_delta(token: str) -> int:
        """Net half-steps from accidentals: 'b3' -> -1, '##5' -> 2."""
        upper = token.upper()
        return upper.count("#") - upper.count("B")

    def to_halfstep_array(self) -> list[int]:
        return [Intervals.halfsteps(token) for token in self.tokens]

    @property
    def tokens(self) -> list[str]:
        return self.pattern.split()

    def nth(self, n: int) -> str:
        """The token at position n (0-based)."""
        return self.tokens[n]

    def size(self) -> int:
        return len(self.tokens)

    def __len__(self) -> int:
        return self.size()

    def rotate(self, n: int) -> Intervals:
        """
        Cyclic left shift of the tokens.

        "1 3 5".rotate(1) is "3 5 1" (not "5 1 3"). This is purely positional;
        the tokens are not re-derived against the new first degree.
        """
        tokens = self.tokens
        n %= len(tokens)
        return replace(self, pattern=" ".join(tokens[n:] + tokens[:n]))

    # ------------------------------------------------------------------
    # Root and notes
    # ------------------------------------------------------------------

    def with_root(self, root: Note | str) -> Intervals:
        """Anchor this pattern on a root note (a Note or a notation string)."""
        if isinstance(root, str):
            root = Note.parse(root)
        return replace(self, root=root)

    def as_sequence(self, template: str) -> Intervals:
        """
        Render through a template when producing a pattern.

        ``$0``, ``$1``... are replaced with the generated notes (0-based) and
        ``$!`` with all of them, e.g. "$0q $1q $2q $0q".
        """
        return replace(self, template=template)

    def get_notes(self, disposition: int | None = None) -> list[Note] | None:
        """
        One concrete note per token: root value + the token's half-steps.

        Args:
            disposition: When given, spell each note with flats (-1) or
                sharps (+1) instead of the default names

        Returns:
            The notes, or None when there is no root
        """
        if self.root is None:
            return None

        notes = []
        for steps in self.to_halfstep_array():
            value = self.root.value + steps
            note = Note(value)
            if disposition is not None:
                note = note.with_original_spelling(Note.dispositioned_name(disposition, value))
            notes.append(note)
        return notes

    def get_some_notes(self, positions: str) -> list[Note]:
        """
        Pick notes by 1-based position, without octave.

        Args:
            positions: Space-separated positions, e.g. "1 3 5"

        Returns:
            The notes found; positions past the end are skipped
        """
        notes = self.get_notes()
        if not notes:
            return []

        picked = []
        for position in positions.split():
            index = int(position) - 1
            if 0 <= index < len(notes):
                picked.append(Note.parse(Note.tone_name(notes[index].value)))
        return picked

    def has(self, note: Note | str) -> bool:
        """
        True if this rooted pattern contains the note's pitch class in any octave.

        Always False without a root.
        """
        if self.root is None:
            return False
        if isinstance(note, str):
            note = Note.parse(note)
        return any(
            (self.root.value + steps) % OCTAVE == note.position_in_octave
            for steps in self.to_halfstep_array()
        )

    def get_pattern(self) -> Pattern | None:
        """The generated notes as a pattern (through the template if set); None without a root."""
        notes = self.get_notes()
        if notes is None:
            return None

        note_pattern = Pattern(*notes)
        if self.template is None:
            return note_pattern

        def substitute(match: re.Match[str]) -> str:
            index = match.group(1)
            if index == "!":
                return str(note_pattern)
            return str(notes[int(index)])

        return Pattern(_PLACEHOLDER.sub(substitute, self.template))

    # ------------------------------------------------------------------
    # Reverse construction
    # ------------------------------------------------------------------

    @classmethod
    def from_notes(cls, notes: Sequence[Note] | str) -> Intervals:
        """
        Derive the degree pattern of a set of notes.

        The first note is the root. Every other note is measured from it
        within one octave; distances that are not natural degrees are written
        as the next degree up with a flat, so the result never contains
        sharps ("C E G#" gives "1 3 b6").

        Args:
            notes: Notes, or a space-separated string of note names

        Returns:
            Intervals rooted on the first note
        """
        if isinstance(notes, str):
            notes = [Note.parse(text) for text in notes.split()]
        if not notes:
            raise ValueError(ErrorMessages.EMPTY_NOTES)

        root = notes[0]
        tokens = ["1"]
        for note in notes[1:]:
            diff = (note.position_in_octave - root.position_in_octave) % OCTAVE
            flat = ""
            if diff not in HALFSTEPS_TO_DEGREE:
                diff += 1
                flat = "b"
            tokens.append(f"{flat}{HALFSTEPS_TO_DEGREE[diff]}")
        return cls(" ".join(tokens), root=root)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intervals):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __str__(self) -> str:
        return self.pattern
