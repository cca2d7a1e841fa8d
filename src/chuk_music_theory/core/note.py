"""
Note - the atomic pitch unit.

A Note is a MIDI-style pitch value (0-127) plus the decorations that the
notation can carry: duration, velocities, tie/role flags and the original
spelling used to write it (so "Db" survives a round trip instead of turning
into "C#").

Notes are immutable. The ``with_*`` methods return modified copies, which
keeps the fluent construction style without shared mutable aliasing.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, ClassVar

from chuk_music_theory.constants import (
    BASE_FREQUENCY,
    DOT,
    DURATION_TABLE,
    FLAT_DISPOSITION,
    FRENCH_LETTERS,
    LETTER_POSITIONS,
    LITERAL_DURATION_MARKER,
    MAX_PERCUSSION_NOTE,
    MIN_PERCUSSION_NOTE,
    NOTE_NAMES_COMMON,
    NOTE_NAMES_FLAT,
    NOTE_NAMES_SHARP,
    OCTAVE,
    OFF_VELOCITY_MARKER,
    ON_VELOCITY_MARKER,
    PERCUSSION_NAMES,
    REST_SYMBOL,
    WHOLE_SYMBOL,
)
from chuk_music_theory.notation.pattern import Pattern
from chuk_music_theory.settings import get_note_settings

if TYPE_CHECKING:
    from chuk_music_theory.core.interval_names import IntervalName

_LETTERS = "ABCDEFG"

_ACCIDENTAL_SYMBOLS: dict[int, str] = {1: "#", 2: "##", -1: "b", -2: "bb"}


def _default_duration() -> float:
    return get_note_settings().default_duration


def _default_on_velocity() -> int:
    return get_note_settings().default_on_velocity


def _default_off_velocity() -> int:
    return get_note_settings().default_off_velocity


def _count_accidentals(spelling: str) -> int:
    """Accidentals after the letter: -2/-1 for flats, +1/+2 for sharps."""
    if len(spelling) <= 1:
        return 0
    tail = spelling[1:].upper()
    if "BB" in tail:
        return -2
    if "B" in tail:
        return -1
    if "##" in tail:
        return 2
    if "#" in tail:
        return 1
    return 0


@dataclass(frozen=True, eq=False)
class Note:
    """
    A single pitch (or rest) with its notation decorations.

    The value of a rest is always 0. Equality compares every field except
    ``original_spelling``, which only has to match (case-insensitively)
    when both notes carry one.

    Examples:
        Note(60) = middle C (C5 in this notation), default duration
        Note.create(60, 0.5) = C5 half note, duration explicit
        Note.parse("Ebq") = E-flat quarter note, spelling preserved
    """

    value: int = 0
    duration: float = field(default_factory=_default_duration)
    octave_explicit: bool = False
    duration_explicit: bool = False
    on_velocity: int = field(default_factory=_default_on_velocity)
    off_velocity: int = field(default_factory=_default_off_velocity)
    is_rest: bool = False
    is_percussion: bool = False
    is_first: bool = True
    is_melodic: bool = False
    is_harmonic: bool = False
    starts_tie: bool = False
    ends_tie: bool = False
    original_spelling: str | None = None

    REST: ClassVar[Note]

    def __post_init__(self) -> None:
        if self.is_rest and self.value != 0:
            object.__setattr__(self, "value", 0)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, value: int, duration: float | None = None) -> Note:
        """Create a note; passing a duration marks it as explicitly set."""
        if duration is None:
            return cls(value)
        return cls(value, duration=duration, duration_explicit=True)

    @classmethod
    def rest(cls, duration: float | None = None) -> Note:
        """Create a rest, optionally with an explicit duration."""
        return cls.create(0, duration).evolve(is_rest=True)

    @classmethod
    def parse(cls, text: str) -> Note:
        """Create a note from its notation string (e.g. 'C#5q', 'Rh', '[BASS_DRUM]')."""
        from chuk_music_theory.notation import parse_note

        return parse_note(text)

    # ------------------------------------------------------------------
    # With-field transformations
    # ------------------------------------------------------------------

    def evolve(self, **changes: Any) -> Note:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def with_value(self, value: int) -> Note:
        return replace(self, value=value)

    def change_value(self, delta: int) -> Note:
        """Shift the pitch by ``delta`` half-steps."""
        return replace(self, value=self.value + delta)

    def with_duration(self, duration: float | str) -> Note:
        """Set the duration (a number or a notation string like 'h.') and mark it explicit."""
        if isinstance(duration, str):
            from chuk_music_theory.notation import parse_duration

            duration = parse_duration(duration)
        return replace(self, duration=duration, duration_explicit=True)

    def with_default_duration(self) -> Note:
        """Use the configured default duration without marking it explicit."""
        return replace(self, duration=_default_duration(), duration_explicit=False)

    def with_same_duration_as(self, other: Note) -> Note:
        return replace(self, duration=other.duration, duration_explicit=other.duration_explicit)

    def with_same_octave_setting_as(self, other: Note) -> Note:
        return replace(self, octave_explicit=other.octave_explicit)

    def with_velocity(self, on: int | None = None, off: int | None = None) -> Note:
        return replace(
            self,
            on_velocity=self.on_velocity if on is None else on,
            off_velocity=self.off_velocity if off is None else off,
        )

    def with_original_spelling(self, spelling: str | None) -> Note:
        return replace(self, original_spelling=spelling)

    # ------------------------------------------------------------------
    # Pitch
    # ------------------------------------------------------------------

    @property
    def position_in_octave(self) -> int:
        """Pitch class (0-11); 0 for rests."""
        return 0 if self.is_rest else self.value % OCTAVE

    @property
    def octave(self) -> int:
        """Octave number (value // 12); 0 for rests."""
        return 0 if self.is_rest else self.value // OCTAVE

    def microsecond_duration(self, microseconds_per_quarter: float) -> float:
        """Length of this note in microseconds at the given tempo."""
        return self.duration * 4.0 * microseconds_per_quarter

    # ------------------------------------------------------------------
    # Spelling
    # ------------------------------------------------------------------

    @staticmethod
    def tone_name(value: int) -> str:
        """Name of a value's pitch class from the common table (no octave)."""
        return NOTE_NAMES_COMMON[value % OCTAVE]

    @staticmethod
    def tone_name_with_octave(value: int) -> str:
        """Name and octave of a value, e.g. 61 -> 'C#5'."""
        return f"{NOTE_NAMES_COMMON[value % OCTAVE]}{value // OCTAVE}"

    @staticmethod
    def dispositioned_name(disposition: int, value: int, with_octave: bool = False) -> str:
        """
        Name a value using flats (disposition -1) or sharps (anything else).

        Args:
            disposition: -1 for flats, +1 for sharps
            value: MIDI note value
            with_octave: Append the octave number

        Returns:
            The spelled note, e.g. 'Db' or 'C#5'
        """
        names = NOTE_NAMES_FLAT if disposition == FLAT_DISPOSITION else NOTE_NAMES_SHARP
        name = names[value % OCTAVE]
        if with_octave:
            return f"{name}{value // OCTAVE}"
        return name

    @staticmethod
    def percussion_string(value: int) -> str:
        """Percussion instrument name for a value, e.g. 36 -> '[BASS_DRUM]'."""
        return f"[{PERCUSSION_NAMES[value - MIN_PERCUSSION_NOTE]}]"

    @staticmethod
    def is_same_note(first: str, second: str) -> bool:
        """True if two note names are equal or enharmonic (G# and Ab)."""
        if first.upper() == second.upper():
            return True
        for flat, sharp in zip(NOTE_NAMES_FLAT, NOTE_NAMES_SHARP, strict=True):
            pair = {flat.upper(), sharp.upper()}
            if first.upper() in pair and second.upper() in pair:
                return True
        return False

    @staticmethod
    def is_valid_note(text: str) -> bool:
        """True if ``text`` is a pitch name with an optional octave."""
        from chuk_music_theory.notation import matches_note

        return matches_note(text)

    @staticmethod
    def is_valid_qualifier(text: str) -> bool:
        """Qualifier check used by chord sniffing. Accepts everything."""
        return True

    def tone_string(self) -> str:
        """
        The spelled tone: original spelling if known, else the common name.

        The octave is appended only when it was written explicitly.
        Rests give 'R'.
        """
        if self.is_rest:
            return REST_SYMBOL
        tone = self.original_spelling or Note.tone_name(self.value)
        if self.octave_explicit:
            tone += str(self.octave)
        return tone

    def accidental(self) -> int:
        """-1 if spelled with flats, +1 with sharps, else 0."""
        count = self.all_accidentals()
        return (count > 0) - (count < 0)

    def all_accidentals(self) -> int:
        """Number of accidentals in the spelling: -2, -1, 0, +1 or +2."""
        if self.is_rest or self.is_percussion:
            return 0
        return _count_accidentals(self.tone_string())

    def french_name(self) -> str:
        """Tone in French solfege, e.g. 'Mib' for E-flat."""
        tone = self.tone_string()
        letter = tone[0]
        return FRENCH_LETTERS.get(letter, letter) + _ACCIDENTAL_SYMBOLS.get(
            self.all_accidentals(), ""
        )

    def add_interval(self, interval: IntervalName) -> Note | None:
        """
        Transpose by a named interval, respecting letter names.

        Unlike half-step arithmetic, E + minor third gives G (not F##) and
        C + augmented second gives D# (not Eb).

        Returns:
            The new note (default octave, spelling preserved), or None for a rest
        """
        if self.is_rest:
            return None

        spelling = self.original_spelling or self.tone_string()
        letter = spelling[0].upper()
        departure = (LETTER_POSITIONS[letter] + self.all_accidentals()) % OCTAVE

        arrival = _LETTERS[(_LETTERS.index(letter) + interval.degree_span - 1) % len(_LETTERS)]
        found = (LETTER_POSITIONS[arrival] - departure) % OCTAVE
        delta = found - interval.half_steps

        if delta > 1:
            suffix = "bb"
        elif delta > 0:
            suffix = "b"
        elif delta < -1:
            suffix = "##"
        elif delta < 0:
            suffix = "#"
        else:
            suffix = ""
        return Note.parse(arrival + suffix)

    # ------------------------------------------------------------------
    # Frequency
    # ------------------------------------------------------------------

    @staticmethod
    def frequency(value: int) -> float:
        """
        Frequency in Hz for a MIDI value, rounded to 4 decimal places.

        A5 (value 69) is 440.0.
        """
        precise = BASE_FREQUENCY * math.pow(2.0, value / 12.0)
        return round(precise * 10000.0) / 10000.0

    @staticmethod
    def frequency_for(text: str) -> float:
        """Frequency for a note string; rests give 0.0."""
        if text.upper().startswith(REST_SYMBOL):
            return 0.0
        return Note.frequency(Note.parse(text).value)

    # ------------------------------------------------------------------
    # Duration and decorators
    # ------------------------------------------------------------------

    @staticmethod
    def duration_string(duration: float) -> str:
        """
        Encode a duration as notation.

        Whole notes are stripped first ('w', followed by the count when more
        than one), then the remainder must match a plain or dotted table
        entry exactly. Anything else is written as '/' plus the decimal.

        Examples:
            0.75 -> 'h.'
            2.25 -> 'w2q'
            0.6 -> '/0.6'
        """
        parts: list[str] = []
        remainder = duration
        if remainder >= 1.0:
            wholes = math.floor(remainder)
            parts.append(WHOLE_SYMBOL)
            if wholes > 1:
                parts.append(str(wholes))
            remainder -= wholes

        if remainder == 0.0:
            return "".join(parts)
        for fraction, symbol in DURATION_TABLE:
            if remainder == fraction:
                parts.append(symbol)
                return "".join(parts)
        return f"{LITERAL_DURATION_MARKER}{duration}"

    @staticmethod
    def duration_string_for_beat(beat: int) -> str:
        """'h' for 2, 'q' for 4, 'i' for 8, 's' for 16, else a literal."""
        symbols = {2: "h", 4: "q", 8: "i", 16: "s"}
        if beat in symbols:
            return symbols[beat]
        return f"{LITERAL_DURATION_MARKER}{1.0 / beat}"

    def velocity_string(self) -> str:
        """Velocity decorators, empty when both match the configured defaults."""
        settings = get_note_settings()
        result = ""
        if self.on_velocity != settings.default_on_velocity:
            result += f"{ON_VELOCITY_MARKER}{self.on_velocity}"
        if self.off_velocity != settings.default_off_velocity:
            result += f"{OFF_VELOCITY_MARKER}{self.off_velocity}"
        return result

    def decorator_string(self) -> str:
        """Duration (if explicit) and velocities."""
        result = ""
        if self.duration_explicit:
            result += Note.duration_string(self.duration)
        return result + self.velocity_string()

    # ------------------------------------------------------------------
    # Pattern production
    # ------------------------------------------------------------------

    def to_string_without_duration(self) -> str:
        """
        The note without decorators.

        'R' for rests, the instrument name for percussion, otherwise the
        spelled tone. Notes with no cached spelling always carry their octave.
        """
        if self.is_rest:
            return REST_SYMBOL
        if self.is_percussion and MIN_PERCUSSION_NOTE <= self.value <= MAX_PERCUSSION_NOTE:
            return Note.percussion_string(self.value)
        if self.original_spelling is not None:
            return self.tone_string()
        return Note.tone_name_with_octave(self.value)

    def get_pattern(self) -> Pattern:
        return Pattern(self.to_string_without_duration() + self.decorator_string())

    def get_percussion_pattern(self) -> Pattern:
        """Pattern using the instrument name; falls back outside the GM drum range."""
        if not MIN_PERCUSSION_NOTE <= self.value <= MAX_PERCUSSION_NOTE:
            return self.get_pattern()
        return Pattern(Note.percussion_string(self.value) + self.decorator_string())

    def __str__(self) -> str:
        return str(self.get_pattern())

    def to_debug_string(self) -> str:
        values = " ".join(f"{f.name}={getattr(self, f.name)}" for f in fields(self))
        return f"Note: {values}"

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def _identity(self) -> tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in fields(self) if f.name != "original_spelling")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        if self._identity() != other._identity():
            return False
        if self.original_spelling is None or other.original_spelling is None:
            return True
        return self.original_spelling.upper() == other.original_spelling.upper()

    def __hash__(self) -> int:
        return hash(self._identity())


Note.REST = Note(0, is_rest=True)


def sort_notes_by(notes: Iterable[Note], key: Callable[[Note], Any]) -> list[Note]:
    """
    Stable sort of notes by any key (value, position in octave, duration...).

    Examples:
        sort_notes_by(notes, lambda n: n.value)
        sort_notes_by(notes, lambda n: n.position_in_octave)
    """
    return sorted(notes, key=key)
