"""
Notation parser - builds notes, chords and keys from their text tokens.

Token grammar:
    note   := ('R' | '[' NAME ']' | '[' number ']' | pitch) decorators
    pitch  := letter accidentals? octave?           e.g. C, Eb4, F##
    chord  := pitch chord-name ('^'* | '^' pitch) decorators
    key    := 'K' ('#'* | 'b'*) | chord
    decorators := '-'? duration? '-'? ('a' on-velocity)? ('d' off-velocity)?
    duration   := ('w'|'h'|'q'|'i'|'s'|'t'|'x'|'o') '.'? count? ... | '/' decimal

A leading '-' ends a tie, a trailing '-' starts one. Pitches without an
octave use the default octave (C = 60).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from chuk_music_theory.constants import (
    DEFAULT_OCTAVE,
    DURATION_SYMBOLS,
    FLAT_KEY_ROOTS,
    LETTER_POSITIONS,
    MIN_PERCUSSION_NOTE,
    OCTAVE,
    PERCUSSION_NAMES,
    REST_SYMBOL,
    SHARP_KEY_ROOTS,
    ErrorMessages,
)
from chuk_music_theory.core.chord import Chord
from chuk_music_theory.core.key import Key
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.registry import ChordRegistry, default_registry
from chuk_music_theory.core.scale import Scale
from chuk_music_theory.errors import NotationError

logger = logging.getLogger(__name__)

_ACCIDENTALS = r"(?:##|#|[bB][bB]|[bB])"

_PITCH = re.compile(
    rf"(?P<letter>[A-Ga-g])(?P<accidentals>{_ACCIDENTALS})?(?P<octave>\d{{1,2}})?"
)

_DECORATORS = re.compile(
    r"(?P<end_tie>-)?"
    r"(?P<duration>/\d+(?:\.\d+)?(?:[eE]-?\d+)?|(?:[whqistxo]\.?\d*)+)?"
    r"(?P<start_tie>-)?"
    r"(?:a(?P<on>\d+))?"
    r"(?:d(?P<off>\d+))?",
    re.IGNORECASE,
)

_DURATION_PART = re.compile(r"(?P<symbol>[whqistxo])(?P<dot>\.)?(?P<count>\d*)", re.IGNORECASE)

_BRACKETED = re.compile(r"\[(?P<name>[^\]]+)\](?P<rest>.*)")

_BASS = re.compile(rf"\^(?P<bass>[A-G]{_ACCIDENTALS}?\d{{0,2}})(?P<rest>.*)")

_CARETS = re.compile(r"(?P<carets>\^*)(?P<rest>.*)")


@dataclass(frozen=True)
class _Decorators:
    duration: float | None = None
    on_velocity: int | None = None
    off_velocity: int | None = None
    starts_tie: bool = False
    ends_tie: bool = False

    def apply(self, note: Note) -> Note:
        if self.duration is not None:
            note = note.with_duration(self.duration)
        note = note.with_velocity(self.on_velocity, self.off_velocity)
        return note.evolve(starts_tie=self.starts_tie, ends_tie=self.ends_tie)


def _spelling(letter: str, accidentals: str) -> str:
    """Normalize a pitch spelling: upper-case letter, lower-case flats."""
    return letter.upper() + accidentals.lower()


def _accidental_delta(accidentals: str) -> int:
    return accidentals.count("#") - accidentals.upper().count("B")


class NotationParser:
    """
    Parses single notation tokens.

    Chord names are looked up in a ChordRegistry, which defaults to the
    shared built-in registry.
    """

    def __init__(self, registry: ChordRegistry | None = None):
        self._registry = registry

    @property
    def registry(self) -> ChordRegistry:
        return self._registry or default_registry()

    # ------------------------------------------------------------------
    # Durations and decorators
    # ------------------------------------------------------------------

    def parse_duration(self, text: str) -> float:
        """
        Parse a duration string.

        Examples:
            'q' -> 0.25, 'h.' -> 0.75, 'w2q' -> 2.25, '/0.6' -> 0.6

        Raises:
            NotationError: if the text is not a duration
        """
        if text.startswith("/"):
            try:
                return float(text[1:])
            except ValueError as e:
                raise NotationError(ErrorMessages.INVALID_DURATION.format(text=text)) from e

        total = 0.0
        position = 0
        while position < len(text):
            match = _DURATION_PART.match(text, position)
            if match is None:
                raise NotationError(ErrorMessages.INVALID_DURATION.format(text=text))
            value = DURATION_SYMBOLS[match.group("symbol").lower()]
            if match.group("dot"):
                value *= 1.5
            count = match.group("count")
            total += value * (int(count) if count else 1)
            position = match.end()

        if total <= 0.0:
            raise NotationError(ErrorMessages.INVALID_DURATION.format(text=text))
        return total

    def _parse_decorators(self, text: str, token: str) -> _Decorators:
        match = _DECORATORS.fullmatch(text)
        if match is None:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))

        duration = match.group("duration")
        on = match.group("on")
        off = match.group("off")
        return _Decorators(
            duration=self.parse_duration(duration) if duration else None,
            on_velocity=int(on) if on else None,
            off_velocity=int(off) if off else None,
            starts_tie=match.group("start_tie") is not None,
            ends_tie=match.group("end_tie") is not None,
        )

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def matches_note(self, text: str) -> bool:
        """True if the text is exactly a pitch: letter, accidentals, optional octave."""
        return bool(text) and _PITCH.fullmatch(text) is not None

    def _parse_pitch(self, text: str, token: str) -> tuple[Note, str]:
        """Parse the pitch at the start of ``text``; return the note and the remainder."""
        match = _PITCH.match(text)
        if match is None:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))

        letter = match.group("letter")
        accidentals = match.group("accidentals") or ""
        octave = match.group("octave")

        value = (int(octave) if octave else DEFAULT_OCTAVE) * OCTAVE
        value += LETTER_POSITIONS[letter.upper()] + _accidental_delta(accidentals)
        if not 0 <= value <= 127:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))

        note = Note(
            value,
            octave_explicit=octave is not None,
            original_spelling=_spelling(letter, accidentals),
        )
        return note, text[match.end() :]

    def _parse_bracketed(self, text: str, token: str) -> tuple[Note, str]:
        match = _BRACKETED.fullmatch(text)
        if match is None:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))

        name = match.group("name").upper()
        if name.isdigit():
            value = int(name)
            if value > 127:
                raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))
            return Note(value, octave_explicit=True), match.group("rest")
        if name not in PERCUSSION_NAMES:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=token))
        value = MIN_PERCUSSION_NOTE + PERCUSSION_NAMES.index(name)
        return Note(value, octave_explicit=True, is_percussion=True), match.group("rest")

    def parse_note(self, text: str) -> Note:
        """
        Parse a note token.

        Examples:
            'C' -> value 60, default duration
            'Eb4q' -> value 51, quarter note, spelled 'Eb'
            'Rh' -> half-note rest
            '[BASS_DRUM]i' -> percussion note 36
            'C5w-a90' -> whole note starting a tie, on-velocity 90

        Raises:
            NotationError: if the token is not a note
        """
        token = text.strip()
        if not token:
            raise NotationError(ErrorMessages.INVALID_NOTE.format(text=text))

        if token[0].upper() == REST_SYMBOL:
            note, rest = Note(is_rest=True), token[1:]
        elif token[0] == "[":
            note, rest = self._parse_bracketed(token, text)
        else:
            note, rest = self._parse_pitch(token, text)

        return self._parse_decorators(rest, text).apply(note)

    # ------------------------------------------------------------------
    # Chords
    # ------------------------------------------------------------------

    def parse_chord(self, text: str, registry: ChordRegistry | None = None) -> Chord:
        """
        Parse a chord token.

        Examples:
            'Cmaj' -> C major
            'E4min7^' -> E minor seventh, first inversion
            'Cmaj^E' -> C major with E in the bass (first inversion)
            'Cmaj^^w' -> C major, second inversion, whole note

        Raises:
            NotationError: if no registered chord name is found or the rest
                of the token is malformed
        """
        registry = registry or self.registry
        token = text.strip()

        name = registry.match_chord_name(token)
        if name is None:
            raise NotationError(ErrorMessages.INVALID_CHORD.format(text=text))

        index = token.upper().find(name)
        root, leftover = self._parse_pitch(token[:index], text)
        if leftover:
            raise NotationError(ErrorMessages.INVALID_CHORD.format(text=text))
        suffix = token[index + len(name) :]

        bass: Note | None = None
        inversion = 0
        bass_match = _BASS.fullmatch(suffix)
        if bass_match is not None:
            bass, _ = self._parse_pitch(bass_match.group("bass"), text)
            suffix = bass_match.group("rest")
        else:
            caret_match = _CARETS.fullmatch(suffix)
            inversion = len(caret_match.group("carets"))
            suffix = caret_match.group("rest")

        root = self._parse_decorators(suffix, text).apply(root)
        intervals = registry.get_intervals(name)

        try:
            chord = Chord(root, intervals, inversion)
        except ValueError as e:
            raise NotationError(str(e)) from e
        if bass is not None:
            chord = chord.with_bass_note(bass)
        return chord

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def parse_key(self, text: str, registry: ChordRegistry | None = None) -> Key:
        """
        Parse a key token.

        'K' followed by sharps or flats gives the major key with that
        signature ('K###' is A major, 'Kbb' is B-flat major). Anything else is
        read as a chord and turned into a key.

        Raises:
            NotationError: if the token is neither a signature nor a chord
        """
        token = text.strip()
        if token[:1].upper() == "K":
            signature = token[1:]
            if signature == "#" * len(signature):
                roots = SHARP_KEY_ROOTS
            elif signature.upper() == "B" * len(signature):
                roots = FLAT_KEY_ROOTS
            else:
                raise NotationError(ErrorMessages.INVALID_KEY.format(text=text))
            if len(signature) >= len(roots):
                raise NotationError(ErrorMessages.INVALID_KEY.format(text=text))
            return Key(self.parse_note(roots[len(signature)]), Scale.MAJOR)

        try:
            chord = self.parse_chord(token, registry)
        except NotationError as e:
            raise NotationError(ErrorMessages.INVALID_KEY.format(text=text)) from e
        key = Key.from_chord(chord)
        if key.scale is None:
            logger.debug("Key %s has no major or minor scale", text)
        return key
