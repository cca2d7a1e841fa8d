"""
Tests for Chord.

Tests cover:
- Expansion into notes, with inversions
- Bass notes and inversion recovery
- Pattern and string rendering
- Chord inference from notes
"""

import re

import pytest

from chuk_music_theory.constants import BUILTIN_CHORDS
from chuk_music_theory.core import (
    Chord,
    ChordRegistry,
    Intervals,
    Key,
    Note,
    Scale,
    infer_chord_name,
    stacked_pitches,
)
from chuk_music_theory.errors import NotationError


def _notes(text: str) -> list[Note]:
    return [Note.parse(token) for token in text.split()]


class TestChordExpansion:
    """Tests for turning chords into notes."""

    def test_root_position(self) -> None:
        """C major is C E G."""
        chord = Chord(Note.parse("C"), Intervals("1 3 5"))
        assert [n.value for n in chord.get_notes()] == [60, 64, 67]

    def test_first_inversion(self) -> None:
        """First inversion raises the root: E G C."""
        chord = Chord(Note.parse("C"), Intervals("1 3 5"), 1)
        assert [n.value for n in chord.get_notes()] == [64, 67, 72]

    def test_second_inversion(self) -> None:
        """Second inversion raises root and third: G C E."""
        chord = Chord(Note.parse("C"), Intervals("1 3 5"), 2)
        assert [n.value for n in chord.get_notes()] == [67, 72, 76]

    def test_parsed_inversion(self) -> None:
        """Carets count inversions."""
        assert [n.value for n in Chord.parse("Cmaj^^").get_notes()] == [67, 72, 76]

    def test_invalid_inversion(self) -> None:
        """The inversion must name a chord tone."""
        with pytest.raises(ValueError):
            Chord(Note.parse("C"), Intervals("1 3 5"), 3)
        with pytest.raises(ValueError):
            Chord(Note.parse("C"), Intervals("1 3 5"), -1)
        with pytest.raises(NotationError):
            Chord.parse("Cmaj^^^")

    def test_spelling_follows_root(self) -> None:
        """Flat roots spell with flats, sharp roots with sharps."""
        assert [str(n) for n in Chord.parse("Ebmaj").get_notes()] == ["Eb", "G", "Bb"]
        assert [str(n) for n in Chord.parse("F#maj").get_notes()] == ["F#", "A#", "C#"]

    def test_explicit_octave(self) -> None:
        """Chords on an explicit octave carry it on every note."""
        assert [str(n) for n in Chord.parse("C4maj").get_notes()] == ["C4", "E4", "G4"]

    def test_duration_shared(self) -> None:
        """Chord tones take the root's duration."""
        notes = Chord.parse("Cmajw").get_notes()
        assert all(n.duration == 1.0 for n in notes)
        assert [str(n) for n in notes] == ["Cw", "Ew", "Gw"]

    def test_harmonic_flags(self) -> None:
        """Only the root starts the chord."""
        notes = Chord.parse("Cmaj").get_notes()
        assert notes[0].is_first
        assert not notes[1].is_first
        assert notes[1].is_harmonic
        assert not notes[1].is_melodic


class TestChordBass:
    """Tests for bass notes and inversion recovery."""

    def test_with_bass_note(self) -> None:
        """The bass picks the inversion."""
        chord = Chord.parse("Cmaj")
        assert chord.with_bass_note("E").inversion == 1
        assert chord.with_bass_note("G").inversion == 2
        assert chord.with_bass_note(Note(72)).inversion == 0

    def test_with_bass_note_not_in_chord(self) -> None:
        """An unrelated bass leaves the chord unchanged."""
        chord = Chord.parse("Cmaj^")
        assert chord.with_bass_note("F").inversion == 1

    def test_parsed_bass(self) -> None:
        """'^' followed by a note sets the bass."""
        assert Chord.parse("Cmaj^E").inversion == 1
        assert Chord.parse("Cmaj^G").inversion == 2
        assert Chord.parse("Cmin^Eb").inversion == 1

    def test_bass_note(self) -> None:
        """The bass note follows the inversion."""
        assert Chord.parse("Cmaj").bass_note().position_in_octave == 0
        bass = Chord.parse("Cmaj^").bass_note()
        assert bass.position_in_octave == 4
        assert bass.tone_string() == "E"

    def test_inversion_from_chord_string(self) -> None:
        """Carets are counted."""
        assert Chord.inversion_from_chord_string("Cmaj^^") == 2
        assert Chord.inversion_from_chord_string("Cmaj") == 0

    def test_with_octave(self) -> None:
        """Moving to an octave keeps the pitch class."""
        assert Chord.parse("Cmaj").with_octave(4).root.value == 48
        assert Chord.parse("Ebmaj").with_octave(6).root.value == 75


class TestChordRendering:
    """Tests for patterns and strings."""

    def test_get_pattern(self) -> None:
        """Root, name, carets, decorators."""
        assert str(Chord.parse("Cmaj").get_pattern()) == "CMAJ"
        assert str(Chord.parse("Cmaj^^w").get_pattern()) == "CMAJ^^w"
        assert str(Chord.parse("E4min7").get_pattern()) == "E4MIN7"

    def test_pattern_reparses(self) -> None:
        """A chord's pattern parses back to the same chord."""
        chord = Chord.parse("Bb3dom7^h")
        assert Chord.parse(str(chord)) == chord

    def test_unknown_intervals_fall_back_to_notes(self) -> None:
        """Unregistered interval sets render as stacked notes."""
        chord = Chord(Note.parse("C"), Intervals("1 2 3"))
        assert chord.chord_type() is None
        assert str(chord.get_pattern()) == "C+D+E"

    def test_note_strings(self) -> None:
        """Stacked note forms."""
        chord = Chord.parse("C5maj")
        assert chord.to_note_string() == "(C5+E5+G5)"
        assert str(chord.pattern_with_notes()) == "C5+E5+G5"
        assert str(Chord.parse("Cmaj").pattern_with_notes_except_root()) == "E+G"
        assert str(Chord.parse("Cmaj^").pattern_with_notes_except_bass()) == "G+C"

    def test_human_readable(self) -> None:
        """Human-readable aliases replace cryptic names."""
        assert Chord.parse("Cmaj6%9").to_human_readable_string() == "C6/9"
        assert Chord.parse("Cmaj").to_human_readable_string() == "CMAJ"

    def test_debug_string(self) -> None:
        """The debug string includes intervals and inversion."""
        debug = Chord.parse("Cmaj^").to_debug_string()
        assert "Chord Intervals = 1 3 5" in debug
        assert "Inversion = 1" in debug


class TestChordClassification:
    """Tests for chord types and comparison."""

    def test_major_minor(self) -> None:
        """Triads are recognized."""
        assert Chord.parse("Cmaj").is_major()
        assert Chord.parse("Amin").is_minor()
        assert not Chord.parse("Cdom7").is_major()

    def test_chord_type_with_registry(self, registry: ChordRegistry) -> None:
        """Custom registries name custom chords."""
        registry.add("POWER", "1 5")
        chord = Chord(Note.parse("E"), Intervals("1 5"))
        assert chord.chord_type(registry) == "POWER"
        assert chord.chord_type() is None

    def test_equals_notes(self) -> None:
        """Inversions contain the same notes."""
        assert Chord.parse("Cmaj").equals_notes(Chord.parse("Cmaj^"))
        assert not Chord.parse("Cmaj").equals_notes(Chord.parse("Cmin"))

    def test_from_key(self) -> None:
        """A key's scale becomes the chord's intervals."""
        chord = Chord.from_key(Key(Note.parse("C"), Scale.MAJOR))
        assert chord.intervals == Intervals("1 2 3 4 5 6 7")

    def test_from_key_without_scale(self) -> None:
        """Keys without a scale cannot make a chord."""
        with pytest.raises(ValueError):
            Chord.from_key(Key(Note.parse("C")))


class TestChordInference:
    """Tests for naming chords from notes."""

    def test_root_position(self) -> None:
        """C4 E4 G4 is C major."""
        assert infer_chord_name(_notes("C4 E4 G4")) == "CMAJ"

    def test_first_inversion(self) -> None:
        """E4 G4 C5 is C major over E."""
        assert infer_chord_name(_notes("E4 G4 C5")) == "CMAJ^E4"

    def test_from_string(self) -> None:
        """Space-separated notes are accepted."""
        assert infer_chord_name("A4 C5 E5") == "AMIN"

    def test_flat_disposition(self) -> None:
        """Flat spellings give a flat root."""
        assert infer_chord_name("Eb5 G5 Bb5") == "EbMAJ"

    def test_sharp_disposition(self) -> None:
        """Sharp spellings give a sharp root."""
        assert infer_chord_name("C#5 F5 G#5") == "C#MAJ"

    def test_seventh(self) -> None:
        """Four-note chords are recognized."""
        assert infer_chord_name("G4 B4 D5 F5") == "GDOM7"

    def test_doubled_notes(self) -> None:
        """Octave doublings collapse to one pitch class."""
        assert infer_chord_name("C4 E4 G4 C5") == "CMAJ"

    def test_bass_across_octaves(self) -> None:
        """Wide voicings name the bass without its octave."""
        assert infer_chord_name("E3 C5 G5") == "CMAJ^E"

    def test_no_match(self) -> None:
        """Clusters are not chords."""
        assert infer_chord_name("C5 C#5 D5") is None
        assert Chord.from_notes("C5 C#5 D5") is None

    def test_empty(self) -> None:
        """At least one note is needed."""
        with pytest.raises(ValueError):
            infer_chord_name([])

    def test_custom_registry(self) -> None:
        """Only the given registry's chords are considered."""
        registry = ChordRegistry({"POWER": "1 5"})
        assert infer_chord_name("C4 G4", registry) == "CPOWER"
        assert infer_chord_name("C4 E4 G4", registry) is None

    def test_from_notes(self) -> None:
        """Inference can return a chord."""
        chord = Chord.from_notes("E4 G4 C5")
        assert chord is not None
        assert chord.is_major()
        assert chord.inversion == 1
        assert chord.root.position_in_octave == 0

    def test_expansion_round_trip(self, registry: ChordRegistry) -> None:
        """Expanded built-in chords are named back (single octave only)."""
        for name, pattern in BUILTIN_CHORDS.items():
            degrees = [int(re.sub(r"\D", "", token)) for token in pattern.split()]
            if max(degrees) > 7:
                continue
            notes = Chord(Note.parse("C4"), Intervals(pattern)).get_notes()
            expected = "C" + registry.chord_type(Intervals(pattern))
            assert infer_chord_name(notes, registry) == expected, name

    def test_stacked_pitches(self) -> None:
        """Notes are joined with '+'."""
        assert stacked_pitches(_notes("C5 E5 G5")) == "C5+E5+G5"
