"""
Tests for Scale and Key.

Tests cover:
- Scale constants, naming and disposition
- Key signatures from notation and from chords
"""

import pytest

from chuk_music_theory.core import DEFAULT_KEY, Chord, Intervals, Key, Note, Scale, ScaleIndicator
from chuk_music_theory.errors import NotationError


class TestScale:
    """Tests for Scale."""

    def test_major_minor_strings(self) -> None:
        """Major and minor print as maj/min."""
        assert str(Scale.MAJOR) == "maj"
        assert str(Scale.MINOR) == "min"
        assert str(Scale.CIRCLE_OF_FIFTHS) == "circle of fifths"

    def test_equality_by_intervals(self) -> None:
        """Scales compare by pattern only."""
        assert Scale(Intervals("1 2 3 4 5 6 7")) == Scale.MAJOR
        assert str(Scale(Intervals("1 2 3 4 5 6 7"))) == "maj"
        assert Scale.MAJOR != Scale.MINOR

    def test_named_scale(self) -> None:
        """Other scales print their name."""
        pentatonic = Scale.from_pattern("1 2 3 5 6", name="pentatonic")
        assert str(pentatonic) == "pentatonic"
        assert str(pentatonic.with_name("major pentatonic")) == "major pentatonic"

    def test_disposition(self) -> None:
        """Major scales prefer sharps, all others flats."""
        assert Scale.MAJOR.disposition() == 1
        assert Scale.MINOR.disposition() == -1
        assert Scale.from_pattern("1 2 3 5 6").disposition() == -1
        assert Scale.from_pattern("1 2 3 5 6").with_indicator(ScaleIndicator.MAJOR).disposition() == 1

    def test_circle_of_fifths_intervals(self) -> None:
        """Trailing flats lower the degree."""
        assert Scale.CIRCLE_OF_FIFTHS.intervals.to_halfstep_array() == [0, 2, 3, 5, 7, 9, 10]
        assert Scale.MINOR.intervals.to_halfstep_array() == [0, 2, 3, 5, 7, 8, 10]


class TestKey:
    """Tests for Key."""

    def test_key_signature(self) -> None:
        """Root followed by scale."""
        assert Key(Note.parse("C"), Scale.MAJOR).key_signature() == "Cmaj"
        assert Key(Note.parse("E4"), Scale.MINOR).key_signature() == "E4min"
        assert str(Key(Note.parse("Bb"), Scale.MAJOR)) == "Bbmaj"

    def test_default_key(self) -> None:
        """The default key is C4 major."""
        assert DEFAULT_KEY.key_signature() == "C4maj"
        assert DEFAULT_KEY.root.value == 48

    def test_sharp_signatures(self) -> None:
        """Sharps walk the circle of fifths upward."""
        assert Key.parse("K").root.value == 60
        assert Key.parse("K#").root.tone_string() == "G"
        assert Key.parse("K###").root.tone_string() == "A"
        assert Key.parse("K###").scale == Scale.MAJOR

    def test_flat_signatures(self) -> None:
        """Flats walk the circle of fifths downward."""
        assert Key.parse("Kb").root.tone_string() == "F"
        assert Key.parse("Kbb").root.tone_string() == "Bb"
        assert Key.parse("Kbbbbbbb").root.tone_string() == "Cb"

    def test_invalid_signature(self) -> None:
        """Too many or mixed accidentals are rejected."""
        with pytest.raises(NotationError):
            Key.parse("K########")
        with pytest.raises(NotationError):
            Key.parse("K#b")

    def test_chord_keys(self) -> None:
        """Chords give major or minor keys."""
        assert Key.parse("Amin").scale == Scale.MINOR
        assert Key.parse("Amin").root.tone_string() == "A"
        assert Key.parse("Ebmaj").key_signature() == "Ebmaj"

    def test_undefined_scale(self) -> None:
        """Chords that are neither major nor minor leave the scale unset."""
        key = Key.parse("Cdom7")
        assert key.scale is None
        assert key.key_signature() == "C"

    def test_from_chord(self) -> None:
        """The chord's root becomes the key's root."""
        key = Key.from_chord(Chord.parse("F#min"))
        assert key.scale == Scale.MINOR
        assert key.root.tone_string() == "F#"

    def test_not_a_key(self) -> None:
        """Unparseable keys raise."""
        with pytest.raises(NotationError):
            Key.parse("Hello")
