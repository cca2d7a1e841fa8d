"""
Constants and lookup tables for the theory engine.

No magic strings - the note-name tables, degree table, duration table and
the built-in chord library all live here.
"""

from typing import Literal

# Semitones per octave
OCTAVE = 12
MIN_OCTAVE = 0
MAX_OCTAVE = 10

# Octave used when a note is written without one (C5 = 60)
DEFAULT_OCTAVE = 5

# Base frequency of MIDI note 0 (C-1 in scientific pitch notation)
BASE_FREQUENCY = 8.1757989156

# Rendering disposition: -1 prefers flats, +1 prefers sharps
Disposition = Literal[-1, 0, 1]
FLAT_DISPOSITION = -1
SHARP_DISPOSITION = 1

# Name tables indexed by position in octave
NOTE_NAMES_COMMON: list[str] = ["C", "C#", "D", "Eb", "E", "F", "F#", "G", "G#", "A", "Bb", "B"]
NOTE_NAMES_SHARP: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
NOTE_NAMES_FLAT: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Natural letters to position in octave
LETTER_POSITIONS: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

FRENCH_LETTERS: dict[str, str] = {
    "A": "La",
    "B": "Si",
    "C": "Do",
    "D": "Ré",
    "E": "Mi",
    "F": "Fa",
    "G": "Sol",
}

# Whole-number degree (1-15) to half-steps above the root
DEGREE_TO_HALFSTEPS: dict[int, int] = {
    1: 0,
    2: 2,
    3: 4,
    4: 5,
    5: 7,
    6: 9,
    7: 11,
    8: 12,
    9: 14,
    10: 16,
    11: 17,
    12: 19,
    13: 21,
    14: 23,
    15: 24,
}
HALFSTEPS_TO_DEGREE: dict[int, int] = {v: k for k, v in DEGREE_TO_HALFSTEPS.items()}

# Duration symbols, largest first. Dotted variants are 1.5x the plain value.
DURATION_SYMBOLS: dict[str, float] = {
    "w": 1.0,
    "h": 0.5,
    "q": 0.25,
    "i": 0.125,
    "s": 0.0625,
    "t": 0.03125,
    "x": 0.015625,
    "o": 0.0078125,
}

# Fractional remainder to symbol, matched exactly (dotted before plain)
DURATION_TABLE: list[tuple[float, str]] = [
    (0.75, "h."),
    (0.5, "h"),
    (0.375, "q."),
    (0.25, "q"),
    (0.1875, "i."),
    (0.125, "i"),
    (0.09375, "s."),
    (0.0625, "s"),
    (0.046875, "t."),
    (0.03125, "t"),
    (0.0234375, "x."),
    (0.015625, "x"),
    (0.01171875, "o."),
    (0.0078125, "o"),
]

WHOLE_SYMBOL = "w"
LITERAL_DURATION_MARKER = "/"
DOT = "."

# Notation markers
REST_SYMBOL = "R"
INVERSION_MARKER = "^"
CHORD_NOTE_SEPARATOR = "+"
ON_VELOCITY_MARKER = "a"
OFF_VELOCITY_MARKER = "d"
TIE_MARKER = "-"

# General MIDI percussion range
MIN_PERCUSSION_NOTE = 35
MAX_PERCUSSION_NOTE = 81

PERCUSSION_NAMES: list[str] = [
    "ACOUSTIC_BASS_DRUM",  # 35
    "BASS_DRUM",  # 36
    "SIDE_STICK",  # 37
    "ACOUSTIC_SNARE",  # 38
    "HAND_CLAP",  # 39
    "ELECTRIC_SNARE",  # 40
    "LO_FLOOR_TOM",  # 41
    "CLOSED_HI_HAT",  # 42
    "HIGH_FLOOR_TOM",  # 43
    "PEDAL_HI_HAT",  # 44
    "LO_TOM",  # 45
    "OPEN_HI_HAT",  # 46
    "LO_MID_TOM",  # 47
    "HI_MID_TOM",  # 48
    "CRASH_CYMBAL_1",  # 49
    "HI_TOM",  # 50
    "RIDE_CYMBAL_1",  # 51
    "CHINESE_CYMBAL",  # 52
    "RIDE_BELL",  # 53
    "TAMBOURINE",  # 54
    "SPLASH_CYMBAL",  # 55
    "COWBELL",  # 56
    "CRASH_CYMBAL_2",  # 57
    "VIBRASLAP",  # 58
    "RIDE_CYMBAL_2",  # 59
    "HI_BONGO",  # 60
    "LO_BONGO",  # 61
    "MUTE_HI_CONGA",  # 62
    "OPEN_HI_CONGA",  # 63
    "LO_CONGA",  # 64
    "HI_TIMBALE",  # 65
    "LO_TIMBALE",  # 66
    "HI_AGOGO",  # 67
    "LO_AGOGO",  # 68
    "CABASA",  # 69
    "MARACAS",  # 70
    "SHORT_WHISTLE",  # 71
    "LONG_WHISTLE",  # 72
    "SHORT_GUIRO",  # 73
    "LONG_GUIRO",  # 74
    "CLAVES",  # 75
    "HI_WOOD_BLOCK",  # 76
    "LO_WOOD_BLOCK",  # 77
    "MUTE_CUICA",  # 78
    "OPEN_CUICA",  # 79
    "MUTE_TRIANGLE",  # 80
    "OPEN_TRIANGLE",  # 81
]

# Built-in chord library: name -> interval pattern
BUILTIN_CHORDS: dict[str, str] = {
    # Major
    "MAJ": "1 3 5",
    "MAJ6": "1 3 5 6",
    "MAJ7": "1 3 5 7",
    "MAJ9": "1 3 5 7 9",
    "ADD9": "1 3 5 9",
    "MAJ6%9": "1 3 5 6 9",
    "MAJ7%6": "1 3 5 6 7",
    "MAJ13": "1 3 5 7 9 13",
    # Minor
    "MIN": "1 b3 5",
    "MIN6": "1 b3 5 6",
    "MIN7": "1 b3 5 b7",
    "MIN9": "1 b3 5 b7 9",
    "MIN11": "1 b3 5 b7 9 11",
    "MIN7%11": "1 b3 5 b7 11",
    "MINADD9": "1 b3 5 9",
    "MIN6%9": "1 b3 5 6",
    "MINMAJ7": "1 b3 5 7",
    "MINMAJ9": "1 b3 5 7 9",
    # Dominant
    "DOM7": "1 3 5 b7",
    "DOM7%6": "1 3 5 6 b7",
    "DOM7%11": "1 3 5 b7 11",
    "DOM7SUS": "1 4 5 b7",
    "DOM7%6SUS": "1 4 5 6 b7",
    "DOM9": "1 3 5 b7 9",
    "DOM11": "1 3 5 b7 9 11",
    "DOM13": "1 3 5 b7 9 13",
    "DOM13SUS": "1 3 5 b7 11 13",
    "DOM7%6%11": "1 3 5 b7 9 11 13",
    # Augmented
    "AUG": "1 3 b6",
    "AUG7": "1 3 b6 b7",
    # Diminished
    "DIM": "1 b3 b5",
    "DIM7": "1 b3 b5 6",
    # Suspended
    "SUS4": "1 4 5",
    "SUS2": "1 2 5",
    # Added
    "ADD2": "1 2 3 5",
    "ADD4": "1 3 4 5",
}

# Aliases for the more cryptic chord names
BUILTIN_HUMAN_READABLE: dict[str, str] = {
    "MAJ6%9": "6/9",
    "MAJ7%6": "7/6",
}

MAJOR_TRIAD = "1 3 5"
MINOR_TRIAD = "1 b3 5"
DIMINISHED_TRIAD = "1 b3 b5"
MAJOR_SEVENTH = "1 3 5 7"
MINOR_SEVENTH = "1 b3 5 b7"
DIMINISHED_SEVENTH = "1 b3 b5 6"
MAJOR_SEVENTH_SIXTH = "1 3 5 6 7"

# Key signatures by accidental count (major keys)
SHARP_KEY_ROOTS: list[str] = ["C", "G", "D", "A", "E", "B", "F#", "C#"]
FLAT_KEY_ROOTS: list[str] = ["C", "F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"]


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_DEGREE = "Unknown degree in interval token: '{token}'."
    INVALID_INVERSION = "Inversion {inversion} out of range for {size} intervals."
    INVALID_NOTE = "Invalid note: '{text}'."
    INVALID_CHORD = "Invalid chord: '{text}'. No registered chord name found."
    INVALID_KEY = "Invalid key signature: '{text}'."
    INVALID_DURATION = "Invalid duration: '{text}'."
    EMPTY_NOTES = "At least one note is required."
    INVALID_CHORD_LIBRARY = "Chord library '{path}' must be a mapping."
