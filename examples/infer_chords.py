#!/usr/bin/env python3
"""
Example: Naming chords from notes and expanding chords into notes.

Shows both directions of the chord model, inversions, and a custom chord
library alongside the built-ins.

Usage:
    python examples/infer_chords.py
"""

import logging

from chuk_music_theory import Chord, ChordRegistry, Intervals, Key, Note, infer_chord_name


def main() -> None:
    """Demonstrate chord expansion and inference."""
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("CHUK Music Theory Chord Demo")
    print("=" * 40)
    print()

    # Name -> pitches
    print("Chord expansion:")
    for text in ["Cmaj", "Cmaj^", "Cmaj^^", "Ebmin7", "F#dom7^E"]:
        chord = Chord.parse(text)
        notes = " ".join(str(note) for note in chord.get_notes())
        print(f"  {text:10} -> {notes:20} {chord.to_note_string()}")
    print()

    # Pitches -> name
    print("Chord inference:")
    for text in ["C4 E4 G4", "E4 G4 C5", "Eb5 G5 Bb5", "G4 B4 D5 F5", "E3 C5 G5", "C5 C#5 D5"]:
        name = infer_chord_name(text)
        print(f"  {text:14} -> {name or '(no chord)'}")
    print()

    # A custom chord next to the built-ins
    registry = ChordRegistry.with_builtins()
    registry.add("QUARTAL", Intervals("1 4 b7"))
    print("Custom registry:")
    print(f"  C F Bb        -> {infer_chord_name('C5 F5 Bb5', registry)}")
    print(f"  Dquartal      -> {Chord.parse('Dquartal', registry).to_note_string()}")
    print()

    # Keys
    print("Keys:")
    for text in ["K###", "Kbb", "Amin", "Cdom7"]:
        key = Key.parse(text)
        print(f"  {text:6} -> {key.key_signature()}")
    print()

    print(f"A5 frequency: {Note.frequency_for('A5')} Hz")


if __name__ == "__main__":
    main()
