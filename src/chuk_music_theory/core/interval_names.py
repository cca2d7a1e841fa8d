"""
Named intervals - seconds through sevenths, with English and French names.

Used by Note.add_interval for spelling-aware transposition. Each interval is
identified by its degree span (2 = a second, 3 = a third...) and its size in
half-steps; a diminished third and a major second share a size but not a span.
"""

from __future__ import annotations

from enum import Enum

UNDEFINED = "undefined"


class IntervalName(Enum):
    """(half-steps, degree span, French name, English name)."""

    SECOND_DIMINISHED = (0, 2, "SECONDE DIMINUEE", "DIM 2ND")
    SECOND_MINOR = (1, 2, "SECONDE MINEURE", "MINOR 2ND")
    SECOND_MAJOR = (2, 2, "SECONDE MAJEURE", "MAJOR 2ND")
    SECOND_AUGMENTED = (3, 2, "SECONDE AUGMENTEE", "AUG 2ND")

    THIRD_DIMINISHED = (2, 3, "TIERCE DIMINUEE", "DIM 3RD")
    THIRD_MINOR = (3, 3, "TIERCE MINEURE", "MINOR 3RD")
    THIRD_MAJOR = (4, 3, "TIERCE MAJEURE", "MAJOR 3RD")
    THIRD_AUGMENTED = (5, 3, "TIERCE AUGMENTEE", "AUG 3RD")

    FOURTH_DIMINISHED = (4, 4, "QUARTE DIMINUEE", "DIM 4TH")
    FOURTH_PERFECT = (5, 4, "QUARTE JUSTE", "PERFECT 4TH")
    FOURTH_AUGMENTED = (6, 4, "QUARTE AUGMENTEE", "AUG 4TH")

    FIFTH_DIMINISHED = (6, 5, "QUINTE DIMINUEE", "DIM 5TH")
    FIFTH_PERFECT = (7, 5, "QUINTE JUSTE", "PERFECT 5TH")
    FIFTH_AUGMENTED = (8, 5, "QUINTE AUGMENTEE", "AUG 5TH")

    SIXTH_DIMINISHED = (7, 6, "SIXTE DIMINUEE", "DIM 6TH")
    SIXTH_MINOR = (8, 6, "SIXTE MINEURE", "MINOR 6TH")
    SIXTH_MAJOR = (9, 6, "SIXTE MAJEURE", "MAJOR 6TH")
    SIXTH_AUGMENTED = (10, 6, "SIXTE AUGMENTEE", "AUG 6TH")

    SEVENTH_DIMINISHED = (9, 7, "SEPTIEME DIMINUEE", "DIM 7TH")
    SEVENTH_MINOR = (10, 7, "SEPTIEME MINEURE", "MINOR 7TH")
    SEVENTH_MAJOR = (11, 7, "SEPTIEME MAJEURE", "MAJOR 7TH")
    SEVENTH_AUGMENTED = (12, 7, "SEPTIEME AUGMENTEE", "AUG 7TH")

    @property
    def half_steps(self) -> int:
        return self.value[0]

    @property
    def degree_span(self) -> int:
        return self.value[1]

    @property
    def french_name(self) -> str:
        return self.value[2]

    @property
    def english_name(self) -> str:
        return self.value[3]

    @classmethod
    def find(cls, degree_span: int, half_steps: int) -> IntervalName | None:
        """Find the interval with this span and size, if any."""
        for member in cls:
            if member.degree_span == degree_span and member.half_steps == half_steps:
                return member
        return None

    @classmethod
    def name_for(cls, degree_span: int, half_steps: int, french: bool = False) -> str:
        """
        Name the interval with this span and size.

        Returns:
            The name in the requested language, or 'undefined'
        """
        member = cls.find(degree_span, half_steps)
        if member is None:
            return UNDEFINED
        return member.french_name if french else member.english_name

    @classmethod
    def lookup(cls, name: str) -> IntervalName | None:
        """Find an interval by its French or English name."""
        for member in cls:
            if name in (member.french_name, member.english_name):
                return member
        return None
