"""
Scale - an interval pattern with a name and a major/minor indicator.

Scales are Intervals from a root. The indicator decides how notes in the scale
are spelled: major scales prefer sharps, everything else prefers flats.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import ClassVar

from chuk_music_theory.constants import FLAT_DISPOSITION, SHARP_DISPOSITION
from chuk_music_theory.core.intervals import Intervals


class ScaleIndicator(IntEnum):
    """Whether a scale is major, minor or neither."""

    MAJOR = 1
    MINOR = -1
    NONE = 0


@dataclass(frozen=True, eq=False)
class Scale:
    """
    A scale defined by its degree pattern.

    Equality and hashing use the intervals only; two scales with the same
    pattern but different names are equal.

    Examples:
        Scale.MAJOR = "1 2 3 4 5 6 7", prints as 'maj'
        Scale.MINOR = "1 2 b3 4 5 b6 b7", prints as 'min'
        Scale(Intervals("1 2 4 5 6"), name="pentatonic")
    """

    intervals: Intervals
    name: str | None = None
    indicator: ScaleIndicator = ScaleIndicator.NONE

    MAJOR: ClassVar[Scale]
    MINOR: ClassVar[Scale]
    CIRCLE_OF_FIFTHS: ClassVar[Scale]

    @classmethod
    def from_pattern(cls, pattern: str, name: str | None = None) -> Scale:
        return cls(Intervals(pattern), name=name)

    def with_name(self, name: str) -> Scale:
        return replace(self, name=name)

    def with_indicator(self, indicator: ScaleIndicator) -> Scale:
        return replace(self, indicator=indicator)

    def disposition(self) -> int:
        """+1 (sharps) for major scales, -1 (flats) otherwise."""
        if self.indicator == ScaleIndicator.MAJOR:
            return SHARP_DISPOSITION
        return FLAT_DISPOSITION

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scale):
            return NotImplemented
        return self.intervals == other.intervals

    def __hash__(self) -> int:
        return hash(self.intervals)

    def __str__(self) -> str:
        if self == Scale.MAJOR:
            return "maj"
        if self == Scale.MINOR:
            return "min"
        return self.name or str(self.intervals)


Scale.MAJOR = Scale(Intervals("1 2 3 4 5 6 7"), "major", ScaleIndicator.MAJOR)
Scale.MINOR = Scale(Intervals("1 2 b3 4 5 b6 b7"), "minor", ScaleIndicator.MINOR)
Scale.CIRCLE_OF_FIFTHS = Scale(Intervals("1 2 3b 4 5 6 7b"), "circle of fifths")
