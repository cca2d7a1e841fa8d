"""
Exception types.

Everything derives from ValueError so callers that already guard theory
calls with ``except ValueError`` keep working.
"""


class UnknownDegreeError(ValueError):
    """An interval token refers to a degree outside the 1-15 table."""


class NotationError(ValueError):
    """A notation string could not be turned into a note, chord or key."""
