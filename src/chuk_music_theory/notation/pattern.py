"""
Pattern - the textual form every theory object renders itself to.

A pattern is an ordered list of notation tokens, written space-separated.
Renderers (players, sequencers, exporters) consume patterns; the parser turns
tokens back into notes, chords and keys.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chuk_music_theory.core.note import Note


@runtime_checkable
class PatternProducer(Protocol):
    """Anything that can render itself as a pattern."""

    def get_pattern(self) -> Pattern: ...


@runtime_checkable
class NoteProducer(Protocol):
    """Anything that can produce concrete notes."""

    def get_notes(self) -> list[Note] | None: ...


class Pattern:
    """
    An ordered sequence of notation tokens.

    Items may be strings (split on whitespace), other patterns, or any
    PatternProducer.
    """

    __slots__ = ("_tokens",)

    def __init__(self, *items: str | Pattern | PatternProducer) -> None:
        self._tokens: list[str] = []
        self.add(*items)

    def add(self, *items: str | Pattern | PatternProducer) -> Pattern:
        """Append items and return this pattern."""
        for item in items:
            if isinstance(item, Pattern):
                self._tokens.extend(item._tokens)
            elif isinstance(item, str):
                self._tokens.extend(item.split())
            else:
                self._tokens.extend(item.get_pattern().tokens)
        return self

    @property
    def tokens(self) -> list[str]:
        return list(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Pattern):
            return self._tokens == other._tokens
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        return " ".join(self._tokens)

    def __repr__(self) -> str:
        return f"Pattern({str(self)!r})"
