"""
Tests for ChordRegistry.

Tests cover:
- Built-in chords and lookup in both directions
- Name ordering and chord-name sniffing
- Adding, removing and copying
- YAML chord libraries
"""

import threading
from pathlib import Path

import pytest

from chuk_music_theory.core import ChordRegistry, Intervals, default_registry


class TestBuiltins:
    """Tests for the built-in chord table."""

    def test_get_intervals(self, registry: ChordRegistry) -> None:
        """Names are case-insensitive."""
        assert registry.get_intervals("maj") == Intervals("1 3 5")
        assert registry.get_intervals("MIN7") == Intervals("1 b3 5 b7")
        assert registry.get_intervals("nope") is None

    def test_chord_type(self, registry: ChordRegistry) -> None:
        """Reverse lookup by pattern."""
        assert registry.chord_type(Intervals("1 3 5")) == "MAJ"
        assert registry.chord_type("1 b3 b5 6") == "DIM7"
        assert registry.chord_type("1 2 3") is None

    def test_duplicate_pattern_resolves_to_first_in_order(self, registry: ChordRegistry) -> None:
        """MIN6 and MIN6%9 share a pattern; the longer name comes first."""
        assert registry.chord_type("1 b3 5 6") == "MIN6%9"

    def test_human_readable(self, registry: ChordRegistry) -> None:
        """Aliases fall back to the name."""
        assert registry.human_readable_name("MAJ6%9") == "6/9"
        assert registry.human_readable_name("MAJ") == "MAJ"

    def test_default_registry_is_shared(self) -> None:
        """The default registry is created once."""
        assert default_registry() is default_registry()
        assert "MAJ" in default_registry()


class TestOrdering:
    """Tests for name order and sniffing."""

    def test_longest_first(self, registry: ChordRegistry) -> None:
        """Names are ordered by length, then alphabetically."""
        names = registry.names()
        lengths = [len(name) for name in names]
        assert lengths == sorted(lengths, reverse=True)
        assert names[0] == "DOM7%6%11"
        assert names.index("MAJ7") < names.index("MAJ")

    def test_match_chord_name(self, registry: ChordRegistry) -> None:
        """The chord name is found after a valid note."""
        assert registry.match_chord_name("Cmaj7") == "MAJ7"
        assert registry.match_chord_name("F#5min") == "MIN"
        assert registry.match_chord_name("Ebmaj^^") == "MAJ"
        assert registry.match_chord_name("Cmin7%11") == "MIN7%11"

    def test_no_match(self, registry: ChordRegistry) -> None:
        """Text without a note prefix or chord name does not match."""
        assert registry.match_chord_name("Xmaj") is None
        assert registry.match_chord_name("maj") is None
        assert registry.match_chord_name("C") is None
        assert not registry.is_valid_chord("Hdim")
        assert registry.is_valid_chord("Bbdim")

    def test_longer_name_wins(self, registry: ChordRegistry) -> None:
        """A new longer name takes precedence over its prefix."""
        assert registry.match_chord_name("CMAJ7X") == "MAJ7"
        registry.add("MAJ7X", "1 3 5 7 #11")
        assert registry.match_chord_name("CMAJ7X") == "MAJ7X"
        assert registry.match_chord_name("CMAJ7") == "MAJ7"


class TestMutation:
    """Tests for adding and removing chords."""

    def test_add_upper_cases(self, registry: ChordRegistry) -> None:
        """Names are stored upper-cased."""
        registry.add("quartal", Intervals("1 4 b7"))
        assert "QUARTAL" in registry.names()
        assert registry.chord_type("1 4 b7") == "QUARTAL"

    def test_remove(self, registry: ChordRegistry) -> None:
        """Removed chords are no longer found."""
        registry.remove("maj")
        assert "MAJ" not in registry
        assert registry.chord_type("1 3 5") is None

    def test_remove_missing_is_silent(self, registry: ChordRegistry) -> None:
        """Removing an unknown name is a no-op."""
        size = len(registry)
        registry.remove("NOT_A_CHORD")
        assert len(registry) == size

    def test_copy_is_independent(self, registry: ChordRegistry) -> None:
        """Copies do not share the table."""
        clone = registry.copy()
        clone.add("WIDE", "1 5 9")
        assert "WIDE" in clone
        assert "WIDE" not in registry
        assert clone.human_readable_name("MAJ7%6") == "7/6"

    def test_empty_registry(self) -> None:
        """A registry can start empty."""
        registry = ChordRegistry()
        assert len(registry) == 0
        assert registry.chord_type("1 3 5") is None

    def test_concurrent_adds(self) -> None:
        """Chords added from several threads are all kept."""
        registry = ChordRegistry()

        def add_range(start: int) -> None:
            for i in range(start, start + 50):
                registry.add(f"C{i}", "1 3 5")

        threads = [threading.Thread(target=add_range, args=(n * 50,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(registry) == 200


class TestYamlLibrary:
    """Tests for loading chord libraries."""

    def test_load_yaml(self, registry: ChordRegistry, temp_dir: Path) -> None:
        """Chords and aliases are read from YAML."""
        path = temp_dir / "chords.yaml"
        path.write_text(
            "chords:\n"
            "  maj7x: '1 3 5 7 #11'\n"
            "  quartal: '1 4 b7'\n"
            "human_readable:\n"
            "  maj7x: 'maj7#11'\n"
        )
        assert registry.load_yaml(path) == 2
        assert registry.get_intervals("MAJ7X") == Intervals("1 3 5 7 #11")
        assert registry.human_readable_name("MAJ7X") == "maj7#11"

    def test_from_yaml_without_builtins(self, temp_dir: Path) -> None:
        """Libraries can replace the built-ins."""
        path = temp_dir / "chords.yaml"
        path.write_text("chords:\n  power: '1 5'\n")
        registry = ChordRegistry.from_yaml(path, include_builtins=False)
        assert registry.names() == ["POWER"]

    def test_from_yaml_with_builtins(self, temp_dir: Path) -> None:
        """By default the library extends the built-ins."""
        path = temp_dir / "chords.yaml"
        path.write_text("chords:\n  power: '1 5'\n")
        registry = ChordRegistry.from_yaml(path)
        assert "POWER" in registry
        assert "MAJ" in registry

    def test_invalid_library(self, registry: ChordRegistry, temp_dir: Path) -> None:
        """A YAML list is not a chord library."""
        path = temp_dir / "chords.yaml"
        path.write_text("- maj\n- min\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            registry.load_yaml(path)
