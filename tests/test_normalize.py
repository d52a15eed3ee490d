"""Tests for key and suffix normalization."""

import pytest

from chord_lookup.normalize import (
    ALIAS_SUFFIXES,
    CASED_SUFFIX_ALIASES,
    ENHARMONIC_KEYS,
    SUFFIX_ALIASES,
    UNKNOWN_PRIORITY,
    chord_type_priority,
    key_spellings,
    normalize_identity,
    normalize_key,
    normalize_suffix,
    suffix_aliases,
)


class TestNormalizeKey:
    """Test enharmonic key normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Bb", "A#"),
            ("bb", "A#"),
            ("Db", "C#"),
            ("Eb", "D#"),
            ("Gb", "F#"),
            ("Ab", "G#"),
            ("ab", "G#"),
            ("B#", "C"),
            ("E#", "F"),
        ],
    )
    def test_enharmonic_spellings(self, raw: str, expected: str) -> None:
        """Test that flat and double-letter spellings map to sharps."""
        assert normalize_key(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A", "A"),
            ("c#", "C#"),
            ("f", "F"),
            ("H", "H"),
            ("", ""),
        ],
    )
    def test_unknown_keys_pass_through_uppercased(self, raw: str, expected: str) -> None:
        """Test that keys outside the table are only upper-cased."""
        assert normalize_key(raw) == expected

    def test_table_is_keyed_uppercase(self) -> None:
        """Test that every table entry is reachable after upper-casing."""
        for spelling in ENHARMONIC_KEYS:
            assert spelling == spelling.upper()

    def test_canonical_keys_are_stable(self) -> None:
        """Test that normalizing a canonical key leaves it unchanged."""
        for canonical in ENHARMONIC_KEYS.values():
            assert normalize_key(canonical) == canonical


class TestNormalizeSuffix:
    """Test suffix alias normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "major"),
            ("M", "major"),
            ("maj", "major"),
            ("MAJ", "major"),
            ("m", "minor"),
            ("min", "minor"),
            ("Minor", "minor"),
            ("5", "5"),
            ("power", "5"),
            ("fifth", "5"),
            ("7", "7"),
            ("dom", "7"),
            ("dom7", "7"),
            ("m7", "m7"),
            ("min7", "m7"),
            ("minor7", "m7"),
            ("maj7", "maj7"),
            ("Major7", "maj7"),
            ("M7", "maj7"),
            ("sus2", "sus2"),
            ("SUS4", "sus4"),
        ],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        """Test the alias table."""
        assert normalize_suffix(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("dim", "DIM"),
            ("add9", "ADD9"),
            ("m/C", "M/C"),
            ("major", "MAJOR"),
        ],
    )
    def test_unknown_suffixes_pass_through_uppercased(self, raw: str, expected: str) -> None:
        """Test that suffixes outside the table are only upper-cased."""
        assert normalize_suffix(raw) == expected

    def test_case_distinguishes_minor_from_major(self) -> None:
        """Test that "m" and "M" stay distinct chord types."""
        assert normalize_suffix("m") != normalize_suffix("M")
        assert normalize_suffix("m7") != normalize_suffix("M7")

    def test_uppercase_table_is_keyed_uppercase(self) -> None:
        """Test that every upper-case table entry is reachable."""
        for spelling in SUFFIX_ALIASES:
            assert spelling == spelling.upper()

    def test_cased_spellings_win_over_uppercase_table(self) -> None:
        """Test that case-sensitive spellings are resolved before upper-casing."""
        for spelling, canonical in CASED_SUFFIX_ALIASES.items():
            assert normalize_suffix(spelling) == canonical

    def test_identity(self) -> None:
        """Test normalizing a pair."""
        assert normalize_identity("Eb", "min") == ("D#", "minor")


class TestAliasGeneration:
    """Test alternate spellings generated for stored records."""

    @pytest.mark.parametrize(
        ("suffix", "expected"),
        [
            ("major", ("major", "maj", "M", "")),
            ("", ("", "major", "maj", "M")),
            ("minor", ("minor", "min", "m")),
            ("7", ("7", "dominant7", "dom7")),
            ("min7", ("min7", "m7", "minor7")),
            ("maj7", ("maj7", "major7", "M7")),
            ("sus2", ("sus2", "suspended2")),
            ("add9", ("add9",)),
        ],
    )
    def test_suffix_aliases(self, suffix: str, expected: tuple[str, ...]) -> None:
        """Test that the stored suffix comes first and duplicates are dropped."""
        assert suffix_aliases(suffix) == expected

    def test_alias_table_entries_are_lowercase_keys(self) -> None:
        """Test that alias lookups keyed by lower-cased suffix are reachable."""
        for suffix in ALIAS_SUFFIXES:
            assert suffix == suffix.lower()

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("A#", ("A#", "Bb")),
            ("C#", ("C#", "Db")),
            ("G#", ("G#", "Ab")),
            ("E", ("E",)),
            ("Bb", ("Bb",)),
        ],
    )
    def test_key_spellings(self, key: str, expected: tuple[str, ...]) -> None:
        """Test flat spellings of sharp keys."""
        assert key_spellings(key) == expected

    def test_flat_spellings_normalize_back(self) -> None:
        """Test that every generated flat spelling normalizes to its sharp key."""
        for key in ("A#", "C#", "D#", "F#", "G#"):
            for spelling in key_spellings(key):
                assert normalize_key(spelling) == key


class TestChordTypePriority:
    """Test the chord-type ranking table."""

    @pytest.mark.parametrize(
        ("suffix", "expected"),
        [
            ("", 0),
            ("major", 0),
            ("Major", 0),
            ("minor", 1),
            ("m", 1),
            ("7", 2),
            ("maj7", 3),
            ("m7", 4),
            ("min7", 4),
            ("dim", 5),
            ("aug", 6),
            ("sus2", 7),
            ("sus4", 8),
        ],
    )
    def test_known_types(self, suffix: str, expected: int) -> None:
        """Test the fixed ordering of common chord types."""
        assert chord_type_priority(suffix) == expected

    @pytest.mark.parametrize("suffix", ["13", "add9", "m/C", "7sus4"])
    def test_unknown_types_rank_last(self, suffix: str) -> None:
        """Test that other chord types get the lowest priority."""
        assert chord_type_priority(suffix) == UNKNOWN_PRIORITY
