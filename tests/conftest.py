"""Shared fixtures for chord-lookup tests."""

from pathlib import Path

import pytest

from chord_lookup import ChordStore

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"


def chord(key: str, suffix: str, *frets: str, barres: str | None = None) -> dict:
    """Build a raw dataset entry with one position per fret pattern."""
    positions = []
    for pattern in frets:
        position = {"frets": pattern, "fingers": "0" * len(pattern)}
        if barres is not None:
            position["barres"] = barres
        positions.append(position)
    return {"key": key, "suffix": suffix, "positions": positions}


SAMPLE_ENTRIES = [
    chord("A", "major", "x02220", "577655"),
    chord("A", "minor", "x02210", "577555"),
    chord("A", "7", "x02020"),
    chord("A", "dim", "x01212"),
    chord("A", "m7", "x02010"),
    chord("A", "maj7", "x02120"),
    chord("A", "sus4", "x02230"),
    chord("A#", "major", "x13331", barres="1"),
    chord("A#", "minor", "x13321", barres="1"),
    chord("A#", "7", "x13131", barres="1"),
    chord("C", "major", "x32010"),
    chord("C", "6", "x32210"),
    chord("A", "m/C", "x32210"),
    chord("C#", "minor", "x46654", barres="4"),
    chord("C#", "major", "x43121", barres="1"),
    chord("G#", "major", "466544", barres="4"),
    chord("E", "minor", "022000"),
    chord("E", "major", "022100", "ceedcc"),
]


@pytest.fixture
def entries() -> list[dict]:
    """A fresh copy of the sample dataset."""
    return [dict(e) for e in SAMPLE_ENTRIES]


@pytest.fixture
def store(entries: list[dict]) -> ChordStore:
    """A store loaded from the sample dataset."""
    return ChordStore.load(entries)


def names(records) -> list[str]:
    """Return record names (key + suffix) in order."""
    return [r.name for r in records]
