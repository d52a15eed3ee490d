"""Guitar chord lookup by name or fingering.

This library loads chord diagram data into an immutable in-memory store and
resolves chord names (e.g., "Am7"), fret patterns (e.g., "x02210") or
ambiguous queries to ranked chord records.

Examples
--------
>>> from chord_lookup import ChordStore, search, find_chord

>>> store = ChordStore.load([
...     {"key": "A", "suffix": "minor", "positions": [{"frets": "x02210", "fingers": "002310"}]},
...     {"key": "C", "suffix": "major", "positions": [{"frets": "x32010", "fingers": "032010"}]},
... ])

>>> # Look up by name, with aliases and enharmonic spellings
>>> find_chord(store, "Amin").name
'Aminor'

>>> # Look up by fret pattern, exact or prefix
>>> [r.name for r in search(store, "x32")]
['Cmajor']
"""

from chord_lookup.classifier import QueryKind, classify, looks_like_chord_name, looks_like_fingering
from chord_lookup.dataset import load_dataset
from chord_lookup.errors import IndexCorruptedError, InvalidQuery, LoadError
from chord_lookup.models import Alias, ChordRecord, Position
from chord_lookup.normalize import normalize_key, normalize_suffix
from chord_lookup.resolver import (
    find_chord,
    resolve_both,
    resolve_by_fingering,
    resolve_by_name,
    search,
)
from chord_lookup.store import ChordStore, StoreHandle

__all__ = [
    "Alias",
    "ChordRecord",
    "ChordStore",
    "IndexCorruptedError",
    "InvalidQuery",
    "LoadError",
    "Position",
    "QueryKind",
    "StoreHandle",
    "classify",
    "find_chord",
    "load_dataset",
    "looks_like_chord_name",
    "looks_like_fingering",
    "normalize_key",
    "normalize_suffix",
    "resolve_both",
    "resolve_by_fingering",
    "resolve_by_name",
    "search",
]
