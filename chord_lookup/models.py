"""Chord diagram data models for chord-lookup.

This module defines the immutable records served by the lookup engine:
fingering positions, chord records and the aliases that point at them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chord_lookup.errors import LoadError

# One character per string: 0-9, a-z for fret 10 and up (a=10, b=11, ...), x/X muted
FRETS_RE = re.compile(r"[0-9a-zX]+")


def is_valid_frets(frets: str) -> bool:
    """Check whether a fret string follows the fingering-pattern grammar.

    Examples
    --------
    >>> is_valid_frets("x02210")
    True
    >>> is_valid_frets("x-2210")
    False
    """
    return FRETS_RE.fullmatch(frets) is not None


def _optional_str(entry: Mapping[str, Any], field: str) -> str | None:
    value = entry.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"Position field '{field}' must be a string, got {type(value).__name__}"
        raise LoadError(msg)
    return value


@dataclass(frozen=True)
class Position:
    """One fret/finger diagram of a chord.

    Parameters
    ----------
    frets : str
        Per-string fret pattern (e.g., "x02210").
    fingers : str
        Per-string finger assignment, passed through unmodified.
    barres : str | None
        Barre description, passed through unmodified.
    capo : str | None
        Capo flag, passed through unmodified.

    Examples
    --------
    >>> pos = Position(frets="x02210", fingers="002310")
    >>> pos.is_indexable
    True
    """

    frets: str
    fingers: str
    barres: str | None = None
    capo: str | None = None

    @property
    def is_indexable(self) -> bool:
        """Whether the frets can go into the fingering index."""
        return is_valid_frets(self.frets)

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any]) -> Position:
        """Build a position from its JSON-equivalent mapping.

        Raises
        ------
        LoadError
            If ``frets`` is missing or a field has the wrong type.
        """
        if not isinstance(entry, Mapping):
            msg = f"Position must be an object, got {type(entry).__name__}"
            raise LoadError(msg)
        frets = entry.get("frets")
        if not isinstance(frets, str):
            msg = "Position is missing a string 'frets' field"
            raise LoadError(msg)
        fingers = _optional_str(entry, "fingers") or ""
        return cls(
            frets=frets,
            fingers=fingers,
            barres=_optional_str(entry, "barres"),
            capo=_optional_str(entry, "capo"),
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize to the on-disk shape, omitting absent optionals."""
        result = {"frets": self.frets, "fingers": self.fingers}
        if self.barres is not None:
            result["barres"] = self.barres
        if self.capo is not None:
            result["capo"] = self.capo
        return result


@dataclass(frozen=True)
class ChordRecord:
    """A chord definition with its fingering positions.

    Parameters
    ----------
    key : str
        Root note as spelled in the dataset (e.g., "A", "C#").
    suffix : str
        Chord type as spelled in the dataset (e.g., "major", "m7").
    positions : tuple[Position, ...]
        Fingerings in preference order; the first one is the primary.

    Examples
    --------
    >>> record = ChordRecord(key="A", suffix="minor", positions=())
    >>> record.identity
    ('A', 'minor')
    >>> record.name
    'Aminor'
    """

    key: str
    suffix: str
    positions: tuple[Position, ...]

    @property
    def identity(self) -> tuple[str, str]:
        """The (key, suffix) pair identifying this record."""
        return (self.key, self.suffix)

    @property
    def name(self) -> str:
        return f"{self.key}{self.suffix}"

    @property
    def primary(self) -> Position | None:
        """The most common fingering, or None when the record has none."""
        return self.positions[0] if self.positions else None

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any]) -> ChordRecord:
        """Parse a raw dataset entry.

        Parameters
        ----------
        entry : Mapping[str, Any]
            Mapping shaped like ``{"key", "suffix", "positions": [...]}``.

        Returns
        -------
        ChordRecord
            The parsed record. A missing suffix is read as "".

        Raises
        ------
        LoadError
            If the entry is not a mapping, ``key`` or ``positions`` is
            missing, or any position is malformed.
        """
        if not isinstance(entry, Mapping):
            msg = f"Chord entry must be an object, got {type(entry).__name__}"
            raise LoadError(msg)

        key = entry.get("key")
        if not isinstance(key, str) or not key:
            msg = "Chord entry is missing a 'key'"
            raise LoadError(msg)

        suffix = entry.get("suffix", "")
        if suffix is None:
            suffix = ""
        if not isinstance(suffix, str):
            msg = f"Chord {key!r} has a non-string suffix"
            raise LoadError(msg)

        raw_positions = entry.get("positions")
        if not isinstance(raw_positions, list):
            msg = f"Chord {key}{suffix} is missing a 'positions' list"
            raise LoadError(msg)

        positions = tuple(Position.from_dict(p) for p in raw_positions)
        return cls(key=key, suffix=suffix, positions=positions)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``{key, suffix, positions}`` response shape."""
        return {
            "key": self.key,
            "suffix": self.suffix,
            "positions": [p.to_dict() for p in self.positions],
        }

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Alias:
    """An alternate (key, suffix) spelling pointing at a canonical record.

    Parameters
    ----------
    key : str
        Alternate key spelling (e.g., "Bb" for an "A#" record).
    suffix : str
        Alternate suffix spelling (e.g., "min" for a "minor" record).
    target : ChordRecord
        The canonical record.
    """

    key: str
    suffix: str
    target: ChordRecord
