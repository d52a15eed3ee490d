"""Reading chord datasets from JSON files.

A dataset is either a single JSON file holding one chord entry or a list of
entries, or a directory tree of such files (one file per chord is the usual
layout, e.g. ``A/minor.json``). Entries come out in the raw
``{key, suffix, positions}`` shape consumed by
:meth:`chord_lookup.store.ChordStore.load`.

Positions that store frets as integer lists (``-1`` for a muted string) are
converted to the string form on the way in.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from chord_lookup.errors import LoadError

logger = logging.getLogger(__name__)

MUTED = "x"
HIGH_FRET_BASE = 10


def encode_fret(fret: int) -> str:
    """Encode a single fret number as one pattern character.

    Examples
    --------
    >>> encode_fret(-1), encode_fret(0), encode_fret(10), encode_fret(12)
    ('x', '0', 'a', 'c')
    """
    if fret < 0:
        return MUTED
    if fret < HIGH_FRET_BASE:
        return str(fret)
    offset = fret - HIGH_FRET_BASE
    if offset >= 26:
        msg = f"Fret {fret} is out of range"
        raise ValueError(msg)
    return chr(ord("a") + offset)


def encode_frets(frets: list[int]) -> str:
    """Encode a list of fret numbers as a fret pattern.

    Examples
    --------
    >>> encode_frets([-1, 0, 2, 2, 1, 0])
    'x02210'
    >>> encode_frets([10, 12, 12, 11, 10, 10])
    'accbaa'
    """
    return "".join(encode_fret(f) for f in frets)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def _is_fret_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, int) and not isinstance(v, bool) for v in value)


def _coerce_position(position: Any) -> Any:
    """Convert list-valued position fields to their string form.

    Fingers are encoded like frets so each string keeps one character.
    """
    if not isinstance(position, dict):
        return position
    coerced = dict(position)
    frets = coerced.get("frets")
    if _is_fret_list(frets):
        coerced["frets"] = encode_frets(frets)
    fingers = coerced.get("fingers")
    if _is_fret_list(fingers):
        coerced["fingers"] = encode_frets(fingers)
    for field in ("barres", "capo"):
        if field in coerced and coerced[field] is not None and not isinstance(coerced[field], str):
            coerced[field] = _stringify(coerced[field])
    return coerced


def _coerce_entry(entry: Any) -> Any:
    if not isinstance(entry, dict) or not isinstance(entry.get("positions"), list):
        return entry
    coerced = dict(entry)
    coerced["positions"] = [_coerce_position(p) for p in entry["positions"]]
    return coerced


def read_chord_file(path: Path) -> list[Any]:
    """Read the chord entries held in one JSON file.

    Parameters
    ----------
    path : Path
        A JSON file containing one entry object or a list of entries.

    Returns
    -------
    list[Any]
        The raw entries, with list-valued position fields converted.
        Entries are not validated here.

    Raises
    ------
    LoadError
        If the file cannot be read, is not UTF-8 JSON, or holds frets that
        cannot be encoded.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        msg = f"Cannot read chord file {path}: {e}"
        raise LoadError(msg) from e

    entries = data if isinstance(data, list) else [data]
    try:
        return [_coerce_entry(e) for e in entries]
    except ValueError as e:
        msg = f"Cannot convert chord file {path}: {e}"
        raise LoadError(msg) from e


def read_chord_directory(directory: Path) -> list[Any]:
    """Read every ``*.json`` file below a directory, in sorted path order.

    Files that cannot be read are logged and skipped.
    """
    entries: list[Any] = []
    for path in sorted(directory.rglob("*.json")):
        try:
            entries.extend(read_chord_file(path))
        except LoadError as e:
            logger.warning("Skipping %s", e)
    logger.info("Read %d chord entries from %s", len(entries), directory)
    return entries


def load_dataset(path: Path | str) -> list[Any]:
    """Read a chord dataset from a file or a directory.

    Parameters
    ----------
    path : Path | str
        A JSON file or a directory of JSON files.

    Returns
    -------
    list[Any]
        Raw entries ready for :meth:`~chord_lookup.store.ChordStore.load`.

    Raises
    ------
    LoadError
        If the path does not exist, or names a file that cannot be read.
    """
    path = Path(path)
    if path.is_dir():
        return read_chord_directory(path)
    if path.is_file():
        return read_chord_file(path)
    msg = f"Chord dataset not found: {path}"
    raise LoadError(msg)
