#!/usr/bin/env python3
"""Search a chord dataset from the command line.

Loads a chord dataset (a JSON file or a directory of JSON files), resolves
each query and prints the matching chords as JSON.

Examples
--------
    python scripts/search_chords.py --data testdata/chords Am x02210
    python scripts/search_chords.py --data testdata/chords --mode chord "C#"
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from chord_lookup.config import Settings, configure_logging
from chord_lookup.dataset import load_dataset
from chord_lookup.errors import InvalidQuery, LoadError
from chord_lookup.resolver import find_chord, resolve_by_fingering, resolve_by_name, search
from chord_lookup.store import ChordStore

MODES = {
    "search": search,
    "name": resolve_by_name,
    "fingering": resolve_by_fingering,
}


def run_query(store: ChordStore, query: str, mode: str, limit: int | None) -> list[dict]:
    """Resolve one query and return the serialized records.

    Parameters
    ----------
    store
        The loaded chord store.
    query
        The query string.
    mode
        One of "search", "name", "fingering" or "chord".
    limit
        Maximum number of records to return, or None for all.

    Returns
    -------
    list[dict]
        Serialized records, best match first.
    """
    if mode == "chord":
        record = find_chord(store, query)
        records = (record,) if record is not None else ()
    else:
        records = MODES[mode](store, query)
    if limit is not None:
        records = records[:limit]
    return [r.to_dict() for r in records]


def main() -> None:
    """Run the chord search CLI."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Look up guitar chords by name or fingering")
    parser.add_argument("queries", nargs="+", help="Chord names or fret patterns")
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data_path,
        help="Chord dataset file or directory",
    )
    parser.add_argument(
        "--mode",
        choices=["search", "name", "fingering", "chord"],
        default="search",
        help="How to interpret the queries",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum results per query",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        store = ChordStore.load(load_dataset(args.data))
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output: dict[str, list[dict]] = {}
    for query in args.queries:
        try:
            output[query] = run_query(store, query, args.mode, args.limit)
        except InvalidQuery as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not output[query]:
            print(f"No chords found for {query!r}", file=sys.stderr)

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
