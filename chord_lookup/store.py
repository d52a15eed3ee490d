"""In-memory chord store and its lookup indexes.

A :class:`ChordStore` is built once from a dataset with
:meth:`ChordStore.load` and never changes afterwards, so any number of
readers can share it without locking. :class:`StoreHandle` publishes a
replacement store when the dataset is reloaded.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from chord_lookup.errors import IndexCorruptedError, LoadError
from chord_lookup.models import Alias, ChordRecord
from chord_lookup.normalize import key_spellings, normalize_identity, suffix_aliases

logger = logging.getLogger(__name__)


class ChordStore:
    """Immutable chord index.

    Do not call the constructor directly; use :meth:`load`.

    Examples
    --------
    >>> store = ChordStore.load([
    ...     {"key": "A", "suffix": "minor", "positions": [{"frets": "x02210", "fingers": "002310"}]},
    ... ])
    >>> store.lookup_exact("A", "minor").name
    'Aminor'
    >>> [r.name for r in store.lookup_fingering_prefix("x02")]
    ['Aminor']
    """

    __slots__ = ("_records", "_by_exact", "_by_normalized", "_by_alias", "_by_fingering", "_fingerings")

    def __init__(
        self,
        records: tuple[ChordRecord, ...],
        by_exact: dict[tuple[str, str], ChordRecord],
        by_normalized: dict[tuple[str, str], tuple[ChordRecord, ...]],
        by_alias: dict[tuple[str, str], Alias],
        by_fingering: dict[str, tuple[ChordRecord, ...]],
    ) -> None:
        self._records = records
        self._by_exact = by_exact
        self._by_normalized = by_normalized
        self._by_alias = by_alias
        self._by_fingering = by_fingering
        self._fingerings = tuple(sorted(by_fingering))

    @classmethod
    def load(cls, dataset: Iterable[Mapping[str, Any]], strict: bool = False) -> ChordStore:
        """Build a store from raw chord entries.

        Parameters
        ----------
        dataset : Iterable[Mapping[str, Any]]
            Entries shaped like ``{"key", "suffix", "positions": [...]}``.
        strict : bool
            Raise on the first malformed entry instead of skipping it.

        Returns
        -------
        ChordStore
            A fully built store. Existing stores are left untouched.

        Raises
        ------
        LoadError
            If the dataset is not iterable, no entry could be loaded, or
            ``strict`` is set and an entry is malformed.
        """
        try:
            entries = list(dataset)
        except TypeError as e:
            msg = f"Chord dataset is not iterable: {e}"
            raise LoadError(msg) from e

        records: list[ChordRecord] = []
        by_exact: dict[tuple[str, str], ChordRecord] = {}
        by_normalized: dict[tuple[str, str], list[ChordRecord]] = {}
        by_fingering: dict[str, list[ChordRecord]] = {}

        for index, entry in enumerate(entries):
            try:
                record = ChordRecord.from_dict(entry)
            except LoadError as e:
                if strict:
                    raise
                logger.warning("Skipping chord entry %d: %s", index, e)
                continue

            if record.identity in by_exact:
                if strict:
                    msg = f"Duplicate chord {record.key}|{record.suffix} at entry {index}"
                    raise LoadError(msg)
                logger.warning("Skipping duplicate chord %s|%s at entry %d", record.key, record.suffix, index)
                continue

            records.append(record)
            by_exact[record.identity] = record
            by_normalized.setdefault(normalize_identity(record.key, record.suffix), []).append(record)

            for position in record.positions:
                if not position.is_indexable:
                    logger.debug("Not indexing frets %r of %s", position.frets, record.name)
                    continue
                bucket = by_fingering.setdefault(position.frets, [])
                if not bucket or bucket[-1] is not record:
                    bucket.append(record)

        if not records:
            msg = f"No chords could be loaded from {len(entries)} entries"
            raise LoadError(msg)

        by_alias = _build_aliases(records, by_exact)

        store = cls(
            records=tuple(records),
            by_exact=by_exact,
            by_normalized={k: tuple(v) for k, v in by_normalized.items()},
            by_alias=by_alias,
            by_fingering={k: tuple(v) for k, v in by_fingering.items()},
        )
        logger.info(
            "Loaded %d chords (%d fingerings, %d aliases)",
            len(store._records),
            len(store._fingerings),
            len(store._by_alias),
        )
        return store

    @property
    def records(self) -> tuple[ChordRecord, ...]:
        """All records in dataset order."""
        return self._records

    @property
    def fingerings(self) -> tuple[str, ...]:
        """All indexed fret patterns, sorted ascending."""
        return self._fingerings

    @property
    def aliases(self) -> tuple[Alias, ...]:
        return tuple(self._by_alias.values())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def lookup_exact(self, key: str, suffix: str) -> ChordRecord | None:
        """Return the record stored under exactly this (key, suffix) spelling."""
        return self._by_exact.get((key, suffix))

    def lookup_normalized(self, normalized_key: str, normalized_suffix: str) -> tuple[ChordRecord, ...]:
        """Return the records whose normalized (key, suffix) matches.

        Parameters
        ----------
        normalized_key : str
            Output of :func:`~chord_lookup.normalize.normalize_key`.
        normalized_suffix : str
            Output of :func:`~chord_lookup.normalize.normalize_suffix`.

        Returns
        -------
        tuple[ChordRecord, ...]
            Matching records in dataset order; empty when none match.
        """
        return self._by_normalized.get((normalized_key, normalized_suffix), ())

    def lookup_alias(self, key: str, suffix: str) -> ChordRecord | None:
        """Return the record an alternate spelling points at, if any."""
        alias = self._by_alias.get((key, suffix))
        return alias.target if alias is not None else None

    def lookup_fingering_exact(self, pattern: str) -> tuple[ChordRecord, ...]:
        """Return the records having a position with exactly these frets."""
        return self._by_fingering.get(pattern, ())

    def lookup_fingering_prefix(self, prefix: str) -> tuple[ChordRecord, ...]:
        """Return the records having a position whose frets start with ``prefix``.

        Parameters
        ----------
        prefix : str
            The leading part of a fret pattern (e.g., "x02").

        Returns
        -------
        tuple[ChordRecord, ...]
            Records ordered by fret pattern ascending, then dataset order.
            Each record appears once.

        Raises
        ------
        IndexCorruptedError
            If the sorted pattern list references a pattern with no bucket.
        """
        results: dict[tuple[str, str], ChordRecord] = {}
        start = bisect.bisect_left(self._fingerings, prefix)
        for pattern in self._fingerings[start:]:
            if not pattern.startswith(prefix):
                break
            bucket = self._by_fingering.get(pattern)
            if bucket is None:
                msg = f"Fingering {pattern!r} is listed but not indexed"
                raise IndexCorruptedError(msg)
            for record in bucket:
                results.setdefault(record.identity, record)
        return tuple(results.values())

    def by_key(self, key: str) -> tuple[ChordRecord, ...]:
        """Return every record stored under this raw key, in dataset order."""
        return tuple(r for r in self._records if r.key == key)


def _build_aliases(
    records: list[ChordRecord],
    by_exact: dict[tuple[str, str], ChordRecord],
) -> dict[tuple[str, str], Alias]:
    """Generate alternate spellings for every record.

    Stored spellings always win over aliases, and the first record to claim
    an alias keeps it.
    """
    by_alias: dict[tuple[str, str], Alias] = {}
    for record in records:
        for key in key_spellings(record.key):
            for suffix in suffix_aliases(record.suffix):
                identity = (key, suffix)
                if identity in by_exact or identity in by_alias:
                    continue
                by_alias[identity] = Alias(key=key, suffix=suffix, target=record)
    return by_alias


class StoreHandle:
    """Holds the current store and swaps in a replacement on reload.

    Readers grab ``handle.store`` once per request and keep using that
    snapshot; a concurrent :meth:`reload` never changes it under them.

    Parameters
    ----------
    store : ChordStore
        The initially published store.
    """

    def __init__(self, store: ChordStore) -> None:
        self._store = store

    @property
    def store(self) -> ChordStore:
        return self._store

    def reload(self, dataset: Iterable[Mapping[str, Any]]) -> ChordStore:
        """Build a new store from ``dataset`` and publish it.

        Raises
        ------
        LoadError
            If the new dataset cannot be loaded; the current store stays.
        """
        store = ChordStore.load(dataset)
        self._store = store
        logger.info("Published reloaded chord store with %d chords", len(store))
        return store
