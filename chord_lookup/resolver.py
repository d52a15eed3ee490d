"""Ranked chord resolution over a :class:`~chord_lookup.store.ChordStore`.

Every function takes the store explicitly and is read-only, so resolvers
can run concurrently against a shared store.

Name queries go through, in order: the priority-chord rules, the normalized
index, and finally a partial match on the key sorted by chord-type
frequency, with a matching alias promoted to the front. A bare key skips the
normalized index and lists every chord of that key. Fingering queries try an
exact fret pattern, then a prefix. Ambiguous queries combine both.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from chord_lookup.classifier import CHORD_ROOTS, classify
from chord_lookup.errors import InvalidQuery
from chord_lookup.models import ChordRecord
from chord_lookup.normalize import chord_type_priority, normalize_identity, normalize_key
from chord_lookup.store import ChordStore

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
# resolve_both stops at the name results when there are at least this many
COMBINED_SHORTCUT = 5

ACCIDENTALS = frozenset("#b")


def split_chord_name(query: str) -> tuple[str, str]:
    """Split a chord name into its key and suffix.

    The key is a root letter A-G (either case) followed by any ``#``/``b``
    accidentals. Without a root letter the whole query is the key.

    Parameters
    ----------
    query : str
        The chord name (e.g., "Bbm7").

    Returns
    -------
    tuple[str, str]
        The (key, suffix) pair, both as typed.

    Examples
    --------
    >>> split_chord_name("Bbm7")
    ('Bb', 'm7')
    >>> split_chord_name("C#")
    ('C#', '')
    >>> split_chord_name("Cdim")
    ('C', 'dim')
    >>> split_chord_name("x02210")
    ('x02210', '')
    """
    if not query or query[0] not in CHORD_ROOTS:
        return query, ""
    end = 1
    while end < len(query) and query[end] in ACCIDENTALS:
        end += 1
    return query[:end], query[end:]


def sort_by_chord_type(records: Iterable[ChordRecord]) -> list[ChordRecord]:
    """Sort records by chord-type priority, keeping dataset order on ties."""
    return sorted(records, key=lambda r: chord_type_priority(r.suffix))


def _preferred_first(preferred: ChordRecord | None, others: Iterable[ChordRecord]) -> list[ChordRecord]:
    if preferred is None:
        return []
    return [preferred, *(r for r in others if r is not preferred)]


def _select_b_flat(store: ChordStore, query: str) -> list[ChordRecord]:
    a_sharp = store.by_key("A#")
    if query == "BB":
        preferred = _preferred_first(store.lookup_exact("A#", "major"), a_sharp)
        if preferred:
            return preferred
    return sort_by_chord_type(a_sharp)


def _select_a_minor(store: ChordStore, query: str) -> list[ChordRecord]:
    minor_like = (r for r in store.by_key("A") if r.suffix.lower().startswith("m"))
    return _preferred_first(store.lookup_exact("A", "minor"), minor_like)


def _select_c_sharp_major(store: ChordStore, query: str) -> list[ChordRecord]:
    return _preferred_first(store.lookup_exact("C#", "major"), store.by_key("C#"))


@dataclass(frozen=True)
class PriorityRule:
    """A product-level ranking override for a colloquial query.

    These encode which chord people expect for common spellings, which the
    chord-type ordering alone does not capture.

    Parameters
    ----------
    name : str
        Short label used in logs.
    matches : Callable[[str], bool]
        Predicate over the upper-cased query.
    select : Callable[[ChordStore, str], list[ChordRecord]]
        Returns the ranked records, or an empty list to fall through.
    """

    name: str
    matches: Callable[[str], bool]
    select: Callable[[ChordStore, str], list[ChordRecord]]


PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule(
        name="b-flat",
        matches=lambda q: q.startswith("BB"),
        select=_select_b_flat,
    ),
    PriorityRule(
        name="a-minor",
        matches=lambda q: q in {"AM", "AMIN", "AMINOR"},
        select=_select_a_minor,
    ),
    PriorityRule(
        name="c-sharp-major",
        matches=lambda q: q in {"C#", "C#MAJ", "C#MAJOR"},
        select=_select_c_sharp_major,
    ),
)


def _normalized_matches(store: ChordStore, key: str, suffix: str) -> tuple[ChordRecord, ...]:
    """Normalized lookup with the record spelled exactly like the query first."""
    matches = store.lookup_normalized(*normalize_identity(key, suffix))
    exact = store.lookup_exact(key, suffix)
    if exact is None or not matches or matches[0] is exact:
        return matches
    return tuple(_preferred_first(exact, matches))


def _partial_matches(store: ChordStore, key: str, suffix: str) -> list[ChordRecord]:
    normalized_key = normalize_key(key)
    lowered = suffix.lower()
    return sort_by_chord_type(
        r
        for r in store.records
        if normalize_key(r.key) == normalized_key and r.suffix.lower().startswith(lowered)
    )


def resolve_by_name(store: ChordStore, query: str) -> tuple[ChordRecord, ...]:
    """Resolve a chord-name query to ranked records.

    Parameters
    ----------
    store : ChordStore
        The store to search.
    query : str
        A non-empty chord name (e.g., "Am", "Bbmaj7", "c#m").

    Returns
    -------
    tuple[ChordRecord, ...]
        At most ``MAX_RESULTS`` records, best match first. Empty when
        nothing matches.

    Examples
    --------
    >>> store = ChordStore.load([
    ...     {"key": "A", "suffix": "major", "positions": [{"frets": "x02220", "fingers": "001230"}]},
    ...     {"key": "A", "suffix": "minor", "positions": [{"frets": "x02210", "fingers": "002310"}]},
    ... ])
    >>> [r.name for r in resolve_by_name(store, "Amin")]
    ['Aminor', 'Amajor']
    >>> [r.name for r in resolve_by_name(store, "Aminor")]
    ['Aminor', 'Amajor']
    >>> [r.name for r in resolve_by_name(store, "A")]
    ['Amajor', 'Aminor']
    """
    upper = query.upper()
    for rule in PRIORITY_RULES:
        if not rule.matches(upper):
            continue
        selected = rule.select(store, upper)
        if selected:
            logger.debug("Query %r resolved by priority rule %s", query, rule.name)
            return tuple(selected[:MAX_RESULTS])

    key, suffix = split_chord_name(query)

    if suffix:
        matches = _normalized_matches(store, key, suffix)
        if matches:
            return matches[:MAX_RESULTS]

    ranked = _partial_matches(store, key, suffix)
    aliased = store.lookup_alias(key[:1].upper() + key[1:], suffix)
    if aliased is not None:
        logger.debug("Query %r matched alias of %s", query, aliased.name)
        ranked = _preferred_first(aliased, ranked)
    return tuple(ranked[:MAX_RESULTS])


def resolve_by_fingering(store: ChordStore, query: str) -> tuple[ChordRecord, ...]:
    """Resolve a fret pattern to records, exact match first, then prefix.

    Parameters
    ----------
    store : ChordStore
        The store to search.
    query : str
        A full or partial fret pattern (e.g., "x02210", "x02").

    Returns
    -------
    tuple[ChordRecord, ...]
        At most ``MAX_RESULTS`` records. Empty when nothing matches.
    """
    exact = store.lookup_fingering_exact(query)
    if exact:
        return exact[:MAX_RESULTS]
    return store.lookup_fingering_prefix(query)[:MAX_RESULTS]


def resolve_both(store: ChordStore, query: str) -> tuple[ChordRecord, ...]:
    """Resolve a query that could be a chord name or a fret pattern.

    Name results come first. When there are at least ``COMBINED_SHORTCUT``
    of them, only those are returned; otherwise fingering results are
    appended and duplicates (same key and suffix) dropped.
    """
    by_name = resolve_by_name(store, query)
    if len(by_name) >= COMBINED_SHORTCUT:
        return by_name[:COMBINED_SHORTCUT]

    combined: dict[tuple[str, str], ChordRecord] = {}
    for record in (*by_name, *resolve_by_fingering(store, query)):
        combined.setdefault(record.identity, record)
    return tuple(combined.values())[:MAX_RESULTS]


def _require_query(query: str) -> str:
    stripped = query.strip()
    if not stripped:
        msg = "Search query required"
        raise InvalidQuery(msg)
    return stripped


def search(store: ChordStore, query: str) -> tuple[ChordRecord, ...]:
    """Classify a free-form query and run the matching resolver.

    Raises
    ------
    InvalidQuery
        If the query is empty or blank.

    Examples
    --------
    >>> store = ChordStore.load([
    ...     {"key": "C", "suffix": "major", "positions": [{"frets": "x32010", "fingers": "032010"}]},
    ... ])
    >>> [r.name for r in search(store, "x320")]
    ['Cmajor']
    """
    query = _require_query(query)
    kind = classify(query)
    logger.debug("Query %r classified as %s", query, kind)

    if kind == "fingering":
        return resolve_by_fingering(store, query)
    if kind == "chord_name":
        return resolve_by_name(store, query)
    return resolve_both(store, query)


def find_chord(store: ChordStore, name: str) -> ChordRecord | None:
    """Return the single best record for a chord name.

    Tries the stored spelling, then the normalized spelling, then the full
    name resolution, and returns the first hit.

    Raises
    ------
    InvalidQuery
        If the name is empty or blank.
    """
    name = _require_query(name)
    key, suffix = split_chord_name(name)

    exact = store.lookup_exact(key, suffix)
    if exact is not None:
        return exact

    matches = _normalized_matches(store, key, suffix)
    if matches:
        return matches[0]

    results = resolve_by_name(store, name)
    return results[0] if results else None
