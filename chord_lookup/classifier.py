"""Query classification for chord searches.

This module decides whether a free-form query reads like a chord name, a
fret pattern, or could be either. It is a heuristic, not a grammar: a
lowercase "a" is both a chord root and a valid fret character, and such
queries are left to the combined search strategy.
"""

from __future__ import annotations

from typing import Literal

from chord_lookup.models import is_valid_frets

QueryKind = Literal["fingering", "chord_name", "ambiguous"]

CHORD_ROOTS = frozenset("ABCDEFGabcdefg")


def looks_like_fingering(query: str) -> bool:
    """Check if every character of the query is a fret character.

    Parameters
    ----------
    query : str
        The raw query.

    Returns
    -------
    bool
        True if the query only holds digits, lowercase letters or "X".

    Examples
    --------
    >>> looks_like_fingering("x47654")
    True
    >>> looks_like_fingering("abcdef")
    True
    >>> looks_like_fingering("Am7")
    False
    """
    return is_valid_frets(query)


def looks_like_chord_name(query: str) -> bool:
    """Check if the query starts with a chord root letter.

    Examples
    --------
    >>> looks_like_chord_name("Am7")
    True
    >>> looks_like_chord_name("x47654")
    False
    """
    return bool(query) and query[0] in CHORD_ROOTS


def classify(query: str) -> QueryKind:
    """Classify a query for dispatch to a resolver.

    Parameters
    ----------
    query : str
        The raw query.

    Returns
    -------
    QueryKind
        "fingering" or "chord_name" when exactly one heuristic matches,
        "ambiguous" when both or neither do.

    Examples
    --------
    >>> classify("x02210")
    'fingering'
    >>> classify("C#m7")
    'chord_name'
    >>> classify("cafe")
    'ambiguous'
    """
    fingering = looks_like_fingering(query)
    chord_name = looks_like_chord_name(query)

    if fingering and not chord_name:
        return "fingering"
    if chord_name and not fingering:
        return "chord_name"
    return "ambiguous"
