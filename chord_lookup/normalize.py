"""Key and suffix normalization for chord lookups.

This module maps the many ways a chord can be spelled onto one canonical
(key, suffix) pair used as a lookup identity. Normalization only ever
produces lookup keys; stored records keep their original spelling.

Examples
--------
>>> normalize_key("Bb")
'A#'
>>> normalize_suffix("min")
'minor'
>>> normalize_suffix("m7")
'm7'
>>> chord_type_priority("maj7")
3
"""

# Upper-cased flat or double-letter spellings to their canonical sharp spelling
ENHARMONIC_KEYS: dict[str, str] = {
    "BB": "A#",
    "DB": "C#",
    "EB": "D#",
    "GB": "F#",
    "AB": "G#",
    "B#": "C",
    "E#": "F",
}

# Canonical sharp keys to the flat spellings used when generating aliases
FLAT_SPELLINGS: dict[str, str] = {
    "A#": "Bb",
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
}

# Spellings where case carries meaning ("m" is minor, "M" is major).
# Checked before upper-casing.
CASED_SUFFIX_ALIASES: dict[str, str] = {
    "m": "minor",
    "M": "major",
    "m7": "m7",
    "M7": "maj7",
}

# Upper-cased suffix spellings to their canonical suffix
SUFFIX_ALIASES: dict[str, str] = {
    "": "major",
    "MAJ": "major",
    "MIN": "minor",
    "MINOR": "minor",
    "5": "5",
    "POWER": "5",
    "FIFTH": "5",
    "7": "7",
    "DOM": "7",
    "DOM7": "7",
    "MIN7": "m7",
    "MINOR7": "m7",
    "MAJ7": "maj7",
    "MAJOR7": "maj7",
    "SUS2": "sus2",
    "SUS4": "sus4",
}

# Alternate suffix spellings generated for each stored record, keyed by the
# lower-cased stored suffix
ALIAS_SUFFIXES: dict[str, tuple[str, ...]] = {
    "": ("major", "maj", "M", ""),
    "major": ("major", "maj", "M", ""),
    "minor": ("minor", "min", "m"),
    "5": ("5", "power", "fifth"),
    "7": ("7", "dominant7", "dom7"),
    "m7": ("m7", "min7", "minor7"),
    "min7": ("m7", "min7", "minor7"),
    "maj7": ("maj7", "major7", "M7"),
    "sus2": ("sus2", "suspended2"),
    "sus4": ("sus4", "suspended4"),
}

# Real-world frequency of chord types; lower sorts first
CHORD_TYPE_PRIORITY: dict[str, int] = {
    "": 0,
    "major": 0,
    "minor": 1,
    "m": 1,
    "7": 2,
    "maj7": 3,
    "m7": 4,
    "min7": 4,
    "dim": 5,
    "aug": 6,
    "sus2": 7,
    "sus4": 8,
}

UNKNOWN_PRIORITY = 100


def normalize_key(raw_key: str) -> str:
    """Normalize a chord key to its canonical spelling.

    Parameters
    ----------
    raw_key : str
        The key as typed or stored (e.g., "Bb", "c#", "E#").

    Returns
    -------
    str
        Upper-cased key with flats and double letters replaced by their
        sharp equivalent. Unknown keys are returned upper-cased.

    Examples
    --------
    >>> normalize_key("ab")
    'G#'
    >>> normalize_key("E#")
    'F'
    >>> normalize_key("H")
    'H'
    """
    key = raw_key.upper()
    return ENHARMONIC_KEYS.get(key, key)


def normalize_suffix(raw_suffix: str) -> str:
    """Normalize a chord suffix to its canonical chord type.

    Parameters
    ----------
    raw_suffix : str
        The suffix as typed or stored (e.g., "min", "M7", "").

    Returns
    -------
    str
        The canonical suffix (e.g., "minor", "maj7", "major"). Unknown
        suffixes are returned upper-cased.

    Examples
    --------
    >>> normalize_suffix("")
    'major'
    >>> normalize_suffix("M7")
    'maj7'
    >>> normalize_suffix("dim")
    'DIM'
    """
    if raw_suffix in CASED_SUFFIX_ALIASES:
        return CASED_SUFFIX_ALIASES[raw_suffix]
    suffix = raw_suffix.upper()
    return SUFFIX_ALIASES.get(suffix, suffix)


def normalize_identity(key: str, suffix: str) -> tuple[str, str]:
    """Normalize a (key, suffix) pair."""
    return (normalize_key(key), normalize_suffix(suffix))


def suffix_aliases(suffix: str) -> tuple[str, ...]:
    """Return the alternate spellings of a stored suffix.

    The stored suffix itself always comes first; duplicates are dropped.

    Examples
    --------
    >>> suffix_aliases("minor")
    ('minor', 'min', 'm')
    >>> suffix_aliases("add9")
    ('add9',)
    """
    suffix = suffix.strip()
    extra = ALIAS_SUFFIXES.get(suffix.lower(), ())
    return tuple(dict.fromkeys((suffix, *extra)))


def key_spellings(key: str) -> tuple[str, ...]:
    """Return a stored key followed by its flat spelling, if it has one.

    Examples
    --------
    >>> key_spellings("A#")
    ('A#', 'Bb')
    >>> key_spellings("E")
    ('E',)
    """
    flat = FLAT_SPELLINGS.get(key)
    return (key, flat) if flat else (key,)


def chord_type_priority(suffix: str) -> int:
    """Return the ranking priority of a chord type (lower is more common).

    Examples
    --------
    >>> chord_type_priority("Major")
    0
    >>> chord_type_priority("sus4")
    8
    >>> chord_type_priority("13")
    100
    """
    return CHORD_TYPE_PRIORITY.get(suffix.lower(), UNKNOWN_PRIORITY)
