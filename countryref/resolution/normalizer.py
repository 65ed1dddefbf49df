"""
Name Normalizer

Turns a free-text country name into the form used for comparisons. The steps
run in a fixed order:

1. lowercase
2. separators (. , _ - ( ) ' ’) become spaces
3. whitespace runs collapse to one space, ends trimmed
4. accented Latin letters and ligatures fold to plain letters
5. whole-word abbreviations expand (dem, rep, st, fed, govt)
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

_SEPARATORS = re.compile(r"[._,\-()'’]")
_WHITESPACE = re.compile(r"\s+")

_FOLD_TABLE: Dict[int, str] = str.maketrans({
    # e variations
    "è": "e", "é": "e", "ê": "e", "ë": "e",
    # a variations
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
    # i variations
    "ì": "i", "í": "i", "î": "i", "ï": "i",
    # o variations
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o",
    # u variations
    "ù": "u", "ú": "u", "û": "u", "ü": "u",
    # y variations
    "ý": "y", "ÿ": "y",
    # ligatures and single letters
    "æ": "ae", "œ": "oe", "ñ": "n", "ß": "ss", "ç": "c",
})

# Separators are already spaces by the time these run, so a trailing period
# never reaches them.
_ABBREVIATIONS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\bdem\b"), "democratic"),
    (re.compile(r"\brep\b"), "republic"),
    (re.compile(r"\bst\b"), "saint"),
    (re.compile(r"\bfed\b"), "federal"),
    (re.compile(r"\bgovt\b"), "government"),
]


def normalize(raw: str) -> str:
    """Return the canonical comparison form of a country name.

    Examples:
        >>> normalize("Côte d'Ivoire")
        'cote d ivoire'
        >>> normalize("Korea, Dem. Rep.")
        'korea democratic republic'
        >>> normalize("St. Lucia")
        'saint lucia'
    """
    name = raw.lower()
    name = _SEPARATORS.sub(" ", name)
    name = _WHITESPACE.sub(" ", name).strip()
    name = name.translate(_FOLD_TABLE)
    for pattern, replacement in _ABBREVIATIONS:
        name = pattern.sub(replacement, name)
    return name
