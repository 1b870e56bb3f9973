"""
engine/matcher.py
-----------------
Maps a clinical term to a code table entry.
Strategy: case-insensitive substring → approximate match.

The approximate match is positional character agreement, not edit
distance: a candidate scores one point for every index where it and the
query share the same character, over the length of the shorter string,
and passes when score / len(query) >= 0.8. Trailing length differences
are ignored. The FIRST passing candidate wins, even if a later one
scores higher.
"""

from typing import Optional

CLOSE_MATCH_THRESHOLD = 0.8


def positional_score(candidate: str, word: str) -> int:
    """Number of indices where both strings hold the same character."""
    return sum(1 for a, b in zip(candidate, word) if a == b)


def find_close_match(word: str, vocabulary) -> Optional[str]:
    """
    First vocabulary word passing the positional-agreement threshold.
    Comparison is case-sensitive; callers lowercase both sides.
    """
    if not word:
        return None

    for candidate in vocabulary:
        if positional_score(candidate, word) / len(word) >= CLOSE_MATCH_THRESHOLD:
            return candidate
    return None


def match_term(term: str, table):
    """
    Return the CodeEntry for a term, or None.

    1. First entry (table order) whose description contains the term.
    2. Otherwise approximate-match the term against the full lowercased
       descriptions and return the entry with that exact description.
    """
    needle = term.lower()

    for entry in table:
        if needle in entry.description.lower():
            return entry

    descriptions = [entry.description.lower() for entry in table]
    close = find_close_match(needle, descriptions)
    if close is None:
        return None

    for entry in table:
        if entry.description.lower() == close:
            return entry
    return None
