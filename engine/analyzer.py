"""
engine/analyzer.py
------------------
Annotates free clinical text word by word.
Each qualifying token is either matched to an ICD-10 code or reported
as unmatched, with a vocabulary suggestion when one is close enough.
"""

import re

from engine.matcher import match_term, find_close_match
from engine.vocabulary import MIN_WORD_LENGTH

# ASCII word characters only, so accented letters act as separators
_NON_WORD = re.compile(r"[^A-Za-z0-9_]+")


def tokenize(text: str) -> list:
    """Lowercase and split on runs of non-word characters (may yield '')."""
    return _NON_WORD.split(text.lower())


def analyze(text: str, table, vocabulary) -> list:
    """
    One result per token of at least four characters, in text order.
    Repeated words are reported every time they occur.
    """
    vocabulary = list(vocabulary)
    known = set(vocabulary)
    results = []

    for word in tokenize(text):
        if len(word) < MIN_WORD_LENGTH:
            continue

        if word in known:
            entry = match_term(word, table)
            if entry is not None:
                results.append(_matched(word, entry))
            else:
                results.append(_unmatched(word, None))
        else:
            results.append(_unmatched(word, find_close_match(word, vocabulary)))

    return results


def describe(result: dict) -> str:
    """Human-readable line for a single token result."""
    word = result["word"]
    if result.get("matched"):
        return f"{word} → {result['code']} – {result['description']}"
    if result.get("suggestion"):
        return f"{word} not found – did you mean {result['suggestion']}?"
    return f"{word} not found and no suggestions."


# ── internal ─────────────────────────────────────────────────────────────────
def _matched(word: str, entry) -> dict:
    return {
        "word": word,
        "matched": True,
        "code": entry.code,
        "description": entry.description,
    }

def _unmatched(word: str, suggestion) -> dict:
    return {
        "word": word,
        "matched": False,
        "suggestion": suggestion,
    }
