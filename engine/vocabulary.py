"""
engine/vocabulary.py
--------------------
Builds the controlled vocabulary: every significant word (longer than
three characters) found in the code table descriptions.
"""

import re

MIN_WORD_LENGTH = 4

# Bracket/comma punctuation stripped before splitting, e.g. "[chickenpox]"
_STRIP_CHARS = re.compile(r"[\[\],]")


def build_vocabulary(table) -> list:
    """
    Deduplicated vocabulary words in first-seen order.

    Descriptions are lowercased, stripped of `[`, `]` and `,`, and split
    on single spaces. An empty table yields an empty vocabulary.
    """
    seen = {}
    for entry in table:
        cleaned = _STRIP_CHARS.sub("", entry.description.lower())
        for word in cleaned.split(" "):
            if len(word) >= MIN_WORD_LENGTH:
                seen.setdefault(word, None)
    return list(seen)
