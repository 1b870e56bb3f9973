"""
engine/search.py
----------------
Keyword / code lookup over the code table.
"""


def search(query: str, table) -> list:
    """Entries whose code or description contains the query, case-insensitive."""
    needle = query.lower()
    return [
        entry for entry in table
        if needle in entry.description.lower() or needle in entry.code.lower()
    ]
