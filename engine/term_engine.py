"""
engine/term_engine.py
---------------------
Offline clinical term engine.
Holds one code table and the vocabulary derived from it, both built once
at startup and never modified. Every call is a pure computation over
that data, so a single instance can serve concurrent requests.
"""

from utils import logger
from engine.code_table import load_code_table
from engine.vocabulary import build_vocabulary
from engine.matcher import match_term
from engine.analyzer import analyze
from engine.search import search


class TermMatchingEngine:
    """
    Maps free clinical text and single terms to ICD-10 codes.
    No external API — uses the code table + positional close matching.
    """

    def __init__(self, table=None):
        self.table = tuple(table) if table is not None else load_code_table()
        self.vocabulary = tuple(build_vocabulary(self.table))
        logger.info(
            f"Term engine ready: {len(self.table)} codes, "
            f"{len(self.vocabulary)} vocabulary words"
        )

    def analyze_text(self, text: str) -> dict:
        """Annotate every qualifying word of the text."""
        results = analyze(text or "", self.table, self.vocabulary)
        matched = sum(1 for r in results if r["matched"])
        return {
            "token_count": len(results),
            "matched_count": matched,
            "unmatched_count": len(results) - matched,
            "results": results,
        }

    def search_codes(self, query: str) -> list:
        """Filter the code table by code or description keyword."""
        return [entry.to_dict() for entry in search(query or "", self.table)]

    def code_term(self, term: str) -> dict:
        """Map a single term to an ICD-10 code."""
        if not term or not term.strip():
            return self._no_match()

        entry = match_term(term, self.table)
        if entry is None:
            return self._no_match()

        # A direct hit always contains the term; anything else came from the fallback
        method = "substring" if term.lower() in entry.description.lower() else "close"
        return self._match(entry, method)

    def stats(self) -> dict:
        return {
            "table_size": len(self.table),
            "vocabulary_size": len(self.vocabulary),
        }

    # ── internal ─────────────────────────────────────────────────────────────
    def _match(self, entry, method) -> dict:
        return {
            "matched": True,
            "code": entry.code,
            "description": entry.description,
            "match_method": method,
        }

    def _no_match(self) -> dict:
        return {
            "matched": False,
            "code": None,
            "description": None,
            "match_method": "none",
        }
