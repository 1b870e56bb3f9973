"""
engine/code_table.py
--------------------
Reference ICD-10 code table: code → description pairs.
Ships an embedded default table and can load a replacement from a
JSON or CSV file (path given directly or via ICD10_TABLE_PATH).
Row order is kept exactly as supplied — the matcher's tie-break
depends on it.
"""

import os
import io
import csv
import json
from pathlib import Path
from typing import NamedTuple, Optional

from utils import logger


class CodeTableError(ValueError):
    """Raised when a code table file cannot be turned into entries."""


class CodeEntry(NamedTuple):
    code: str
    description: str

    def to_dict(self) -> dict:
        return {"code": self.code, "description": self.description}


# ── Embedded default table ────────────────────────────────────────────────────
ICD10_TABLE = (
    CodeEntry("A00", "Cholera"),
    CodeEntry("B01", "Varicella [chickenpox]"),
    CodeEntry("C34", "Malignant neoplasm of bronchus and lung"),
    CodeEntry("D50", "Iron deficiency anemia"),
    CodeEntry("E11", "Type 2 diabetes mellitus"),
)

# Capitalised Code/Description keys are accepted too
_CODE_KEYS = ("code", "Code")
_DESCRIPTION_KEYS = ("description", "Description")


def load_code_table(path: Optional[str] = None) -> tuple:
    """
    Load the code table.

    Resolution order: explicit path → ICD10_TABLE_PATH env var →
    embedded ICD10_TABLE. Returns a tuple of CodeEntry in file order.
    """
    path = path or os.getenv("ICD10_TABLE_PATH", "")
    if not path:
        logger.info(f"Code table: embedded default ({len(ICD10_TABLE)} codes)")
        return ICD10_TABLE

    table_path = Path(path)
    if not table_path.exists():
        raise FileNotFoundError(f"Code table file not found: {table_path}")

    suffix = table_path.suffix.lower()
    try:
        if suffix == ".json":
            entries = _read_json(table_path)
        elif suffix == ".csv":
            entries = _read_csv(table_path)
        else:
            raise CodeTableError(
                f"Unsupported code table format '{suffix}' (use .json or .csv)"
            )
    except CodeTableError as e:
        logger.error(f"Rejected code table {table_path}: {e}")
        raise

    logger.info(f"Code table: loaded {len(entries)} codes from {table_path}")
    return entries


# ── internal ─────────────────────────────────────────────────────────────────
def _read_text(table_path: Path) -> str:
    # utf-8-sig drops the byte-order mark spreadsheet exports prepend
    with open(table_path, "r", encoding="utf-8-sig", newline="") as f:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise CodeTableError(f"Invalid encoding: {e}") from e


def _read_json(table_path: Path) -> tuple:
    try:
        rows = json.loads(_read_text(table_path))
    except json.JSONDecodeError as e:
        raise CodeTableError(f"Invalid JSON: {e}") from e

    if not isinstance(rows, list):
        raise CodeTableError("JSON code table must be a list of objects")

    entries = []
    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            raise CodeTableError(f"Row {idx} is not an object")
        code = _first_present(row, _CODE_KEYS)
        description = _first_present(row, _DESCRIPTION_KEYS)
        entries.append(_make_entry(code, description, idx))
    return tuple(entries)


def _read_csv(table_path: Path) -> tuple:
    reader = csv.DictReader(io.StringIO(_read_text(table_path), newline=""))
    columns = [c.strip().lower() for c in (reader.fieldnames or [])]
    if "code" not in columns or "description" not in columns:
        raise CodeTableError(
            f"CSV code table needs 'code' and 'description' columns, "
            f"found: {reader.fieldnames}"
        )

    entries = []
    for idx, row in enumerate(reader):
        row = {k.strip().lower(): v for k, v in row.items() if k}
        entries.append(_make_entry(row.get("code"), row.get("description"), idx))
    return tuple(entries)


def _first_present(row: dict, keys: tuple):
    for key in keys:
        if key in row:
            return row[key]
    return None


def _make_entry(code, description, idx: int) -> CodeEntry:
    code = str(code).strip() if code is not None else ""
    if not code:
        raise CodeTableError(f"Row {idx} has no code")
    if description is None:
        raise CodeTableError(f"Row {idx} ({code}) has no description")
    return CodeEntry(code, str(description))
