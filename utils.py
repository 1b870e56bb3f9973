"""
utils.py  —  Shared utility functions used across the engine and the API.
"""

import os
import uuid
import logging
from datetime import datetime, timezone

# ── Logger ────────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s  %(levelname)s  %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("icd10")


# ── ID / timestamp ────────────────────────────────────────────────────────────
def generate_id() -> str:
    return str(uuid.uuid4())

def current_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
