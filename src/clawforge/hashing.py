"""Content hashes used for contract and report identity."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def compute_hash(data: str | bytes) -> str:
    """Return ``0x`` + hex SHA-256 of *data* (str is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return "0x" + hashlib.sha256(data).hexdigest()


def canonical_json(obj: Any) -> str:
    """Compact JSON with insertion-ordered keys, the form report hashes cover."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
