"""
Shared utility helpers.
"""

import json
from typing import Any


def dumps_document(document: Any) -> str:
    """
    Serialise a document to compact JSON text, keeping key order.

    Parsing the text and serialising it again yields identical text.
    """
    return json.dumps(
        document,
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    )


def count_fields(output: dict[str, dict[str, Any]]) -> int:
    """Total number of destination fields across all output groups."""
    return sum(len(group) for group in output.values())
