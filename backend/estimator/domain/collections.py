"""Keyed-list operations shared by the record service and the signed-out local cache.

Collections are plain lists of JSON objects. Every function returns a new
list and leaves its input untouched.
"""

from typing import Any

Record = dict[str, Any]


def upsert_by_key(records: list[Record], record: Record, key: str) -> list[Record]:
    """Replace the record whose ``key`` matches in place, or append it."""
    updated = list(records)
    for index, existing in enumerate(updated):
        if existing.get(key) == record.get(key):
            updated[index] = record
            return updated
    updated.append(record)
    return updated


def remove_by_key(records: list[Record], key: str, value: Any) -> list[Record]:
    """Drop every record whose ``key`` equals ``value``. Missing keys are not an error."""
    return [r for r in records if r.get(key) != value]


def find_by_key(records: list[Record], key: str, value: Any) -> int:
    """Index of the first record whose ``key`` equals ``value``, or -1."""
    for index, existing in enumerate(records):
        if existing.get(key) == value:
            return index
    return -1


def as_record_list(value: Any) -> list[Record]:
    """Read a stored collection permissively: anything but a list of objects is empty."""
    if not isinstance(value, list):
        return []
    return [r for r in value if isinstance(r, dict)]
