"""Uniqueness rule for Person names: one record per exact (first_name, last_name) pair."""

from typing import Any, Iterable, Mapping, Optional


def is_duplicate_person(
    first_name: str,
    last_name: str,
    candidates: Iterable[Mapping[str, Any]],
    exclude_id: Optional[str] = None,
) -> bool:
    """True if another person already carries this exact name pair.

    ``exclude_id`` is the record being edited; it never counts as its own duplicate.
    Names are compared as-is, without case folding.
    """
    for candidate in candidates:
        if exclude_id is not None and candidate.get("id") == exclude_id:
            continue
        if candidate.get("first_name") == first_name and candidate.get("last_name") == last_name:
            return True
    return False
