"""Membership reconciliation for a group's members list."""

from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class MembershipDiff:
    """What a save changes, for display only; never used to build the stored list."""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    retained: List[str] = field(default_factory=list)


def reconcile_members(current: Iterable[str], selected: Iterable[str]) -> List[str]:
    """The members list to persist: exactly the selection, duplicates collapsed.

    Full replace. ``current`` is accepted for symmetry with diff_members and
    has no effect on the result.
    """
    return list(dict.fromkeys(selected))


def diff_members(current: Iterable[str], selected: Iterable[str]) -> MembershipDiff:
    current_ids = list(dict.fromkeys(current))
    selected_ids = list(dict.fromkeys(selected))
    current_set = set(current_ids)
    selected_set = set(selected_ids)
    return MembershipDiff(
        added=[member_id for member_id in selected_ids if member_id not in current_set],
        removed=[member_id for member_id in current_ids if member_id not in selected_set],
        retained=[member_id for member_id in selected_ids if member_id in current_set],
    )
