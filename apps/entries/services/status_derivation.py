"""
Entry status derivation.

An entry's status is not edited directly once members exist: it is
recomputed from the statuses of its purchase members whenever they change.

Rules, over member statuses with EXCLUDED removed:
    - no statuses left          -> NOT_APPLIED
    - NOT_APPLIED mixed with any
      later status              -> APPLYING
    - otherwise                 -> the lowest status code
"""

from typing import Iterable, NamedTuple

from apps.entries.models import EntryStatus


class StatusDerivation(NamedTuple):
    status: EntryStatus
    # True when purchase_date should be set now
    stamp_purchase_date: bool


def derive_entry_status(statuses: Iterable[int]) -> EntryStatus:
    """
    Aggregate member statuses into one entry status.

    Example:
        [0, 20]  -> APPLYING
        [20, 30] -> APPLIED
        [9, 9]   -> NOT_APPLIED
    """
    active = [int(s) for s in statuses if int(s) != EntryStatus.EXCLUDED]

    if not active:
        return EntryStatus.NOT_APPLIED

    has_not_applied = any(s == EntryStatus.NOT_APPLIED for s in active)
    has_progress = any(s > EntryStatus.NOT_APPLIED for s in active)
    if has_not_applied and has_progress:
        return EntryStatus.APPLYING

    return EntryStatus(min(active))


def resolve_member_update(statuses: Iterable[int], has_purchase_date: bool) -> StatusDerivation:
    """
    Derive the entry status and whether to stamp the purchase date.

    The purchase date is stamped only the first time any member reaches
    PURCHASED; an existing date is never overwritten.
    """
    statuses = [int(s) for s in statuses]
    any_purchased = EntryStatus.PURCHASED in statuses

    return StatusDerivation(
        status=derive_entry_status(statuses),
        stamp_purchase_date=any_purchased and not has_purchase_date,
    )
