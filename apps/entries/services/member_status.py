"""
Purchase member status updates.

Member writes, the derived entry status and the purchase-date stamp are
committed together or not at all.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from django.db import transaction
from django.utils import timezone

from apps.entries.models import Entry, PurchaseMember

from .exceptions import EntryNotFoundError, InvalidMembersError, PurchaseMemberNotFoundError
from .status_derivation import StatusDerivation, resolve_member_update

logger = logging.getLogger(__name__)


def check_unique_members(members: Iterable[Dict[str, Any]]) -> None:
    """
    Raises:
        InvalidMembersError: If the same member id appears twice
    """
    seen = set()
    for member in members:
        member_id = member['member_id']
        if member_id in seen:
            raise InvalidMembersError(f"Member {member_id} listed more than once")
        seen.add(member_id)


def upsert_purchase_members(entry: Entry, members: Iterable[Dict[str, Any]]) -> None:
    """Create or update each given member row; others are left untouched."""
    for member in members:
        defaults = {'status': member['status']}
        if 'name' in member:
            defaults['name'] = member['name']
        PurchaseMember.objects.update_or_create(
            entry=entry,
            member_id=member['member_id'],
            defaults=defaults
        )


def apply_status_derivation(entry: Entry, now: Optional[datetime] = None) -> StatusDerivation:
    """
    Recompute ``entry.status`` from its stored members and save it.

    Must run inside the transaction that changed the members, with the
    entry row locked.
    """
    statuses = list(entry.purchase_members.values_list('status', flat=True))
    derivation = resolve_member_update(statuses, has_purchase_date=entry.purchase_date is not None)

    entry.status = derivation.status
    update_fields = ['status', 'updated_at']
    if derivation.stamp_purchase_date:
        entry.purchase_date = now or timezone.now()
        update_fields.append('purchase_date')
    entry.save(update_fields=update_fields)

    logger.info(
        "Entry %s status derived as %s from %d member(s)",
        entry.id, derivation.status, len(statuses)
    )
    return derivation


def _lock_entry(entry_id: str) -> Entry:
    try:
        return Entry.objects.select_for_update().get(id=entry_id)
    except Entry.DoesNotExist:
        raise EntryNotFoundError(f"Entry {entry_id} not found")


def update_member_statuses(
    entry_id: str,
    members: Iterable[Dict[str, Any]],
    now: Optional[datetime] = None
) -> StatusDerivation:
    """
    Upsert member statuses and re-derive the entry status.

    Args:
        entry_id: Entry to update
        members: Dicts with ``member_id``, ``status`` and optionally ``name``
        now: Timestamp used if the purchase date gets stamped

    Returns:
        The derivation that was applied

    Raises:
        EntryNotFoundError: If entry doesn't exist
        InvalidMembersError: If a member id is listed twice
    """
    members = list(members)
    check_unique_members(members)

    with transaction.atomic():
        entry = _lock_entry(entry_id)
        upsert_purchase_members(entry, members)
        return apply_status_derivation(entry, now=now)


def remove_purchase_member(
    entry_id: str,
    member_id: str,
    now: Optional[datetime] = None
) -> StatusDerivation:
    """
    Remove one member (and their items) from an entry and re-derive.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        PurchaseMemberNotFoundError: If the member is not on the entry
    """
    with transaction.atomic():
        entry = _lock_entry(entry_id)
        deleted, _ = entry.purchase_members.filter(member_id=member_id).delete()
        if not deleted:
            raise PurchaseMemberNotFoundError(
                f"Member {member_id} is not part of entry {entry_id}"
            )
        return apply_status_derivation(entry, now=now)
