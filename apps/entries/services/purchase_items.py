"""
Purchase item storage.

Items for a (entry, member) pair are never patched: every save deletes the
old rows and inserts the new list, skipping lines with no quantity.
"""

import logging
from typing import Any, Dict, Iterable, List

from django.db import transaction

from apps.entries.models import Entry, PurchaseItem, PurchaseMember

from .exceptions import EntryNotFoundError, PurchaseMemberNotFoundError

logger = logging.getLogger(__name__)


def _get_purchase_member(entry_id: str, member_id: str, lock: bool = False) -> PurchaseMember:
    queryset = PurchaseMember.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(entry_id=entry_id, member_id=member_id)
    except PurchaseMember.DoesNotExist:
        if not Entry.objects.filter(id=entry_id).exists():
            raise EntryNotFoundError(f"Entry {entry_id} not found")
        raise PurchaseMemberNotFoundError(
            f"Member {member_id} is not part of entry {entry_id}"
        )


def get_purchase_items(entry_id: str, member_id: str) -> List[PurchaseItem]:
    """
    Raises:
        EntryNotFoundError: If entry doesn't exist
        PurchaseMemberNotFoundError: If the member is not on the entry
    """
    purchase_member = _get_purchase_member(entry_id, member_id)
    return list(purchase_member.items.all())


@transaction.atomic
def replace_purchase_items(
    entry_id: str,
    member_id: str,
    items: Iterable[Dict[str, Any]]
) -> List[PurchaseItem]:
    """
    Replace a member's items with ``items``.

    Lines with ``quantity <= 0`` are dropped, so saving a zero quantity
    removes the line.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        PurchaseMemberNotFoundError: If the member is not on the entry
    """
    purchase_member = _get_purchase_member(entry_id, member_id, lock=True)

    purchase_member.items.all().delete()
    created = PurchaseItem.objects.bulk_create([
        PurchaseItem(
            purchase_member=purchase_member,
            code=item['code'],
            short_name=item.get('short_name', ''),
            quantity=item['quantity'],
            amount=item.get('amount') or 0,
        )
        for item in items
        if (item.get('quantity') or 0) > 0
    ])

    logger.info(
        "Saved %d purchase item(s) for entry %s member %s",
        len(created), entry_id, member_id
    )
    return list(purchase_member.items.all())
