"""
Entry management service.

Handles entry CRUD. New entries get a plain numeric id from the entry
sequence and, unless told otherwise, the primary members at NOT_APPLIED.
Once an entry has members its status is always derived from theirs; a
submitted status only sticks on an entry without members.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.db import transaction

from apps.entries.models import Entry, EntryStatus, PurchaseMember
from apps.masters.models import Product
from apps.masters.services import get_primary_members
from apps.sequences.models import SequenceType
from apps.sequences.services import get_next_sequence

from .exceptions import EntryNotFoundError, ProductReferenceError
from .member_status import (
    apply_status_derivation,
    check_unique_members,
    upsert_purchase_members,
)

logger = logging.getLogger(__name__)


def _get_product(product_id: str) -> Product:
    try:
        return Product.objects.get(id=product_id)
    except Product.DoesNotExist:
        raise ProductReferenceError(f"Product {product_id} not found")


def create_entry(
    *,
    product_id: str,
    purchase_members: Optional[List[Dict[str, Any]]] = None,
    now: Optional[datetime] = None,
    **fields: Any
) -> Entry:
    """
    Create an entry.

    With members attached the status is derived from them (and the
    purchase date stamped if one is PURCHASED); otherwise the submitted
    status is kept.

    Args:
        product_id: Product the entry belongs to (required)
        purchase_members: Member dicts; None attaches the primary members
        now: Timestamp used if the purchase date gets stamped
        **fields: Remaining Entry fields

    Raises:
        ProductReferenceError: If the product doesn't exist
        InvalidMembersError: If a member id is listed twice
    """
    if purchase_members is not None:
        check_unique_members(purchase_members)

    with transaction.atomic():
        product = _get_product(product_id)
        entry = Entry.objects.create(
            id=get_next_sequence(SequenceType.ENTRY),
            product=product,
            **fields
        )

        if purchase_members is None:
            purchase_members = [
                {
                    'member_id': member.id,
                    'name': member.name,
                    'status': EntryStatus.NOT_APPLIED,
                }
                for member in get_primary_members()
            ]

        PurchaseMember.objects.bulk_create([
            PurchaseMember(
                entry=entry,
                member_id=member['member_id'],
                name=member.get('name', ''),
                status=member['status'],
            )
            for member in purchase_members
        ])
        if purchase_members:
            apply_status_derivation(entry, now=now)

    logger.info(
        "Created entry %s for product %s with %d member(s)",
        entry.id, product.id, len(purchase_members)
    )
    return entry


def get_entry(*, entry_id: str) -> Entry:
    """
    Get an entry with its product, members and items.

    Raises:
        EntryNotFoundError: If entry doesn't exist
    """
    try:
        return (
            Entry.objects
            .select_related('product')
            .prefetch_related('purchase_members__items')
            .get(id=entry_id)
        )
    except Entry.DoesNotExist:
        raise EntryNotFoundError(f"Entry {entry_id} not found")


def update_entry(
    *,
    entry_id: str,
    purchase_members: Optional[List[Dict[str, Any]]] = None,
    now: Optional[datetime] = None,
    **fields: Any
) -> Entry:
    """
    Update entry fields, optionally replacing the member list.

    When ``purchase_members`` is given, members missing from it are removed
    and the listed ones are upserted in the same transaction as the field
    update. Whenever the entry ends up with members (or a member list was
    given) the status is re-derived, so a submitted ``status`` only sticks
    on an entry without members.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        ProductReferenceError: If a new product id doesn't exist
        InvalidMembersError: If a member id is listed twice
    """
    if purchase_members is not None:
        check_unique_members(purchase_members)

    with transaction.atomic():
        try:
            entry = Entry.objects.select_for_update().get(id=entry_id)
        except Entry.DoesNotExist:
            raise EntryNotFoundError(f"Entry {entry_id} not found")

        if 'product_id' in fields:
            entry.product = _get_product(fields.pop('product_id'))

        for field, value in fields.items():
            setattr(entry, field, value)
        entry.save()

        if purchase_members is not None:
            keep = [member['member_id'] for member in purchase_members]
            entry.purchase_members.exclude(member_id__in=keep).delete()
            upsert_purchase_members(entry, purchase_members)

        if purchase_members is not None or entry.purchase_members.exists():
            apply_status_derivation(entry, now=now)

    logger.info("Updated entry %s", entry.id)
    return get_entry(entry_id=entry.id)


def delete_entry(*, entry_id: str) -> None:
    """
    Hard-delete an entry with its members and items.

    Raises:
        EntryNotFoundError: If entry doesn't exist
    """
    deleted, _ = Entry.objects.filter(id=entry_id).delete()
    if not deleted:
        raise EntryNotFoundError(f"Entry {entry_id} not found")
    logger.info("Deleted entry %s", entry_id)
