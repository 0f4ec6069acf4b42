"""
Lottery and purchase list building.

Both lists are filtered and sorted in Python after a single query, since
the visibility rules depend on "now" and on the OP002 display order,
which is passed in explicitly rather than looked up here.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from django.db.models import TextChoices
from django.utils import timezone

from apps.entries.models import (
    DEFAULT_STATUS_ORDER,
    PURCHASE_MANAGEMENT,
    RESULT_STATUSES,
    Entry,
    EntryStatus,
)
from apps.options.services import OptionTables, status_order_map

from .dates import parse_timestamp
from .purchase_summary import summarize_entry_purchases

# Finished entries stay listed for this many days
RECENT_DAYS = 14

# Date that matters for each status when sorting the lottery list
STATUS_SORT_FIELD = {
    EntryStatus.NOT_APPLIED: 'apply_end',
    EntryStatus.APPLYING: 'apply_end',
    EntryStatus.APPLIED: 'result_date',
    EntryStatus.WON: 'purchase_end',
    EntryStatus.PURCHASED: 'purchase_date',
}


class LotteryMode(TextChoices):
    INFO = 'info', 'Info'
    RESULTS = 'results', 'Results'


class PurchaseMode(TextChoices):
    PURCHASED = 'purchased', 'Purchased'
    MANAGEMENT = 'management', 'Management'


def _base_queryset():
    return (
        Entry.objects
        .select_related('product')
        .prefetch_related('purchase_members__items')
    )


def _status_order(status: int, order_map: Dict[int, int]) -> int:
    if status in order_map:
        return order_map[status]
    return DEFAULT_STATUS_ORDER.get(status, 999)


def _lottery_sort_key(entry: Entry, order_map: Dict[int, int]):
    field = STATUS_SORT_FIELD.get(entry.status)
    when = parse_timestamp(getattr(entry, field)) if field else None
    # Undecided dates sort last within their status
    if when is None:
        return (_status_order(entry.status, order_map), 1, 0.0)
    return (_status_order(entry.status, order_map), 0, when.timestamp())


def _is_stale_loss(entry: Entry, cutoff: datetime) -> bool:
    if entry.status != EntryStatus.LOST:
        return False
    result_date = parse_timestamp(entry.result_date)
    return result_date is None or result_date < cutoff


def list_lottery_entries(
    *,
    option_tables: OptionTables,
    mode: str = LotteryMode.INFO,
    status: Optional[int] = None,
    product_id: Optional[str] = None,
    shop: Optional[str] = None,
    now: Optional[datetime] = None
) -> List[Entry]:
    """
    Build the lottery list.

    Modes:
        info:    everything except LOST entries whose result date is
                 missing or more than 14 days old
        results: APPLIED, WON and LOST entries only

    ``status`` and ``product_id`` match exactly; ``shop`` is a substring
    match on the shop label. Entries are ordered by the OP002 display order
    of their status, then by the date relevant to that status.
    """
    if now is None:
        now = timezone.now()

    queryset = _base_queryset()
    if status is not None:
        queryset = queryset.filter(status=status)
    if product_id:
        queryset = queryset.filter(product_id=product_id)
    if shop:
        queryset = queryset.filter(shop_short_name__icontains=shop)

    if mode == LotteryMode.RESULTS:
        entries = [e for e in queryset if e.status in RESULT_STATUSES]
    else:
        cutoff = now - timedelta(days=RECENT_DAYS)
        entries = [e for e in queryset if not _is_stale_loss(e, cutoff)]

    order_map = status_order_map(option_tables)
    entries.sort(key=lambda e: _lottery_sort_key(e, order_map))
    return entries


def _is_settled(entry: Entry, now: datetime) -> bool:
    """Purchased over 14 days ago, or the purchase window closed unbought."""
    purchase_date = parse_timestamp(entry.purchase_date)
    if purchase_date is not None:
        return purchase_date < now - timedelta(days=RECENT_DAYS)

    purchase_end = parse_timestamp(entry.purchase_end)
    return purchase_end is not None and purchase_end < now


def _purchase_sort_key(entry: Entry):
    purchase_date = parse_timestamp(entry.purchase_date)
    if purchase_date is None:
        return (1, 0.0)
    return (0, -purchase_date.timestamp())


def list_purchase_entries(
    *,
    mode: str = PurchaseMode.PURCHASED,
    product_id: Optional[str] = None,
    now: Optional[datetime] = None
) -> List[Entry]:
    """
    Build the purchase list.

    Modes:
        purchased:  PURCHASED entries only
        management: WON, PURCHASED and LOST entries that are not settled

    Ordered by purchase date, newest first, undated last.
    """
    if now is None:
        now = timezone.now()

    queryset = _base_queryset()
    if product_id:
        queryset = queryset.filter(product_id=product_id)

    if mode == PurchaseMode.MANAGEMENT:
        queryset = queryset.filter(status__in=PURCHASE_MANAGEMENT)
        entries = [e for e in queryset if not _is_settled(e, now)]
    else:
        entries = list(queryset.filter(status=EntryStatus.PURCHASED))

    entries.sort(key=_purchase_sort_key)
    return entries


def build_purchase_listing(entries: List[Entry]) -> Dict[str, Any]:
    """
    Attach purchase summaries and totals to a purchase list.

    Returns:
        {'entries': [...], 'products': [{'product_id', 'product_name'}],
         'total_amount': int}
    """
    rows = []
    products = {}
    for entry in entries:
        summary = summarize_entry_purchases(entry)
        rows.append({'entry': entry, 'summary': summary})
        products[entry.product_id] = entry.product.name

    return {
        'entries': rows,
        'products': [
            {'product_id': product_id, 'product_name': name}
            for product_id, name in sorted(products.items(), key=lambda p: (p[1], p[0]))
        ],
        'total_amount': sum(row['summary']['total_amount'] for row in rows),
    }
