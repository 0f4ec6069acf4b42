"""
Deadline alert counts.

For every visible product, counts the entries whose next deadline falls
within the coming week:

    apply_end     status NOT_APPLIED
    result_date   status APPLYING or APPLIED
    purchase_end  status WON

Current products (released in the last 14 days or later) are reported one
by one. Past products are folded into a single bucket. Products without a
release date are in neither group.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from django.utils import timezone

from apps.entries.models import Entry, EntryStatus, RESULT_PENDING
from apps.entries.services.dates import local_date
from apps.masters.models import CURRENT_PRODUCT_DAYS, Product

logger = logging.getLogger(__name__)

APPROACHING_DAYS = 7


def is_approaching(target: Optional[date], today: date) -> bool:
    """True when ``today <= target <= today + 7 days`` on calendar dates."""
    if target is None:
        return False
    return today <= target <= today + timedelta(days=APPROACHING_DAYS)


def is_current_product(release_date: Optional[date], today: date) -> bool:
    if release_date is None:
        return False
    return release_date >= today - timedelta(days=CURRENT_PRODUCT_DAYS)


def is_past_product(release_date: Optional[date], today: date) -> bool:
    if release_date is None:
        return False
    return release_date < today - timedelta(days=CURRENT_PRODUCT_DAYS)


def _empty_counts() -> Dict[str, int]:
    return {'apply_end': 0, 'result_date': 0, 'purchase_end': 0}


def _entry_alerts(entry, today: date) -> Dict[str, int]:
    counts = _empty_counts()
    status = entry.status

    if status == EntryStatus.NOT_APPLIED and is_approaching(local_date(entry.apply_end), today):
        counts['apply_end'] += 1
    if status in RESULT_PENDING and is_approaching(local_date(entry.result_date), today):
        counts['result_date'] += 1
    if status == EntryStatus.WON and is_approaching(local_date(entry.purchase_end), today):
        counts['purchase_end'] += 1

    return counts


def build_deadline_alerts(
    products: Iterable[Any],
    entries: Iterable[Any],
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Count approaching deadlines per product.

    Args:
        products: Objects with ``id``, ``name``, ``display_flag``, ``release_date``
        entries: Objects with ``product_id``, ``status`` and the deadline fields
        now: Reference time; "today" is its local calendar date

    Returns:
        {
            'current_products': [
                {'product_id', 'product_name',
                 'counts': {'apply_end', 'result_date', 'purchase_end'}},
            ],
            'past_products': {'apply_end', 'result_date', 'purchase_end'} or None,
        }
    """
    if now is None:
        now = timezone.now()
    today = timezone.localdate(now)

    # display_flag None counts as visible
    visible = {
        product.id: product
        for product in products
        if product.display_flag is not False
    }

    per_product: Dict[str, Dict[str, int]] = {}
    for entry in entries:
        if entry.product_id not in visible:
            continue
        counts = per_product.setdefault(entry.product_id, _empty_counts())
        for key, value in _entry_alerts(entry, today).items():
            counts[key] += value

    current_products = []
    past_counts = _empty_counts()
    has_past = False

    for product_id, product in visible.items():
        counts = per_product.get(product_id)
        if not counts or not any(counts.values()):
            continue

        if is_current_product(product.release_date, today):
            current_products.append({
                'product_id': product_id,
                'product_name': product.name,
                'counts': counts,
            })
        elif is_past_product(product.release_date, today):
            for key, value in counts.items():
                past_counts[key] += value
            has_past = True

    return {
        'current_products': current_products,
        'past_products': past_counts if has_past else None,
    }


def get_deadline_alerts(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Load products and entries and build the alert counts."""
    products = Product.objects.only('id', 'name', 'display_flag', 'release_date').order_by('release_date', 'id')
    entries = Entry.objects.only(
        'id', 'product', 'status', 'apply_end', 'result_date', 'purchase_end'
    )
    alerts = build_deadline_alerts(products, entries, now=now)

    logger.debug(
        "Deadline alerts: %d current product(s), past bucket %s",
        len(alerts['current_products']),
        'set' if alerts['past_products'] else 'empty'
    )
    return alerts
