"""
Schedule timeline.

Flattens entry dates into labelled events within one calendar month either
side of today. Events with no usable date are "undecided": always listed,
with empty date and time, and sorted after every dated event.
"""

import calendar
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional

from django.db.models import TextChoices
from django.utils import timezone

from apps.entries.models import APPLY_PHASE, Entry, EntryStatus
from apps.entries.services.dates import parse_timestamp
from apps.masters.models import Product

logger = logging.getLogger(__name__)

WEEKDAYS = ['日', '月', '火', '水', '木', '金', '土']


class ScheduleEventType(TextChoices):
    APPLY_START = '応募', 'Apply opens'
    APPLY_END = '応〆', 'Apply closes'
    RESULT = '当落', 'Result'
    PURCHASE_START = '購入', 'Purchase opens'
    PURCHASE_END = '購〆', 'Purchase closes'


EVENT_TYPE_PRIORITY = {
    ScheduleEventType.APPLY_START: 1,
    ScheduleEventType.APPLY_END: 2,
    ScheduleEventType.RESULT: 3,
    ScheduleEventType.PURCHASE_START: 4,
    ScheduleEventType.PURCHASE_END: 5,
}
UNKNOWN_TYPE_PRIORITY = 99


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the end of shorter months."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _events_for(entry) -> List[tuple]:
    """(event type, raw date value) pairs emitted for the entry's status."""
    status = entry.status
    events = []

    if status in APPLY_PHASE:
        events.append((ScheduleEventType.APPLY_START, entry.apply_start))
        events.append((ScheduleEventType.APPLY_END, entry.apply_end))
    if status == EntryStatus.APPLIED:
        events.append((ScheduleEventType.RESULT, entry.result_date))
    if status == EntryStatus.WON:
        events.append((ScheduleEventType.PURCHASE_START, entry.purchase_start))
        events.append((ScheduleEventType.PURCHASE_END, entry.purchase_end))

    return events


def _format_date(value: datetime) -> str:
    # isoweekday: Monday=1 .. Sunday=7
    return f"{value:%m/%d}({WEEKDAYS[value.isoweekday() % 7]})"


def build_schedule(
    products: Iterable[Any],
    entries: Iterable[Any],
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Build the event timeline.

    Args:
        products: Objects with ``id``, ``name``, ``short_name``
        entries: Objects with ``id``, ``product_id``, ``status``,
            ``shop_short_name``, ``url`` and the date fields
        now: Reference time; the window is computed from its local date

    Returns:
        {'schedule': [event, ...],
         'products': [{'product_id', 'product_name'}, ...]}

    Entries pointing at an unknown product are skipped.
    """
    if now is None:
        now = timezone.now()
    tz = timezone.get_current_timezone()
    today = timezone.localdate(now)

    window_start = add_months(today, -1)
    window_end = add_months(today, 1)
    undecided_at = timezone.make_aware(
        datetime.combine(window_end + timedelta(days=1), time(0, 0)), tz
    )

    product_map = {product.id: product for product in products}
    referenced = {}
    items = []

    for entry in entries:
        product = product_map.get(entry.product_id)
        if product is None:
            continue
        referenced[product.id] = product.name

        for event_type, raw in _events_for(entry):
            when = parse_timestamp(raw)

            if when is None:
                sort_at = undecided_at
                date_display = time_display = month_id = ''
            else:
                sort_at = timezone.localtime(when, tz)
                if not window_start <= sort_at.date() <= window_end:
                    continue
                date_display = _format_date(sort_at)
                time_display = f"{sort_at:%H:%M}"
                month_id = f"{sort_at:%Y-%m}"

            items.append({
                'sort_at': sort_at,
                'sort_date': sort_at.isoformat(),
                'sort_time': time_display,
                'sort_type': event_type.value,
                'month_id': month_id,
                'date': date_display,
                'time': time_display,
                'type': event_type.value,
                'shop_name': entry.shop_short_name or '',
                'product_name': product.name,
                'product_short_name': product.short_name or '',
                'product_id': product.id,
                'entry_id': entry.id,
                'url': entry.url or '',
            })

    items.sort(key=lambda item: (
        item['sort_at'],
        item['sort_time'],
        EVENT_TYPE_PRIORITY.get(item['sort_type'], UNKNOWN_TYPE_PRIORITY),
    ))
    for item in items:
        del item['sort_at']

    return {
        'schedule': items,
        'products': [
            {'product_id': product_id, 'product_name': name}
            for product_id, name in sorted(referenced.items(), key=lambda p: (p[1], p[0]))
        ],
    }


def get_schedule(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Load products and entries and build the timeline."""
    products = Product.objects.only('id', 'name', 'short_name')
    entries = Entry.objects.only(
        'id', 'product', 'status', 'shop_short_name', 'url',
        'apply_start', 'apply_end', 'result_date', 'purchase_start', 'purchase_end',
    )
    schedule = build_schedule(products, entries, now=now)

    logger.debug("Schedule built with %d event(s)", len(schedule['schedule']))
    return schedule
