"""
Shop management service.

Shops are plain master data; the only derived value is the set of
suggested entry dates computed from the shop's relative offsets.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone

from apps.masters.models import Shop
from apps.sequences.models import SequenceType
from apps.sequences.services import get_next_sequence

from .exceptions import ShopNotFoundError

logger = logging.getLogger(__name__)

# Entry date fields that have a (days, time) offset pair on Shop
OFFSET_FIELDS = (
    'apply_start',
    'apply_end',
    'result',
    'purchase_start',
    'purchase_end',
)


@transaction.atomic
def create_shop(*, name: str, **fields: Any) -> Shop:
    """Create a shop with a freshly issued ``S####`` id."""
    shop = Shop.objects.create(
        id=get_next_sequence(SequenceType.SHOP),
        name=name,
        **fields
    )
    logger.info("Created shop %s", shop.id)
    return shop


def get_shop_by_id(*, shop_id: str) -> Shop:
    """
    Get a shop.

    Raises:
        ShopNotFoundError: If shop doesn't exist
    """
    try:
        return Shop.objects.get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop {shop_id} not found")


@transaction.atomic
def update_shop(*, shop_id: str, **fields: Any) -> Shop:
    """
    Update shop fields.

    Raises:
        ShopNotFoundError: If shop doesn't exist
    """
    try:
        shop = Shop.objects.select_for_update().get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop {shop_id} not found")

    for field, value in fields.items():
        setattr(shop, field, value)
    shop.save()

    logger.info("Updated shop %s", shop.id)
    return shop


def schedule_defaults(shop: Shop, base_date: date) -> Dict[str, Optional[datetime]]:
    """
    Suggest entry dates from the shop's offsets relative to ``base_date``.

    A missing day offset leaves the date undecided (None); a missing time
    of day falls back to midnight. Results are aware datetimes in the
    current time zone.

    Example:
        apply_end_days=7, apply_end_time=23:59, base 2024-05-01
        -> apply_end = 2024-05-08 23:59
    """
    tz = timezone.get_current_timezone()
    defaults: Dict[str, Optional[datetime]] = {}

    for field in OFFSET_FIELDS:
        days = getattr(shop, f'{field}_days')
        if days is None:
            defaults[field] = None
            continue

        at = getattr(shop, f'{field}_time') or time(0, 0)
        naive = datetime.combine(base_date + timedelta(days=days), at)
        defaults[field] = timezone.make_aware(naive, tz)

    return defaults
