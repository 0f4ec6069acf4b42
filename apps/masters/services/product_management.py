"""
Product management service.

Handles product CRUD with relation rows replaced wholesale on every save.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.masters.models import CURRENT_PRODUCT_DAYS, Product, ProductRelation
from apps.sequences.models import SequenceType
from apps.sequences.services import get_next_sequence

from .exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)


def _replace_relations(product: Product, relations: Iterable[Dict[str, Any]]) -> None:
    """Delete all relation rows of ``product`` and insert ``relations`` in order."""
    product.relations.all().delete()
    ProductRelation.objects.bulk_create([
        ProductRelation(
            product=product,
            position=position,
            code=relation.get('code', ''),
            name=relation.get('name', ''),
            short_name=relation.get('short_name', ''),
            unit_price=relation.get('unit_price') or 0,
            quantity=relation.get('quantity') or 0,
            amount=relation.get('amount') or 0,
        )
        for position, relation in enumerate(relations)
    ])


@transaction.atomic
def create_product(
    *,
    name: str,
    short_name: str = '',
    display_flag: Optional[bool] = True,
    release_date: Optional[date] = None,
    relations: Optional[List[Dict[str, Any]]] = None
) -> Product:
    """
    Create a product with a freshly issued ``P####`` id.

    The id is consumed from the sequence in the same transaction, so a
    failed insert does not burn a number.
    """
    product = Product.objects.create(
        id=get_next_sequence(SequenceType.PRODUCT),
        name=name,
        short_name=short_name,
        display_flag=display_flag,
        release_date=release_date,
    )
    _replace_relations(product, relations or [])

    logger.info("Created product %s", product.id)
    return product


def get_product_by_id(*, product_id: str) -> Product:
    """
    Get a product with its relation rows.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        return Product.objects.prefetch_related('relations').get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


@transaction.atomic
def update_product(
    *,
    product_id: str,
    relations: Optional[List[Dict[str, Any]]] = None,
    **fields: Any
) -> Product:
    """
    Update product fields; a given ``relations`` list replaces all rows.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        product = Product.objects.select_for_update().get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    for field, value in fields.items():
        setattr(product, field, value)
    product.save()

    if relations is not None:
        _replace_relations(product, relations)

    logger.info("Updated product %s", product.id)
    return product


def delete_product(*, product_id: str) -> None:
    """
    Hard-delete a product.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    deleted, _ = Product.objects.filter(id=product_id).delete()
    if not deleted:
        raise ProductNotFoundError(f"Product {product_id} not found")
    logger.info("Deleted product %s", product_id)


def _threshold(today: Optional[date]) -> date:
    if today is None:
        today = timezone.localdate()
    return today - timedelta(days=CURRENT_PRODUCT_DAYS)


def list_current_products(today: Optional[date] = None) -> QuerySet:
    """Visible products released on or after ``today - 14 days``."""
    return (
        Product.objects
        .filter(Q(display_flag=True) | Q(display_flag__isnull=True))
        .filter(release_date__gte=_threshold(today))
        .prefetch_related('relations')
        .order_by('release_date', 'id')
    )


def list_past_products(today: Optional[date] = None) -> QuerySet:
    """Products released strictly before ``today - 14 days``, newest first."""
    return (
        Product.objects
        .filter(release_date__lt=_threshold(today))
        .prefetch_related('relations')
        .order_by('-release_date', '-id')
    )
