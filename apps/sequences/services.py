"""
Sequence Services Module
========================

Issues monotonically increasing, type-prefixed IDs for master records and
entries.

Each entity type owns one ``SequenceCounter`` row. Issuing an ID is a
read-increment-write on that row under ``SELECT ... FOR UPDATE``, so two
concurrent creations of the same type never receive the same ID.

Formats:
    member  -> ``M001``
    product -> ``P0001``
    shop    -> ``S0001``
    entry   -> ``1`` (plain integer string)

Example:
    Creating a record with a sequence ID::

        from django.db import transaction
        from apps.sequences.services import get_next_sequence

        with transaction.atomic():
            product_id = get_next_sequence(SequenceType.PRODUCT)
            Product.objects.create(id=product_id, name='Figure A')

Note:
    ``get_next_sequence`` must run inside the same transaction as the
    insert that uses the ID; if the insert fails the counter rolls back too.
"""

import logging

from django.db import transaction

from .models import SequenceCounter, SequenceType

logger = logging.getLogger(__name__)


class SequenceError(Exception):
    """Raised when a sequence type is unknown."""
    pass


SEQUENCE_FORMATS = {
    SequenceType.MEMBER: 'M{:03d}',
    SequenceType.PRODUCT: 'P{:04d}',
    SequenceType.SHOP: 'S{:04d}',
    SequenceType.ENTRY: '{:d}',
}


def format_sequence(seq_type: str, value: int) -> str:
    """Format a raw counter value for the given type."""
    try:
        template = SEQUENCE_FORMATS[SequenceType(seq_type)]
    except ValueError:
        raise SequenceError(f"Unknown sequence type: {seq_type}")
    return template.format(value)


@transaction.atomic
def get_next_sequence(seq_type: str) -> str:
    """
    Issue the next formatted ID for ``seq_type`` and advance the counter.

    A missing counter row is created and starts at 1.

    Args:
        seq_type: One of the ``SequenceType`` values

    Returns:
        Formatted ID string

    Raises:
        SequenceError: If ``seq_type`` is unknown
    """
    if seq_type not in SequenceType.values:
        raise SequenceError(f"Unknown sequence type: {seq_type}")

    counter, _ = (
        SequenceCounter.objects
        .select_for_update()
        .get_or_create(seq_type=seq_type, defaults={'seq': 1})
    )

    current = counter.seq
    counter.seq = current + 1
    counter.save(update_fields=['seq', 'updated_at'])

    issued = format_sequence(seq_type, current)
    logger.debug("Issued %s sequence %s", seq_type, issued)
    return issued
