"""
Member management service.
"""

import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from apps.masters.models import Member
from apps.sequences.models import SequenceType
from apps.sequences.services import get_next_sequence

from .exceptions import MemberNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_member(*, name: str, **fields: Any) -> Member:
    """Create a member with a freshly issued ``M###`` id."""
    member = Member.objects.create(
        id=get_next_sequence(SequenceType.MEMBER),
        name=name,
        **fields
    )
    logger.info("Created member %s", member.id)
    return member


@transaction.atomic
def update_member(*, member_id: str, **fields: Any) -> Member:
    """
    Update member fields.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member {member_id} not found")

    for field, value in fields.items():
        setattr(member, field, value)
    member.save()

    logger.info("Updated member %s", member.id)
    return member


def get_primary_members() -> QuerySet:
    """Members attached to every new entry by default."""
    return Member.objects.filter(primary_flg=True).order_by('order', 'name')
