from datetime import datetime

import pytest
from django.contrib.auth.models import User
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.entries.models import Entry, EntryStatus, PurchaseMember, PurchaseItem
from apps.masters.models import Product, Member


def aware(*args):
    """Aware datetime in the configured local time zone."""
    return timezone.make_aware(datetime(*args))


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(username='tester', password='TestPass123!')


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as the test user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def now():
    return aware(2024, 6, 15, 12, 0)


@pytest.fixture
def product(db):
    return Product.objects.create(id='P0001', name='Game Console', short_name='Console')


@pytest.fixture
def other_product(db):
    return Product.objects.create(id='P0002', name='Camera', short_name='Cam')


@pytest.fixture
def primary_members(db):
    return [
        Member.objects.create(id='M001', name='Taro', order=1, primary_flg=True),
        Member.objects.create(id='M002', name='Hanako', order=2, primary_flg=True),
        Member.objects.create(id='M003', name='Jiro', order=3),
    ]


@pytest.fixture
def entry(product):
    """Entry with two applied members."""
    entry = Entry.objects.create(
        id='101',
        product=product,
        shop_short_name='Camera Shop',
        status=EntryStatus.APPLIED,
    )
    PurchaseMember.objects.create(entry=entry, member_id='M001', name='Taro', status=EntryStatus.APPLIED)
    PurchaseMember.objects.create(entry=entry, member_id='M002', name='Hanako', status=EntryStatus.APPLIED)
    return entry


@pytest.fixture
def purchased_entry(product):
    """Purchased entry with items for two members."""
    entry = Entry.objects.create(
        id='102',
        product=product,
        shop_short_name='Books',
        status=EntryStatus.PURCHASED,
        purchase_date=aware(2024, 6, 10, 9, 0),
    )
    taro = PurchaseMember.objects.create(
        entry=entry, member_id='M001', name='Taro', status=EntryStatus.PURCHASED
    )
    hanako = PurchaseMember.objects.create(
        entry=entry, member_id='M002', name='Hanako', status=EntryStatus.PURCHASED
    )
    PurchaseItem.objects.create(purchase_member=taro, code='STD', short_name='Std', quantity=1, amount=50000)
    PurchaseItem.objects.create(purchase_member=taro, code='CTL', short_name='Pad', quantity=2, amount=16000)
    PurchaseItem.objects.create(purchase_member=hanako, code='STD', short_name='Std', quantity=1, amount=50000)
    return entry
