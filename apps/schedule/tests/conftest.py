from datetime import datetime
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import User
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken


def aware(*args):
    """Aware datetime in the configured local time zone."""
    return timezone.make_aware(datetime(*args))


def make_product(product_id, name, release_date=None, display_flag=True, short_name=''):
    return SimpleNamespace(
        id=product_id,
        name=name,
        short_name=short_name,
        release_date=release_date,
        display_flag=display_flag,
    )


def make_entry(entry_id, product_id, status, **dates):
    fields = {
        'apply_start': None,
        'apply_end': None,
        'result_date': None,
        'purchase_start': None,
        'purchase_end': None,
    }
    fields.update(dates)
    shop_short_name = fields.pop('shop_short_name', 'Shop')
    url = fields.pop('url', '')
    return SimpleNamespace(
        id=entry_id,
        product_id=product_id,
        status=status,
        shop_short_name=shop_short_name,
        url=url,
        **fields
    )


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
    # Saturday
    return aware(2024, 6, 15, 12, 0)
