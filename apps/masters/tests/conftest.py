from datetime import date, time

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.masters.models import Product, Shop, Member


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
def today():
    return date(2024, 6, 15)


@pytest.fixture
def products(db):
    """Products around the 14-day threshold relative to 2024-06-15."""
    return {
        'future': Product.objects.create(id='P0001', name='Future', release_date=date(2024, 7, 1)),
        'edge': Product.objects.create(id='P0002', name='Edge', release_date=date(2024, 6, 1)),
        'old': Product.objects.create(id='P0003', name='Old', release_date=date(2024, 5, 31)),
        'hidden': Product.objects.create(
            id='P0004', name='Hidden', release_date=date(2024, 6, 10), display_flag=False
        ),
        'unset_flag': Product.objects.create(
            id='P0005', name='Unset flag', release_date=date(2024, 6, 10), display_flag=None
        ),
        'undated': Product.objects.create(id='P0006', name='Undated'),
        'older': Product.objects.create(id='P0007', name='Older', release_date=date(2024, 1, 1)),
    }


@pytest.fixture
def shop(db):
    return Shop.objects.create(
        id='S0001',
        name='Camera Shop',
        short_name='Camera',
        apply_start_days=0,
        apply_start_time=time(10, 0),
        apply_end_days=7,
        apply_end_time=time(23, 59),
        result_days=10,
        purchase_start_days=11,
        purchase_start_time=time(12, 30),
    )


@pytest.fixture
def members(db):
    return [
        Member.objects.create(id='M001', name='Taro', order=2, primary_flg=True),
        Member.objects.create(id='M002', name='Hanako', order=1, primary_flg=True),
        Member.objects.create(id='M003', name='Jiro', order=1),
    ]
