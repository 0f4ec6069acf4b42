import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.options.models import OptionItem, OptionList


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
def option_rows(db):
    """OP002 rows with a custom order, plus one OP003 row."""
    return [
        OptionItem.objects.create(list_code=OptionList.ENTRY_STATUS, code=30, name='当選', order=1),
        OptionItem.objects.create(list_code=OptionList.ENTRY_STATUS, code=0, name='未応募', order=2),
        OptionItem.objects.create(list_code=OptionList.ENTRY_STATUS, code=20, name='応募済', order=2),
        OptionItem.objects.create(list_code=OptionList.APPLY_METHOD, code=1, name='Web', order=1),
    ]
