from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework import status

from apps.entries.models import Entry
from apps.masters.models import Product, Shop, Member
from apps.masters.services import ShopNotFoundError, MemberNotFoundError


# =============================================================================
# Product API Tests
# =============================================================================

@pytest.mark.django_db
class TestProductAPI:
    """Tests for /api/masters/products/"""

    def test_create_product(self, authenticated_client):
        url = reverse('masters:product-list')
        data = {
            'name': 'Game Console',
            'short_name': 'Console',
            'release_date': '2099-01-01',
            'relations': [
                {'code': 'STD', 'name': 'Standard', 'unit_price': 49980},
            ],
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] == 'P0001'
        assert response.data['relations'][0]['code'] == 'STD'

    def test_create_product_requires_name(self, authenticated_client):
        url = reverse('masters:product-list')
        response = authenticated_client.post(url, {'short_name': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'name' in response.data
        assert not Product.objects.exists()

    def test_list_all_products(self, authenticated_client, products):
        url = reverse('masters:product-list')
        response = authenticated_client.get(url, {'all': 'true'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == len(products)

    def test_list_current_excludes_hidden(self, authenticated_client, products):
        url = reverse('masters:product-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        names = [p['name'] for p in response.data]
        assert 'Hidden' not in names
        assert 'Undated' not in names

    def test_update_replaces_relations(self, authenticated_client):
        create_url = reverse('masters:product-list')
        created = authenticated_client.post(
            create_url,
            {'name': 'Console', 'relations': [{'code': 'A'}, {'code': 'B'}]},
            format='json'
        )
        url = reverse('masters:product-detail', kwargs={'pk': created.data['id']})

        response = authenticated_client.patch(url, {'relations': [{'code': 'C'}]}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [r['code'] for r in response.data['relations']] == ['C']

    def test_delete_product(self, authenticated_client, products):
        url = reverse('masters:product-detail', kwargs={'pk': 'P0001'})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(id='P0001').exists()

    def test_retrieve_missing_product(self, authenticated_client):
        url = reverse('masters:product-detail', kwargs={'pk': 'P9999'})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_product_entries(self, authenticated_client, products):
        Entry.objects.create(id='1', product=products['future'], shop_short_name='Camera')
        Entry.objects.create(id='2', product=products['edge'], shop_short_name='Books')
        url = reverse('masters:product-entries', kwargs={'pk': 'P0001'})

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [e['id'] for e in response.data] == ['1']
        assert response.data[0]['product_name'] == 'Future'

    def test_unauthenticated(self, api_client):
        url = reverse('masters:product-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Shop API Tests
# =============================================================================

@pytest.mark.django_db
class TestShopAPI:
    """Tests for /api/masters/shops/"""

    def test_list_sorted_by_order_then_name(self, authenticated_client):
        Shop.objects.create(id='S0001', name='Zeta', order=1)
        Shop.objects.create(id='S0002', name='Alpha', order=1)
        Shop.objects.create(id='S0003', name='Beta')
        url = reverse('masters:shop-list')

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['name'] for s in response.data] == ['Alpha', 'Zeta', 'Beta']

    def test_create_shop(self, authenticated_client):
        url = reverse('masters:shop-list')
        response = authenticated_client.post(
            url,
            {'name': 'Camera Shop', 'apply_end_days': 7, 'apply_end_time': '23:59'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] == 'S0001'
        assert response.data['order'] == 999

    def test_create_shop_requires_name(self, authenticated_client):
        url = reverse('masters:shop-list')
        response = authenticated_client.post(url, {'short_name': 'x'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_shop(self, authenticated_client, shop):
        url = reverse('masters:shop-detail', kwargs={'pk': shop.id})
        response = authenticated_client.patch(url, {'order': 5}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['order'] == 5
        shop.refresh_from_db()
        assert shop.order == 5

    def test_schedule_defaults(self, authenticated_client, shop):
        url = reverse('masters:shop-schedule-defaults', kwargs={'pk': shop.id})
        response = authenticated_client.get(url, {'base_date': '2024-05-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['apply_end'].startswith('2024-05-08T23:59')
        assert response.data['purchase_end'] is None

    def test_update_shop_deleted_meanwhile(self, authenticated_client, shop):
        url = reverse('masters:shop-detail', kwargs={'pk': shop.id})
        with patch(
            'apps.masters.views.update_shop',
            side_effect=ShopNotFoundError(f"Shop {shop.id} not found"),
        ):
            response = authenticated_client.patch(url, {'order': 5}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_schedule_defaults_missing_shop(self, authenticated_client, db):
        url = reverse('masters:shop-schedule-defaults', kwargs={'pk': 'S9999'})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_schedule_defaults_bad_date(self, authenticated_client, shop):
        url = reverse('masters:shop-schedule-defaults', kwargs={'pk': shop.id})
        response = authenticated_client.get(url, {'base_date': '05/01/2024'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data


# =============================================================================
# Member API Tests
# =============================================================================

@pytest.mark.django_db
class TestMemberAPI:
    """Tests for /api/masters/members/"""

    def test_list_sorted(self, authenticated_client, members):
        url = reverse('masters:member-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['name'] for m in response.data] == ['Hanako', 'Jiro', 'Taro']

    def test_create_member(self, authenticated_client):
        url = reverse('masters:member-list')
        response = authenticated_client.post(url, {'name': 'Taro', 'primary_flg': True}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] == 'M001'
        assert Member.objects.get(id='M001').primary_flg is True

    def test_primary_members(self, authenticated_client, members):
        url = reverse('masters:member-primary')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['id'] for m in response.data] == ['M002', 'M001']

    def test_update_member(self, authenticated_client, members):
        url = reverse('masters:member-detail', kwargs={'pk': 'M003'})
        response = authenticated_client.patch(url, {'primary_flg': True}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['primary_flg'] is True
        assert Member.objects.get(id='M003').primary_flg is True

    def test_update_member_deleted_meanwhile(self, authenticated_client, members):
        url = reverse('masters:member-detail', kwargs={'pk': 'M003'})
        with patch(
            'apps.masters.views.update_member',
            side_effect=MemberNotFoundError("Member M003 not found"),
        ):
            response = authenticated_client.patch(url, {'name': 'Saburo'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data
