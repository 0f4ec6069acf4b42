from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.entries.models import Entry, EntryStatus, PurchaseMember
from apps.options.models import OptionItem, OptionList


# =============================================================================
# Entry CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestEntryCreate:
    """Tests for POST /api/entries/"""

    def test_create_entry_with_primary_members(self, authenticated_client, product, primary_members):
        url = reverse('entries:entry-list')
        data = {
            'product_id': product.id,
            'shop_short_name': 'Camera Shop',
            'apply_end': '2099-01-10T23:59:00+09:00',
            'url': 'https://example.com/lottery',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] == '1'
        assert response.data['product_name'] == 'Game Console'
        assert [m['member_id'] for m in response.data['purchase_members']] == ['M001', 'M002']

    def test_create_with_members_derives_status(self, authenticated_client, product):
        url = reverse('entries:entry-list')
        data = {
            'product_id': product.id,
            'purchase_members': [
                {'member_id': 'M001', 'name': 'Taro', 'status': EntryStatus.PURCHASED},
                {'member_id': 'M002', 'name': 'Hanako', 'status': EntryStatus.WON},
            ],
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == EntryStatus.WON
        assert response.data['purchase_date'] is not None

    def test_create_requires_product(self, authenticated_client, db):
        url = reverse('entries:entry-list')
        response = authenticated_client.post(url, {'shop_short_name': 'Camera'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'product_id' in response.data
        assert not Entry.objects.exists()

    def test_create_unknown_product(self, authenticated_client, db):
        url = reverse('entries:entry-list')
        response = authenticated_client.post(url, {'product_id': 'P9999'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_unparseable_dates_are_undecided(self, authenticated_client, product):
        url = reverse('entries:entry-list')
        data = {
            'product_id': product.id,
            'apply_start': 'sometime next week',
            'apply_end': '',
            'purchase_members': [],
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['apply_start'] is None
        assert response.data['apply_end'] is None

    def test_unauthenticated(self, api_client):
        url = reverse('entries:entry-list')
        response = api_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestEntryDetail:
    """Tests for GET/PATCH/DELETE /api/entries/{id}/"""

    def test_retrieve_includes_items(self, authenticated_client, purchased_entry):
        url = reverse('entries:entry-detail', kwargs={'pk': purchased_entry.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        members = {m['member_id']: m for m in response.data['purchase_members']}
        assert len(members['M001']['items']) == 2
        assert response.data['status_label'] == '購入済'

    def test_retrieve_missing(self, authenticated_client, db):
        url = reverse('entries:entry-detail', kwargs={'pk': '999'})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_members_derives_status(self, authenticated_client, entry):
        url = reverse('entries:entry-detail', kwargs={'pk': entry.id})
        data = {
            'purchase_members': [
                {'member_id': 'M001', 'name': 'Taro', 'status': 20},
                {'member_id': 'M002', 'name': 'Hanako', 'status': 0},
            ],
        }
        response = authenticated_client.patch(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == EntryStatus.APPLYING

    def test_patch_memo(self, authenticated_client, entry):
        url = reverse('entries:entry-detail', kwargs={'pk': entry.id})
        response = authenticated_client.patch(url, {'memo': 'receipt in drawer'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        entry.refresh_from_db()
        assert entry.memo == 'receipt in drawer'
        assert entry.status == EntryStatus.APPLIED

    def test_patch_status_is_rederived(self, authenticated_client, entry):
        url = reverse('entries:entry-detail', kwargs={'pk': entry.id})
        response = authenticated_client.patch(url, {'status': EntryStatus.LOST}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == EntryStatus.APPLIED
        entry.refresh_from_db()
        assert entry.status == EntryStatus.APPLIED

    def test_put_without_status_keeps_derived_status(self, authenticated_client, entry, product):
        url = reverse('entries:entry-detail', kwargs={'pk': entry.id})
        data = {'product_id': product.id, 'memo': 'second round'}
        response = authenticated_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        entry.refresh_from_db()
        assert entry.memo == 'second round'
        assert entry.status == EntryStatus.APPLIED

    def test_delete(self, authenticated_client, entry):
        url = reverse('entries:entry-detail', kwargs={'pk': entry.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Entry.objects.filter(id=entry.id).exists()

    def test_delete_missing(self, authenticated_client, db):
        url = reverse('entries:entry-detail', kwargs={'pk': '999'})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Member and Item Action Tests
# =============================================================================

@pytest.mark.django_db
class TestMemberActions:
    """Tests for the members/ and items/ actions."""

    def test_put_members(self, authenticated_client, entry):
        url = reverse('entries:entry-members', kwargs={'pk': entry.id})
        data = {'members': [
            {'member_id': 'M001', 'status': 40},
            {'member_id': 'M002', 'status': 40},
        ]}
        response = authenticated_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == EntryStatus.PURCHASED
        assert response.data['purchase_date'] is not None

    def test_put_members_invalid_status(self, authenticated_client, entry):
        url = reverse('entries:entry-members', kwargs={'pk': entry.id})
        response = authenticated_client.put(url, {'members': [{'member_id': 'M001', 'status': 50}]}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_put_members_missing_entry(self, authenticated_client, db):
        url = reverse('entries:entry-members', kwargs={'pk': '999'})
        response = authenticated_client.put(url, {'members': []}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_put_members_duplicate(self, authenticated_client, entry):
        url = reverse('entries:entry-members', kwargs={'pk': entry.id})
        data = {'members': [
            {'member_id': 'M001', 'status': 20},
            {'member_id': 'M001', 'status': 30},
        ]}
        response = authenticated_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_remove_member(self, authenticated_client, entry):
        url = reverse('entries:entry-remove-member', kwargs={'pk': entry.id, 'member_id': 'M002'})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['member_id'] for m in response.data['purchase_members']] == ['M001']

    def test_put_items_drops_zero_quantity(self, authenticated_client, purchased_entry):
        url = reverse(
            'entries:entry-member-items',
            kwargs={'pk': purchased_entry.id, 'member_id': 'M001'}
        )
        data = {'items': [
            {'code': 'STD', 'short_name': 'Std', 'quantity': 1, 'amount': 50000},
            {'code': 'CTL', 'short_name': 'Pad', 'quantity': 0, 'amount': 0},
        ]}
        response = authenticated_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [i['code'] for i in response.data] == ['STD']

    def test_get_items(self, authenticated_client, purchased_entry):
        url = reverse(
            'entries:entry-member-items',
            kwargs={'pk': purchased_entry.id, 'member_id': 'M002'}
        )
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['quantity'] == 1

    def test_items_unknown_member(self, authenticated_client, purchased_entry):
        url = reverse(
            'entries:entry-member-items',
            kwargs={'pk': purchased_entry.id, 'member_id': 'M999'}
        )
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_summary(self, authenticated_client, purchased_entry):
        url = reverse('entries:entry-summary', kwargs={'pk': purchased_entry.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_amount'] == 116000
        assert response.data['total_quantity'] == 4


# =============================================================================
# List Tests
# =============================================================================

@pytest.mark.django_db
class TestLotteryList:
    """Tests for GET /api/entries/"""

    def test_list_uses_option_order(self, authenticated_client, product):
        Entry.objects.create(id='1', product=product, status=EntryStatus.NOT_APPLIED)
        Entry.objects.create(id='2', product=product, status=EntryStatus.WON)
        OptionItem.objects.create(list_code=OptionList.ENTRY_STATUS, code=30, name='当選', order=1)
        OptionItem.objects.create(list_code=OptionList.ENTRY_STATUS, code=0, name='未応募', order=2)

        url = reverse('entries:entry-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [e['id'] for e in response.data['results']] == ['2', '1']

    def test_results_mode(self, authenticated_client, product):
        Entry.objects.create(id='1', product=product, status=EntryStatus.NOT_APPLIED)
        Entry.objects.create(id='2', product=product, status=EntryStatus.APPLIED)

        url = reverse('entries:entry-list')
        response = authenticated_client.get(url, {'mode': 'results'})

        assert [e['id'] for e in response.data['results']] == ['2']

    def test_invalid_mode(self, authenticated_client, db):
        url = reverse('entries:entry-list')
        response = authenticated_client.get(url, {'mode': 'everything'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_store_failure_is_generic_error(self, authenticated_client, db):
        url = reverse('entries:entry-list')
        with patch('apps.entries.views.list_lottery_entries', side_effect=DatabaseError('disk I/O error')):
            response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Operation failed'}


@pytest.mark.django_db
class TestPurchaseList:
    """Tests for GET /api/entries/purchases/"""

    def test_purchase_list(self, authenticated_client, purchased_entry, entry):
        url = reverse('entries:entry-purchases')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [row['entry']['id'] for row in response.data['entries']] == [purchased_entry.id]
        assert response.data['total_amount'] == 116000
        assert response.data['products'][0]['product_id'] == 'P0001'

    def test_management_mode(self, authenticated_client, product):
        Entry.objects.create(id='1', product=product, status=EntryStatus.WON)
        PurchaseMember.objects.create(entry_id='1', member_id='M001', status=EntryStatus.WON)

        url = reverse('entries:entry-purchases')
        response = authenticated_client.get(url, {'mode': 'management'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['entry']['id'] for row in response.data['entries']] == ['1']
        assert response.data['total_amount'] == 0
