from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.options.services import load_option_tables

from .models import Entry
from .serializers import (
    EntrySerializer,
    EntryDetailSerializer,
    EntryListSerializer,
    MemberStatusUpdateSerializer,
    PurchaseItemSerializer,
    PurchaseItemsUpdateSerializer,
    LotteryQuerySerializer,
    PurchaseQuerySerializer,
    PurchaseSummarySerializer,
    PurchaseListSerializer,
)

from apps.entries.services import (
    create_entry,
    get_entry,
    update_entry,
    delete_entry,
    update_member_statuses,
    remove_purchase_member,
    get_purchase_items,
    replace_purchase_items,
    summarize_entry_purchases,
    list_lottery_entries,
    list_purchase_entries,
    build_purchase_listing,
    # Exceptions
    EntryNotFoundError,
    PurchaseMemberNotFoundError,
    InvalidMembersError,
    ProductReferenceError,
)


class EntryPagination(PageNumberPagination):
    """Custom pagination for entries."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class EntryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Entry CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Lottery list (?mode=info|results&status=&product=&shop=)
    create: Create an entry (primary members attached by default)
    retrieve: Get an entry with members and items
    update: Update an entry; a purchase_members list re-derives the status
    destroy: Delete an entry
    """

    queryset = Entry.objects.select_related('product').prefetch_related('purchase_members__items')
    serializer_class = EntrySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = EntryPagination

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return EntryListSerializer
        elif self.action == 'retrieve':
            return EntryDetailSerializer
        return EntrySerializer

    @extend_schema(parameters=[LotteryQuerySerializer])
    def list(self, request, *args, **kwargs):
        """Lottery list with mode and filters."""
        query = LotteryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        entries = list_lottery_entries(
            option_tables=load_option_tables(),
            mode=params['mode'],
            status=params.get('status'),
            product_id=params.get('product') or None,
            shop=params.get('shop') or None,
        )

        page = self.paginate_queryset(entries)
        if page is not None:
            serializer = EntryListSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = EntryListSerializer(entries, many=True)
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):
        """Create a new entry."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = create_entry(**serializer.validated_data)
        except ProductReferenceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidMembersError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = EntryDetailSerializer(get_entry(entry_id=entry.id))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update an entry."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            entry = update_entry(entry_id=instance.id, **serializer.validated_data)
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (ProductReferenceError, InvalidMembersError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EntryDetailSerializer(entry).data)

    def destroy(self, request, *args, **kwargs):
        """Delete an entry."""
        try:
            delete_entry(entry_id=self.kwargs['pk'])
            return Response(status=status.HTTP_204_NO_CONTENT)
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    @extend_schema(
        request=MemberStatusUpdateSerializer,
        responses={200: EntryDetailSerializer},
    )
    @action(detail=True, methods=['put'])
    def members(self, request, pk=None):
        """Upsert member statuses and re-derive the entry status."""
        serializer = MemberStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_member_statuses(pk, serializer.validated_data['members'])
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidMembersError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EntryDetailSerializer(get_entry(entry_id=pk)).data)

    @extend_schema(responses={200: EntryDetailSerializer})
    @action(detail=True, methods=['delete'], url_path=r'members/(?P<member_id>[^/.]+)')
    def remove_member(self, request, pk=None, member_id=None):
        """Remove a member from the entry and re-derive the status."""
        try:
            remove_purchase_member(pk, member_id)
        except (EntryNotFoundError, PurchaseMemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(EntryDetailSerializer(get_entry(entry_id=pk)).data)

    @extend_schema(
        request=PurchaseItemsUpdateSerializer,
        responses={200: PurchaseItemSerializer(many=True)},
    )
    @action(detail=True, methods=['get', 'put'], url_path=r'members/(?P<member_id>[^/.]+)/items')
    def member_items(self, request, pk=None, member_id=None):
        """Get or replace the items bought by one member."""
        try:
            if request.method == 'PUT':
                serializer = PurchaseItemsUpdateSerializer(data=request.data)
                serializer.is_valid(raise_exception=True)
                items = replace_purchase_items(pk, member_id, serializer.validated_data['items'])
            else:
                items = get_purchase_items(pk, member_id)
        except (EntryNotFoundError, PurchaseMemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(PurchaseItemSerializer(items, many=True).data)

    @extend_schema(responses={200: PurchaseSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Purchase totals for the entry."""
        try:
            entry = get_entry(entry_id=pk)
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(PurchaseSummarySerializer(summarize_entry_purchases(entry)).data)

    @extend_schema(
        parameters=[PurchaseQuerySerializer],
        responses={200: PurchaseListSerializer},
    )
    @action(detail=False, methods=['get'])
    def purchases(self, request):
        """Purchase list (?mode=management&product=)."""
        query = PurchaseQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        entries = list_purchase_entries(
            mode=params['mode'],
            product_id=params.get('product') or None,
        )
        return Response(PurchaseListSerializer(build_purchase_listing(entries)).data)
