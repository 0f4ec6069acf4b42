from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.entries.models import Entry
from apps.entries.serializers import EntryListSerializer

from .models import Product, Shop, Member
from .serializers import (
    ProductSerializer,
    ShopSerializer,
    ShopScheduleDefaultsSerializer,
    MemberSerializer,
)
from .services import (
    create_product,
    update_product,
    delete_product,
    list_current_products,
    list_past_products,
    create_shop,
    update_shop,
    get_shop_by_id,
    schedule_defaults,
    create_member,
    update_member,
    get_primary_members,
    # Exceptions
    ProductNotFoundError,
    ShopNotFoundError,
    MemberNotFoundError,
)


def _is_truthy(value):
    return str(value).lower() in ('1', 'true', 'yes')


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Product CRUD operations.

    list: Current products (?all=true for every product)
    create: Create a product with a new P#### id
    retrieve: Get a product with its relations
    update: Update a product; relations are replaced wholesale
    destroy: Hard-delete a product
    """

    queryset = Product.objects.prefetch_related('relations')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    # Master lists feed form pickers and are returned whole
    pagination_class = None

    def get_queryset(self):
        if self.action == 'list' and not _is_truthy(self.request.query_params.get('all', '')):
            return list_current_products()
        return Product.objects.prefetch_related('relations').order_by('-id')

    @extend_schema(
        parameters=[
            OpenApiParameter(name='all', type=bool, description='Return every product'),
        ],
    )
    def list(self, request, *args, **kwargs):
        """List current products, or all with ?all=true."""
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        """Create a new product."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(**serializer.validated_data)

        output_serializer = ProductSerializer(product, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a product."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            product = update_product(product_id=instance.id, **serializer.validated_data)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        output_serializer = ProductSerializer(product, context={'request': request})
        return Response(output_serializer.data)

    def destroy(self, request, *args, **kwargs):
        """Delete a product."""
        try:
            delete_product(product_id=self.kwargs['pk'])
            return Response(status=status.HTTP_204_NO_CONTENT)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    @action(detail=False, methods=['get'])
    def past(self, request):
        """Products released more than 14 days ago, newest first."""
        serializer = ProductSerializer(list_past_products(), many=True)
        return Response(serializer.data)

    @extend_schema(responses={200: EntryListSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def entries(self, request, pk=None):
        """Entries tracked for this product."""
        product = self.get_object()
        entries = (
            Entry.objects
            .filter(product=product)
            .select_related('product')
            .prefetch_related('purchase_members')
            .order_by('-created_at')
        )
        serializer = EntryListSerializer(entries, many=True)
        return Response(serializer.data)


class ShopViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Shop CRUD operations.

    list: Shops ordered by display order, then name
    create: Create a shop with a new S#### id
    """

    queryset = Shop.objects.order_by('order', 'name')
    serializer_class = ShopSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def create(self, request, *args, **kwargs):
        """Create a new shop."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        shop = create_shop(**serializer.validated_data)

        return Response(ShopSerializer(shop).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a shop."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            shop = update_shop(shop_id=instance.id, **serializer.validated_data)
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ShopSerializer(shop).data)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='base_date', type=str, description='YYYY-MM-DD, defaults to today'),
        ],
        responses={200: ShopScheduleDefaultsSerializer},
    )
    @action(detail=True, methods=['get'], url_path='schedule-defaults', url_name='schedule-defaults')
    def defaults(self, request, pk=None):
        """Suggested entry dates from this shop's offsets."""
        try:
            shop = get_shop_by_id(shop_id=pk)
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        raw = request.query_params.get('base_date')
        if raw:
            try:
                base_date = parse_date(raw)
            except ValueError:
                base_date = None
            if base_date is None:
                return Response(
                    {'error': 'base_date must be YYYY-MM-DD'},
                    status=status.HTTP_400_BAD_REQUEST
                )
        else:
            base_date = timezone.localdate()

        serializer = ShopScheduleDefaultsSerializer(schedule_defaults(shop, base_date))
        return Response(serializer.data)


class MemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Member CRUD operations.

    list: Members ordered by display order, then name
    create: Create a member with a new M### id
    """

    queryset = Member.objects.order_by('order', 'name')
    serializer_class = MemberSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def create(self, request, *args, **kwargs):
        """Create a new member."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = create_member(**serializer.validated_data)

        return Response(MemberSerializer(member).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a member."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            member = update_member(member_id=instance.id, **serializer.validated_data)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(MemberSerializer(member).data)

    @action(detail=False, methods=['get'])
    def primary(self, request):
        """Members attached to new entries by default."""
        serializer = MemberSerializer(get_primary_members(), many=True)
        return Response(serializer.data)
