from rest_framework import serializers
from .models import Entry, EntryStatus, PurchaseMember, PurchaseItem
from .services.entry_listing import LotteryMode, PurchaseMode


class LenientDateTimeField(serializers.DateTimeField):
    """
    DateTimeField that reads unparseable input as undecided (None).

    Blank strings and garbage both become None instead of a 400.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def to_internal_value(self, value):
        try:
            return super().to_internal_value(value)
        except serializers.ValidationError:
            return None


class PurchaseItemSerializer(serializers.ModelSerializer):
    """Line item of a purchase member; zero quantities are accepted and dropped."""

    quantity = serializers.IntegerField(min_value=0)

    class Meta:
        model = PurchaseItem
        fields = ['code', 'short_name', 'quantity', 'amount']


class PurchaseMemberSerializer(serializers.ModelSerializer):
    """Member row embedded in an entry."""

    status = serializers.ChoiceField(choices=EntryStatus.choices, default=EntryStatus.NOT_APPLIED)
    status_label = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = PurchaseMember
        fields = ['member_id', 'name', 'status', 'status_label']
        # Uniqueness per entry is checked by the service
        validators = []


class PurchaseMemberDetailSerializer(PurchaseMemberSerializer):
    """Member row with its purchased items."""

    items = PurchaseItemSerializer(many=True, read_only=True)

    class Meta(PurchaseMemberSerializer.Meta):
        fields = PurchaseMemberSerializer.Meta.fields + ['items']


class EntrySerializer(serializers.ModelSerializer):
    """Main serializer for entries."""

    product_id = serializers.CharField()
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_short_name = serializers.CharField(source='product.short_name', read_only=True)
    # Ignored once the entry has members
    status = serializers.ChoiceField(choices=EntryStatus.choices, required=False)
    status_label = serializers.CharField(source='get_status_display', read_only=True)
    apply_start = LenientDateTimeField()
    apply_end = LenientDateTimeField()
    result_date = LenientDateTimeField()
    purchase_start = LenientDateTimeField()
    purchase_end = LenientDateTimeField()
    purchase_date = LenientDateTimeField()
    purchase_members = PurchaseMemberSerializer(many=True, required=False)

    class Meta:
        model = Entry
        fields = [
            'id',
            'product_id',
            'product_name',
            'product_short_name',
            'shop_short_name',
            'status',
            'status_label',
            'apply_method',
            'apply_start',
            'apply_end',
            'result_date',
            'purchase_start',
            'purchase_end',
            'purchase_date',
            'url',
            'memo',
            'purchase_members',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class EntryDetailSerializer(EntrySerializer):
    """Entry with members and their items."""

    purchase_members = PurchaseMemberDetailSerializer(many=True, read_only=True)


class EntryListSerializer(EntrySerializer):
    """Entry row for lists."""

    purchase_members = PurchaseMemberSerializer(many=True, read_only=True)


class MemberStatusUpdateSerializer(serializers.Serializer):
    """Body of PUT /api/entries/{id}/members/."""

    members = PurchaseMemberSerializer(many=True)


class PurchaseItemsUpdateSerializer(serializers.Serializer):
    """Body of PUT /api/entries/{id}/members/{member_id}/items/."""

    items = PurchaseItemSerializer(many=True)


class LotteryQuerySerializer(serializers.Serializer):
    """Query parameters of the lottery list."""

    mode = serializers.ChoiceField(choices=LotteryMode.choices, default=LotteryMode.INFO)
    status = serializers.ChoiceField(choices=EntryStatus.choices, required=False)
    product = serializers.CharField(required=False, allow_blank=True)
    shop = serializers.CharField(required=False, allow_blank=True)


class PurchaseQuerySerializer(serializers.Serializer):
    """Query parameters of the purchase list."""

    mode = serializers.ChoiceField(choices=PurchaseMode.choices, default=PurchaseMode.PURCHASED)
    product = serializers.CharField(required=False, allow_blank=True)


class PurchaseSummaryItemSerializer(serializers.Serializer):
    code = serializers.CharField()
    short_name = serializers.CharField(allow_blank=True)
    quantity = serializers.IntegerField()
    amount = serializers.IntegerField()


class PurchaseSummaryMemberSerializer(serializers.Serializer):
    member_id = serializers.CharField()
    name = serializers.CharField(allow_blank=True)
    status = serializers.IntegerField()
    items = PurchaseSummaryItemSerializer(many=True)
    quantity = serializers.IntegerField()
    amount = serializers.IntegerField()


class PurchaseSummarySerializer(serializers.Serializer):
    """Per-member and per-code purchase totals of one entry."""

    entry_id = serializers.CharField()
    members = PurchaseSummaryMemberSerializer(many=True)
    items = PurchaseSummaryItemSerializer(many=True)
    total_quantity = serializers.IntegerField()
    total_amount = serializers.IntegerField()


class PurchaseListRowSerializer(serializers.Serializer):
    entry = EntryListSerializer()
    summary = PurchaseSummarySerializer()


class ProductFilterSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()


class PurchaseListSerializer(serializers.Serializer):
    """Response of the purchase list."""

    entries = PurchaseListRowSerializer(many=True)
    products = ProductFilterSerializer(many=True)
    total_amount = serializers.IntegerField()
