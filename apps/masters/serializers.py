from rest_framework import serializers
from .models import Product, ProductRelation, Shop, Member


class ProductRelationSerializer(serializers.ModelSerializer):
    """Relation row nested in a product; order is the list position."""

    class Meta:
        model = ProductRelation
        fields = ['code', 'name', 'short_name', 'unit_price', 'quantity', 'amount']


class ProductSerializer(serializers.ModelSerializer):
    """Main serializer for products."""

    relations = ProductRelationSerializer(many=True, required=False)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'short_name',
            'display_flag',
            'release_date',
            'relations',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'display_flag': {'required': False},
        }


class ProductOptionSerializer(serializers.ModelSerializer):
    """Minimal product info for pickers."""

    class Meta:
        model = Product
        fields = ['id', 'name', 'short_name', 'release_date']
        read_only_fields = fields


class ShopSerializer(serializers.ModelSerializer):
    """Serializer for shops including default date offsets."""

    class Meta:
        model = Shop
        fields = [
            'id',
            'name',
            'short_name',
            'order',
            'display_flag',
            'address',
            'apply_start_days',
            'apply_start_time',
            'apply_end_days',
            'apply_end_time',
            'result_days',
            'result_time',
            'purchase_start_days',
            'purchase_start_time',
            'purchase_end_days',
            'purchase_end_time',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ShopScheduleDefaultsSerializer(serializers.Serializer):
    """Suggested entry dates derived from a shop's offsets."""

    apply_start = serializers.DateTimeField(allow_null=True)
    apply_end = serializers.DateTimeField(allow_null=True)
    result = serializers.DateTimeField(allow_null=True)
    purchase_start = serializers.DateTimeField(allow_null=True)
    purchase_end = serializers.DateTimeField(allow_null=True)


class MemberSerializer(serializers.ModelSerializer):
    """Serializer for household members."""

    class Meta:
        model = Member
        fields = [
            'id',
            'name',
            'short_name',
            'order',
            'primary_flg',
            'display_flag',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
