from rest_framework import serializers
from .models import OptionItem


class OptionItemSerializer(serializers.ModelSerializer):
    """Single option row."""

    class Meta:
        model = OptionItem
        fields = ['code', 'name', 'order']
        read_only_fields = fields


class OptionTablesSerializer(serializers.Serializer):
    """Response shape for the option tables endpoint."""

    OP002 = OptionItemSerializer(many=True)
    OP003 = OptionItemSerializer(many=True)
