from rest_framework import serializers


class AlertCountsSerializer(serializers.Serializer):
    apply_end = serializers.IntegerField()
    result_date = serializers.IntegerField()
    purchase_end = serializers.IntegerField()


class ProductAlertSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    counts = AlertCountsSerializer()


class DeadlineAlertsSerializer(serializers.Serializer):
    """Approaching deadline counts for current products and the past bucket."""

    current_products = ProductAlertSerializer(many=True)
    past_products = AlertCountsSerializer(allow_null=True)


class ScheduleEventSerializer(serializers.Serializer):
    sort_date = serializers.CharField()
    sort_time = serializers.CharField(allow_blank=True)
    sort_type = serializers.CharField()
    month_id = serializers.CharField(allow_blank=True)
    date = serializers.CharField(allow_blank=True)
    time = serializers.CharField(allow_blank=True)
    type = serializers.CharField()
    shop_name = serializers.CharField(allow_blank=True)
    product_name = serializers.CharField()
    product_short_name = serializers.CharField(allow_blank=True)
    product_id = serializers.CharField()
    entry_id = serializers.CharField()
    url = serializers.CharField(allow_blank=True)


class ScheduleProductSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()


class ScheduleSerializer(serializers.Serializer):
    """Timeline events plus the products they refer to."""

    schedule = ScheduleEventSerializer(many=True)
    products = ScheduleProductSerializer(many=True)
