# ==========================================
# apps/masters/models.py
# ==========================================

from datetime import timedelta

from django.db import models

# Products released within this many days (or in the future) count as current
CURRENT_PRODUCT_DAYS = 14


class Product(models.Model):
    """Product that lotteries and pre-orders are tracked for."""

    id = models.CharField(primary_key=True, max_length=20, editable=False)
    name = models.CharField(max_length=200)
    short_name = models.CharField(max_length=100, blank=True)
    # None is treated as visible
    display_flag = models.BooleanField(null=True, default=True)
    release_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['release_date'], name='products_release_a1c2f4_idx'),
        ]
        ordering = ['-id']

    def __str__(self):
        return f"{self.id} {self.name}"

    @property
    def is_visible(self):
        return self.display_flag is not False

    def is_current(self, today):
        """Released on or after ``today - 14 days``; undated products never are."""
        if self.release_date is None:
            return False
        return self.release_date >= today - timedelta(days=CURRENT_PRODUCT_DAYS)

    def is_past(self, today):
        """Released strictly before ``today - 14 days``."""
        if self.release_date is None:
            return False
        return self.release_date < today - timedelta(days=CURRENT_PRODUCT_DAYS)


class ProductRelation(models.Model):
    """Purchasable line (edition, bundle, ...) belonging to a product."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='relations'
    )
    position = models.PositiveIntegerField(default=0)
    code = models.CharField(max_length=50)
    name = models.CharField(max_length=200, blank=True)
    short_name = models.CharField(max_length=100, blank=True)
    unit_price = models.PositiveIntegerField(default=0)
    quantity = models.PositiveIntegerField(default=0)
    amount = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'product_relations'
        ordering = ['product', 'position']

    def __str__(self):
        return f"{self.product_id} {self.code}"


class Shop(models.Model):
    """Retail shop; the offsets are form defaults only."""

    id = models.CharField(primary_key=True, max_length=20, editable=False)
    name = models.CharField(max_length=200)
    short_name = models.CharField(max_length=100, blank=True)
    order = models.IntegerField(default=999)
    display_flag = models.BooleanField(default=True)
    address = models.CharField(max_length=300, blank=True)

    # Relative day counts from the base date plus a time of day
    apply_start_days = models.IntegerField(null=True, blank=True)
    apply_start_time = models.TimeField(null=True, blank=True)
    apply_end_days = models.IntegerField(null=True, blank=True)
    apply_end_time = models.TimeField(null=True, blank=True)
    result_days = models.IntegerField(null=True, blank=True)
    result_time = models.TimeField(null=True, blank=True)
    purchase_start_days = models.IntegerField(null=True, blank=True)
    purchase_start_time = models.TimeField(null=True, blank=True)
    purchase_end_days = models.IntegerField(null=True, blank=True)
    purchase_end_time = models.TimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shops'
        ordering = ['order', 'name']

    def __str__(self):
        return self.name


class Member(models.Model):
    """Household member who can take part in entries."""

    id = models.CharField(primary_key=True, max_length=20, editable=False)
    name = models.CharField(max_length=100)
    short_name = models.CharField(max_length=50, blank=True)
    order = models.IntegerField(default=999)
    # Attached automatically to new entries
    primary_flg = models.BooleanField(default=False)
    display_flag = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'members'
        ordering = ['order', 'name']

    def __str__(self):
        return self.name
