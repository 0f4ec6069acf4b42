# ==========================================
# apps/entries/models.py
# ==========================================

from django.db import models

from apps.masters.models import Product


class EntryStatus(models.IntegerChoices):
    """
    Lifecycle status of an entry and of each purchase member.

    The numeric code doubles as the aggregation priority: lower codes are
    earlier in the lifecycle. EXCLUDED members never take part in it.
    """
    NOT_APPLIED = 0, '未応募'
    EXCLUDED = 9, '対象外'
    APPLYING = 10, '応募中'
    APPLIED = 20, '応募済'
    WON = 30, '当選'
    PURCHASED = 40, '購入済'
    LOST = 99, '落選'


# Fallback display order when the OP002 option table has no row for a status
DEFAULT_STATUS_ORDER = {
    EntryStatus.NOT_APPLIED: 1,
    EntryStatus.APPLYING: 2,
    EntryStatus.APPLIED: 3,
    EntryStatus.WON: 4,
    EntryStatus.PURCHASED: 5,
    EntryStatus.LOST: 6,
    EntryStatus.EXCLUDED: 7,
}

# Status groups used by alerts and listings
APPLY_PHASE = frozenset({EntryStatus.NOT_APPLIED, EntryStatus.APPLYING, EntryStatus.APPLIED})
RESULT_PENDING = frozenset({EntryStatus.APPLYING, EntryStatus.APPLIED})
RESULT_STATUSES = frozenset({EntryStatus.APPLIED, EntryStatus.WON, EntryStatus.LOST})
PURCHASE_MANAGEMENT = frozenset({EntryStatus.WON, EntryStatus.PURCHASED, EntryStatus.LOST})


class Entry(models.Model):
    """One lottery or pre-order campaign for a product at a shop."""

    id = models.CharField(primary_key=True, max_length=20, editable=False)
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='entries'
    )
    # Free-text shop label, not a reference to Shop
    shop_short_name = models.CharField(max_length=100, blank=True)
    status = models.IntegerField(
        choices=EntryStatus.choices,
        default=EntryStatus.NOT_APPLIED,
        db_index=True
    )
    # OP003 code
    apply_method = models.IntegerField(null=True, blank=True)

    # None means undecided
    apply_start = models.DateTimeField(null=True, blank=True)
    apply_end = models.DateTimeField(null=True, blank=True)
    result_date = models.DateTimeField(null=True, blank=True)
    purchase_start = models.DateTimeField(null=True, blank=True)
    purchase_end = models.DateTimeField(null=True, blank=True)
    purchase_date = models.DateTimeField(null=True, blank=True)

    url = models.URLField(max_length=500, blank=True)
    memo = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'entries'
        indexes = [
            models.Index(fields=['product', 'status'], name='entries_product_5b0e7d_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'entries'

    def __str__(self):
        return f"{self.id} {self.product_id} {self.shop_short_name}"


class PurchaseMember(models.Model):
    """Member taking part in an entry, with their own status."""

    entry = models.ForeignKey(
        Entry,
        on_delete=models.CASCADE,
        related_name='purchase_members'
    )
    # Member id kept as a plain value; the member may be deleted later
    member_id = models.CharField(max_length=20)
    name = models.CharField(max_length=100, blank=True)
    status = models.IntegerField(
        choices=EntryStatus.choices,
        default=EntryStatus.NOT_APPLIED
    )

    class Meta:
        db_table = 'purchase_members'
        unique_together = ['entry', 'member_id']
        ordering = ['entry', 'member_id']

    def __str__(self):
        return f"{self.entry_id}/{self.member_id} ({self.get_status_display()})"


class PurchaseItem(models.Model):
    """Line item bought by one purchase member; replaced wholesale on save."""

    purchase_member = models.ForeignKey(
        PurchaseMember,
        on_delete=models.CASCADE,
        related_name='items'
    )
    code = models.CharField(max_length=50)
    short_name = models.CharField(max_length=100, blank=True)
    quantity = models.PositiveIntegerField()
    amount = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'purchase_items'
        ordering = ['purchase_member', 'id']

    def __str__(self):
        return f"{self.code} x{self.quantity}"
