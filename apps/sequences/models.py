from django.db import models


class SequenceType(models.TextChoices):
    MEMBER = 'member', 'Member'
    PRODUCT = 'product', 'Product'
    SHOP = 'shop', 'Shop'
    ENTRY = 'entry', 'Entry'


class SequenceCounter(models.Model):
    """Next-ID counter, one row per entity type."""

    seq_type = models.CharField(
        max_length=20,
        primary_key=True,
        choices=SequenceType.choices
    )
    # Value handed out by the next call, not the last one issued
    seq = models.PositiveIntegerField(default=1)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'seq_management'
        ordering = ['seq_type']

    def __str__(self):
        return f"{self.seq_type}: {self.seq}"
