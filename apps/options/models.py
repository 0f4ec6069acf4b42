from django.db import models


class OptionList(models.TextChoices):
    ENTRY_STATUS = 'OP002', 'Entry status'
    APPLY_METHOD = 'OP003', 'Apply method'


class OptionItem(models.Model):
    """One code/label row of a reference option list."""

    list_code = models.CharField(max_length=10, choices=OptionList.choices, db_index=True)
    code = models.IntegerField()
    name = models.CharField(max_length=100)
    order = models.IntegerField(default=999)

    class Meta:
        db_table = 'option_items'
        unique_together = [['list_code', 'code']]
        ordering = ['list_code', 'order', 'code']

    def __str__(self):
        return f"{self.list_code}:{self.code} {self.name}"
