from django.contrib import admin
from .models import SequenceCounter


@admin.register(SequenceCounter)
class SequenceCounterAdmin(admin.ModelAdmin):
    """Admin for next-ID counters."""
    list_display = ['seq_type', 'seq', 'updated_at']
    readonly_fields = ['updated_at']
