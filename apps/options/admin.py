from django.contrib import admin
from .models import OptionItem


@admin.register(OptionItem)
class OptionItemAdmin(admin.ModelAdmin):
    """Admin for reference option rows."""
    list_display = ['list_code', 'code', 'name', 'order']
    list_filter = ['list_code']
    ordering = ['list_code', 'order']
