from django.contrib import admin
from .models import Entry, PurchaseMember, PurchaseItem


class PurchaseMemberInline(admin.TabularInline):
    model = PurchaseMember
    extra = 0
    fields = ['member_id', 'name', 'status']


class PurchaseItemInline(admin.TabularInline):
    model = PurchaseItem
    extra = 0
    fields = ['code', 'short_name', 'quantity', 'amount']


@admin.register(Entry)
class EntryAdmin(admin.ModelAdmin):
    list_display = ['id', 'product', 'shop_short_name', 'status', 'apply_end', 'result_date', 'purchase_date']
    list_filter = ['status']
    search_fields = ['id', 'product__name', 'shop_short_name']
    list_select_related = ['product']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [PurchaseMemberInline]


@admin.register(PurchaseMember)
class PurchaseMemberAdmin(admin.ModelAdmin):
    list_display = ['entry', 'member_id', 'name', 'status']
    list_filter = ['status']
    search_fields = ['entry__id', 'member_id', 'name']
    inlines = [PurchaseItemInline]
