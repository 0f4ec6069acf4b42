from django.contrib import admin
from .models import Product, ProductRelation, Shop, Member


class ProductRelationInline(admin.TabularInline):
    model = ProductRelation
    extra = 0
    fields = ['position', 'code', 'name', 'short_name', 'unit_price', 'quantity', 'amount']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'short_name', 'release_date', 'display_flag']
    list_filter = ['display_flag']
    search_fields = ['id', 'name', 'short_name']
    date_hierarchy = 'release_date'
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [ProductRelationInline]


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'short_name', 'order', 'display_flag']
    list_filter = ['display_flag']
    search_fields = ['name', 'short_name']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'short_name', 'order', 'primary_flg', 'display_flag']
    list_filter = ['primary_flg', 'display_flag']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at', 'updated_at']
