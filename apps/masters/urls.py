from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'masters'

router = DefaultRouter()
router.register(r'products', views.ProductViewSet, basename='product')
router.register(r'shops', views.ShopViewSet, basename='shop')
router.register(r'members', views.MemberViewSet, basename='member')

urlpatterns = [
    # Product routes
    # GET    /api/masters/products/               - Current products (?all=true for all)
    # POST   /api/masters/products/               - Create product
    # GET    /api/masters/products/past/          - Past products, newest first
    # GET    /api/masters/products/{id}/entries/  - Entries for a product

    # Shop routes
    # GET    /api/masters/shops/                          - Shops by order, name
    # GET    /api/masters/shops/{id}/schedule-defaults/   - Suggested entry dates

    # Member routes
    # GET    /api/masters/members/                - Members by order, name
    # GET    /api/masters/members/primary/        - Auto-attached members

    path('', include(router.urls)),
]
