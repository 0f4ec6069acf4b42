from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'entries'

# No API root view: the list route owns the empty prefix
router = SimpleRouter()
router.register(r'', views.EntryViewSet, basename='entry')

urlpatterns = [
    # Entry ViewSet routes
    # GET    /api/entries/              - Lottery list (?mode=info|results)
    # POST   /api/entries/              - Create entry
    # GET    /api/entries/{id}/         - Entry with members and items
    # PUT    /api/entries/{id}/         - Update entry
    # PATCH  /api/entries/{id}/         - Partial update
    # DELETE /api/entries/{id}/         - Delete entry

    # Custom entry actions
    # PUT    /api/entries/{id}/members/                        - Upsert member statuses
    # DELETE /api/entries/{id}/members/{member_id}/            - Remove member
    # GET    /api/entries/{id}/members/{member_id}/items/      - Member's items
    # PUT    /api/entries/{id}/members/{member_id}/items/      - Replace member's items
    # GET    /api/entries/{id}/summary/                        - Purchase totals
    # GET    /api/entries/purchases/                           - Purchase list

    path('', include(router.urls)),
]
