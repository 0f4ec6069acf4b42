from django.urls import path
from . import views

app_name = 'schedule'

urlpatterns = [
    # GET /api/alerts/    - Approaching deadline counts
    # GET /api/schedule/  - Timeline of entry dates
    path('alerts/', views.deadline_alerts, name='alerts'),
    path('schedule/', views.schedule, name='schedule'),
]
