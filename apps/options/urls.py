from django.urls import path
from . import views

app_name = 'options'

urlpatterns = [
    # GET /api/options/ - OP002 and OP003 lists
    path('', views.option_tables, name='option-tables'),
]
