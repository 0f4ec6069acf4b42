from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import DeadlineAlertsSerializer, ScheduleSerializer
from .services import get_deadline_alerts, get_schedule


@extend_schema(
    responses={200: DeadlineAlertsSerializer},
    description="Count entries whose deadline falls within the next 7 days, per product.",
    tags=['schedule'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def deadline_alerts(request):
    """Get deadline alerts - thin HTTP handler."""
    return Response(get_deadline_alerts())


@extend_schema(
    responses={200: ScheduleSerializer},
    description="Entry dates within one month either side of today, as a sorted timeline.",
    tags=['schedule'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def schedule(request):
    """Get schedule timeline - thin HTTP handler."""
    return Response(get_schedule())
