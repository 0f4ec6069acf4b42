from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import OptionTablesSerializer
from .services import load_option_tables


@extend_schema(
    responses={200: OptionTablesSerializer},
    description="Get the status (OP002) and apply method (OP003) option lists.",
    tags=['options'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def option_tables(request):
    """Get reference option lists - thin HTTP handler."""
    return Response(load_option_tables())
