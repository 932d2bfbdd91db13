from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.flats.permissions import IsFlatMember
from apps.flats.services import get_flat_for_member, FlatNotFoundError, NotMemberError
from .dashboard import DashboardQueries
from .serializers import DashboardResponseSerializer


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Month summary, recent expenses and charts for a flat.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFlatMember])
def flat_dashboard(request, flat_id):
    """Flat dashboard - thin HTTP handler."""
    try:
        flat = get_flat_for_member(flat_id=flat_id, user=request.user)
    except FlatNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    data = DashboardQueries.flat_dashboard(flat)
    return Response(DashboardResponseSerializer(data).data)
