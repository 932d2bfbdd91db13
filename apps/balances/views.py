from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.flats.permissions import IsFlatMember
from apps.flats.services import FlatNotFoundError, NotMemberError
from .serializers import FlatBalanceSerializer, MemberBalanceSerializer
from .services import get_flat_balance, get_member_balance


@extend_schema(
    responses={200: FlatBalanceSerializer},
    description="Net balance of every member and the settlement plan for the whole flat.",
    tags=['balance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFlatMember])
def flat_balance(request, flat_id):
    try:
        result = get_flat_balance(flat_id=flat_id, user=request.user)
    except FlatNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(FlatBalanceSerializer(result).data)


@extend_schema(
    responses={200: MemberBalanceSerializer},
    description="Everyone's net balance plus the transfers that involve the requesting member.",
    tags=['balance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFlatMember])
def my_balance(request, flat_id):
    try:
        result = get_member_balance(flat_id=flat_id, user=request.user)
    except FlatNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(MemberBalanceSerializer(result).data)
