from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    InvitationSerializer,
    InvitationCreateSerializer,
    InvitationCreatedSerializer,
    InvitationAcceptSerializer,
    InvitationAcceptedSerializer,
    InvitationListQuerySerializer,
)
from apps.invitations.services import (
    create_invitation,
    list_pending_invitations,
    revoke_invitation,
    accept_invitation,
    # Exceptions
    FlatNotFoundError,
    InvitationNotFoundError,
    InsufficientPermissionsError,
    AlreadyMemberError,
    InvitationNotPendingError,
    InvitationExpiredError,
    InvitationEmailMismatchError,
    InvitationDeliveryError,
)


class InvitationViewSet(viewsets.GenericViewSet):
    """
    Email invitations to join a flat.

    list: Pending invitations of a flat (owner only, ?flat=<id>)
    create: Invite an email address (owner only)
    revoke: Revoke a pending invitation (owner only)
    accept: Accept an invitation by token (invited user)
    """

    serializer_class = InvitationSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'

    @extend_schema(
        parameters=[OpenApiParameter('flat', str, required=True, description='Flat id')],
        responses={200: InvitationSerializer(many=True)},
    )
    def list(self, request):
        query = InvitationListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        flat_id = query.validated_data['flat']

        try:
            invitations = list_pending_invitations(flat_id=flat_id, user=request.user)
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(InvitationSerializer(invitations, many=True).data)

    @extend_schema(
        request=InvitationCreateSerializer,
        responses={201: InvitationCreatedSerializer},
    )
    def create(self, request):
        serializer = InvitationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invitation, _ = create_invitation(
                flat_id=serializer.validated_data['flat'],
                email=serializer.validated_data['email'],
                invited_by=request.user,
            )
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvitationDeliveryError as e:
            return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(
            {'invitation_id': invitation.id, 'expires_at': invitation.expires_at},
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: InvitationSerializer})
    @action(detail=True, methods=['post'])
    def revoke(self, request, pk=None):
        try:
            invitation = revoke_invitation(invitation_id=pk, user=request.user)
        except InvitationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvitationNotPendingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InvitationSerializer(invitation).data)

    @extend_schema(
        request=InvitationAcceptSerializer,
        responses={200: InvitationAcceptedSerializer},
    )
    @action(detail=False, methods=['post'])
    def accept(self, request):
        serializer = InvitationAcceptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invitation = accept_invitation(
                token=serializer.validated_data['token'],
                user=request.user,
            )
        except InvitationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvitationNotPendingError, InvitationExpiredError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvitationEmailMismatchError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({'flat_id': invitation.flat_id})
