from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .models import Flat
from .serializers import (
    FlatSerializer,
    FlatCreateSerializer,
    FlatListSerializer,
    FlatMemberSerializer,
    AddMemberSerializer,
)
from .permissions import IsFlatMember, IsFlatOwner

from apps.flats.services import (
    create_flat,
    update_flat,
    add_member,
    leave_flat,
    remove_member,
    get_flat_members,
    # Exceptions
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
)


UUID_PATTERN = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'


class FlatPagination(PageNumberPagination):
    """Custom pagination for flats."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class FlatViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Flat operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Flats the user belongs to
    create: Create a new flat (creator becomes owner)
    retrieve: Flat detail (members only)
    update / partial_update: Rename or describe (owner only)
    """

    serializer_class = FlatSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FlatPagination
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """List only the user's flats; detail routes see all so non-members get 403."""
        queryset = Flat.objects.select_related('owner').prefetch_related('memberships')
        if self.action == 'list':
            queryset = queryset.filter(memberships__user=self.request.user).distinct()
        return queryset

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return FlatListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return FlatCreateSerializer
        return FlatSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['update', 'partial_update', 'add_member', 'remove_member']:
            return [IsAuthenticated(), IsFlatOwner()]
        if self.action in ['retrieve', 'members']:
            return [IsAuthenticated(), IsFlatMember()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new flat."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        flat = create_flat(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data.get('description', ''),
        )

        output_serializer = FlatSerializer(flat, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update flat details (owner only)."""
        flat = self.get_object()
        serializer = self.get_serializer(flat, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        try:
            flat = update_flat(
                flat_id=flat.id,
                user=request.user,
                name=serializer.validated_data.get('name'),
                description=serializer.validated_data.get('description'),
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(FlatSerializer(flat, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        """Flats are never deleted through the API."""
        return Response(
            {'error': 'Flats cannot be deleted'},
            status=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the flat."""
        flat = self.get_object()
        memberships = get_flat_members(flat_id=flat.id)
        serializer = FlatMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def add_member(self, request, pk=None):
        """Add an existing account to the flat by email (owner only)."""
        flat = self.get_object()
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = add_member(
                flat_id=flat.id,
                email=serializer.validated_data['email'],
                added_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(FlatMemberSerializer(membership).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=['delete'],
        url_path=rf'members/(?P<user_id>{UUID_PATTERN})',
        url_name='remove-member',
    )
    def remove_member(self, request, pk=None, user_id=None):
        """Remove a member from the flat (owner only)."""
        flat = self.get_object()

        try:
            remove_member(flat_id=flat.id, user_id=user_id, removed_by=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (CannotRemoveOwnerError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a flat."""
        flat = self.get_object()

        try:
            leave_flat(flat_id=flat.id, user=request.user)
        except (OwnerCannotLeaveError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
