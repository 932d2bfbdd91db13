from rest_framework import permissions

from .models import Flat


class IsFlatMember(permissions.BasePermission):
    """
    Permission: User must be a member of the flat.

    Works both as an object permission (obj is a Flat or anything with a
    ``flat`` attribute) and as a view permission for nested routes that
    carry ``flat_id`` in the URL.
    """

    message = 'You must be a member of this flat.'

    def has_permission(self, request, view):
        flat_id = view.kwargs.get('flat_id')
        if not flat_id:
            return True

        # Unknown flats fall through so the view can answer 404
        flat = Flat.objects.filter(id=flat_id).first()
        if flat is None:
            return True
        return flat.has_member(request.user)

    def has_object_permission(self, request, view, obj):
        flat = obj if isinstance(obj, Flat) else obj.flat
        return flat.has_member(request.user)


class IsFlatOwner(permissions.BasePermission):
    """
    Permission: User must be the flat owner.
    """

    message = 'Only the flat owner can perform this action.'

    def has_object_permission(self, request, view, obj):
        # obj is a Flat instance
        return obj.is_owner(request.user)
