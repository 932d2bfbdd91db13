from rest_framework import permissions


class IsExpenseCreator(permissions.BasePermission):
    """
    Permission: only the user who recorded an expense may change it.

    Reads are left to the flat membership check.
    """

    message = 'Only the creator can modify this expense.'

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.created_by_id == request.user.id
