from django.contrib import admin
from apps.invitations.models import Invitation


@admin.register(Invitation)
class InvitationAdmin(admin.ModelAdmin):
    """Admin interface for Invitations. Token hashes are never editable."""

    list_display = ['email', 'flat', 'status', 'invited_by', 'expires_at', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['email', 'flat__name', 'invited_by__email']
    readonly_fields = ['token_hash', 'accepted_by', 'accepted_at', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('flat', 'invited_by')
