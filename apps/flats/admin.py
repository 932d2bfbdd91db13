from django.contrib import admin
from apps.flats.models import Flat, FlatMembership


class FlatMembershipInline(admin.TabularInline):
    """Inline admin for flat memberships."""
    model = FlatMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Flat)
class FlatAdmin(admin.ModelAdmin):
    """Admin interface for Flats."""

    list_display = ['name', 'owner', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [FlatMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(FlatMembership)
class FlatMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Flat Memberships."""

    list_display = ['user', 'flat', 'role', 'joined_at']
    list_filter = ['role', 'joined_at']
    search_fields = ['user__email', 'flat__name']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'flat')
