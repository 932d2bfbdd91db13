from rest_framework import serializers
from .models import Invitation
from apps.accounts.serializers import UserMinimalSerializer


class InvitationSerializer(serializers.ModelSerializer):
    """Pending invitation as shown to the flat owner."""

    invited_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Invitation
        fields = ['id', 'email', 'status', 'expires_at', 'created_at', 'invited_by']
        read_only_fields = fields


class InvitationCreateSerializer(serializers.Serializer):
    flat = serializers.UUIDField()
    email = serializers.EmailField()


class InvitationCreatedSerializer(serializers.Serializer):
    invitation_id = serializers.UUIDField()
    expires_at = serializers.DateTimeField()


class InvitationAcceptSerializer(serializers.Serializer):
    token = serializers.CharField(trim_whitespace=True)


class InvitationAcceptedSerializer(serializers.Serializer):
    flat_id = serializers.UUIDField()


class InvitationListQuerySerializer(serializers.Serializer):
    flat = serializers.UUIDField()
