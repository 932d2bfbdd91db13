from rest_framework import serializers
from .models import Flat, FlatMembership
from apps.accounts.serializers import UserMinimalSerializer


class FlatSerializer(serializers.ModelSerializer):
    """Main serializer for flats."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Flat
        fields = [
            'id',
            'name',
            'description',
            'owner',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'owner', 'created_at', 'updated_at']

    def get_member_count(self, obj):
        """Get number of members in the flat."""
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the flat."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            membership = obj.memberships.filter(user=request.user).first()
            return membership.role if membership else None
        return None


class FlatCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and editing flats."""

    class Meta:
        model = Flat
        fields = ['name', 'description']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name is required')
        return value


class FlatListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Flat
        fields = [
            'id',
            'name',
            'description',
            'owner',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


class FlatMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = FlatMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class AddMemberSerializer(serializers.Serializer):
    """Serializer for adding an existing account by email."""

    email = serializers.EmailField(required=True)
