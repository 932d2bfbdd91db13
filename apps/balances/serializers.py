from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer


class UserNetSerializer(serializers.Serializer):
    user = UserMinimalSerializer(allow_null=True)
    net = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_member = serializers.BooleanField()


class TransferSerializer(serializers.Serializer):
    """``{from, to, amount}``; ``from`` is added in get_fields since it is a keyword."""

    to = UserMinimalSerializer(allow_null=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def get_fields(self):
        fields = super().get_fields()
        return {'from': UserMinimalSerializer(allow_null=True), **fields}


class FlatBalanceSerializer(serializers.Serializer):
    totals = UserNetSerializer(many=True)
    settlements = TransferSerializer(many=True)
    warnings = serializers.ListField(child=serializers.CharField())


class MemberBalanceSerializer(serializers.Serializer):
    perUser = UserNetSerializer(many=True, source='per_user')
    me = UserNetSerializer()
    settlementsForUser = TransferSerializer(many=True, source='settlements_for_user')
