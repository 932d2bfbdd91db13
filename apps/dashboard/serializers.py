from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.expenses.serializers import ExpenseSerializer
from apps.flats.models import Flat


class DashboardFlatSerializer(serializers.ModelSerializer):
    class Meta:
        model = Flat
        fields = ['id', 'name', 'description']


class DashboardSummarySerializer(serializers.Serializer):
    members_count = serializers.IntegerField()
    month_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_tasks_count = serializers.IntegerField()
    month_label = serializers.CharField()


class CategoryTotalSerializer(serializers.Serializer):
    name = serializers.CharField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class MemberNetSerializer(serializers.Serializer):
    user = UserMinimalSerializer()
    net = serializers.DecimalField(max_digits=12, decimal_places=2)


class DashboardChartsSerializer(serializers.Serializer):
    by_category = CategoryTotalSerializer(many=True)
    by_user = MemberNetSerializer(many=True)


class DashboardResponseSerializer(serializers.Serializer):
    flat = DashboardFlatSerializer()
    summary = DashboardSummarySerializer()
    recent_expenses = ExpenseSerializer(many=True)
    charts = DashboardChartsSerializer()
