from rest_framework import serializers
from decimal import Decimal
from .models import Expense, ExpenseCategory
from apps.accounts.serializers import UserMinimalSerializer


class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        category (str): Filter by category
        date_from (date): Expenses on or after this date
        date_to (date): Expenses on or before this date
    """

    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class ExpenseSerializer(serializers.ModelSerializer):
    """Expense with payer, participants and creator expanded."""

    paid_by = UserMinimalSerializer(read_only=True)
    split_between = UserMinimalSerializer(many=True, read_only=True)
    created_by = UserMinimalSerializer(read_only=True)
    share = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'flat',
            'title',
            'amount',
            'paid_by',
            'split_between',
            'share',
            'category',
            'date',
            'notes',
            'image_url',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_share(self, obj):
        """Per-participant share, rounded for display only."""
        participants = len(obj.split_between.all())
        if not participants:
            return None
        share = obj.amount / participants
        return str(share.quantize(Decimal('0.01')))


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Input for creating an expense.

    An omitted or empty split_between means everyone currently in the flat.
    """

    title = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    paid_by = serializers.UUIDField()
    split_between = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
    )
    category = serializers.ChoiceField(
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.GENERAL
    )
    date = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    image_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)


class ExpenseUpdateSerializer(serializers.Serializer):
    """Input for editing an expense; every field is optional."""

    title = serializers.CharField(max_length=200, required=False)
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False
    )
    paid_by = serializers.UUIDField(required=False)
    split_between = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
    )
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)
    date = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    image_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
