from rest_framework import viewsets, mixins, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Expense
from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseUpdateSerializer,
    ExpenseFilterSerializer,
)
from .permissions import IsExpenseCreator
from apps.flats.permissions import IsFlatMember
from apps.expenses.services import (
    create_expense,
    update_expense,
    delete_expense,
    list_flat_expenses,
    # Exceptions
    FlatNotFoundError,
    NotFlatMemberError,
    NotExpenseCreatorError,
    InvalidExpenseError,
)


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class FlatExpenseViewSet(viewsets.GenericViewSet):
    """
    Expenses of one flat, nested under /api/flats/{flat_id}/expenses/.

    list: Expenses, newest first (filters: category, date_from, date_to)
    create: Record an expense
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsFlatMember]
    pagination_class = ExpensePagination

    @extend_schema(parameters=[ExpenseFilterSerializer], responses={200: ExpenseSerializer(many=True)})
    def list(self, request, flat_id=None):
        filter_serializer = ExpenseFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        try:
            expenses = list_flat_expenses(
                flat_id=flat_id,
                user=request.user,
                **filter_serializer.validated_data,
            )
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        page = self.paginate_queryset(expenses)
        if page is not None:
            serializer = ExpenseSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(ExpenseSerializer(expenses, many=True).data)

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer})
    def create(self, request, flat_id=None):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = create_expense(
                flat_id=flat_id,
                created_by=request.user,
                title=data['title'],
                amount=data['amount'],
                paid_by_id=data['paid_by'],
                split_between_ids=data.get('split_between'),
                category=data['category'],
                date=data.get('date'),
                notes=data['notes'],
                image_url=data['image_url'],
            )
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)


class ExpenseViewSet(
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    Single expense at /api/expenses/{id}/.

    retrieve: Any flat member
    update / partial_update / destroy: Creator only
    """

    queryset = Expense.objects.select_related(
        'flat',
        'paid_by',
        'created_by'
    ).prefetch_related('split_between')
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsFlatMember, IsExpenseCreator]
    lookup_value_regex = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'

    _field_map = {
        'title': 'title',
        'amount': 'amount',
        'paid_by': 'paid_by_id',
        'split_between': 'split_between_ids',
        'category': 'category',
        'date': 'date',
        'notes': 'notes',
        'image_url': 'image_url',
    }

    @extend_schema(request=ExpenseUpdateSerializer, responses={200: ExpenseSerializer})
    def update(self, request, *args, **kwargs):
        expense = self.get_object()
        serializer = ExpenseUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        changes = {
            self._field_map[field]: value
            for field, value in serializer.validated_data.items()
        }

        try:
            expense = update_expense(expense_id=expense.id, user=request.user, **changes)
        except (NotFlatMemberError, NotExpenseCreatorError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        expense = self.get_queryset().get(id=expense.id)
        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        expense = self.get_object()

        try:
            delete_expense(expense_id=expense.id, user=request.user)
        except (NotFlatMemberError, NotExpenseCreatorError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)
