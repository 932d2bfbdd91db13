from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'expenses'

router = SimpleRouter()
router.register(r'expenses', views.ExpenseViewSet, basename='expense')

flat_expenses = views.FlatExpenseViewSet.as_view({'get': 'list', 'post': 'create'})

urlpatterns = [
    # GET    /api/flats/{flat_id}/expenses/   - List flat expenses
    # POST   /api/flats/{flat_id}/expenses/   - Create expense
    path('flats/<uuid:flat_id>/expenses/', flat_expenses, name='flat-expenses'),

    # GET    /api/expenses/{id}/              - Expense detail
    # PUT    /api/expenses/{id}/              - Update (creator)
    # PATCH  /api/expenses/{id}/              - Partial update (creator)
    # DELETE /api/expenses/{id}/              - Delete (creator)
    path('', include(router.urls)),
]
