from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.accounting import ExpenseCreate, ExpenseRead, ExpenseUpdate
from app.schemas.common import DeleteResult, Envelope
from app.services import accounting as accounting_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/accounting/expenses", tags=["accounting-expenses"])


@router.get("", response_model=Envelope[list[ExpenseRead]])
def list_expenses(
    status: str | None = None,
    expense_type: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(accounting_service.expenses.list(client, status, expense_type, limit))


@router.post(
    "",
    response_model=Envelope[ExpenseRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_expense(payload: ExpenseCreate, client: ERPNextClient = Depends(get_erp_client)):
    expense = accounting_service.expenses.create(client, payload)
    return envelope(expense, "Expense created successfully")


# Expense claims are addressed by query parameter rather than path segment
@router.put("", response_model=Envelope[ExpenseRead], dependencies=[Depends(require_erp_auth)])
def update_expense(
    payload: ExpenseUpdate,
    name: str = Query(min_length=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    expense = accounting_service.expenses.update(client, name, payload)
    return envelope(expense, "Expense updated successfully")


@router.delete("", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_expense(name: str = Query(min_length=1), client: ERPNextClient = Depends(get_erp_client)):
    result = accounting_service.expenses.delete(client, name)
    return envelope(result, result.message)
