from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.accounting import AccountCreate, AccountingSummary, AccountRead, TransactionRead
from app.schemas.common import Envelope
from app.services import accounting as accounting_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/accounting", tags=["accounting-ledger"])


@router.get("/chart-of-accounts", response_model=Envelope[list[AccountRead]])
def list_accounts(company: str | None = None, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(accounting_service.chart_of_accounts.list(client, company))


@router.post(
    "/chart-of-accounts",
    response_model=Envelope[AccountRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_account(payload: AccountCreate, client: ERPNextClient = Depends(get_erp_client)):
    account = accounting_service.chart_of_accounts.create(client, payload)
    return envelope(account, "Account created successfully")


@router.get("/options", response_model=Envelope[dict[str, list[dict]]])
def accounting_options(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(accounting_service.accounting_dashboard.options(client))


@router.get("/summary", response_model=Envelope[AccountingSummary])
def accounting_summary(
    company: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    summary = accounting_service.accounting_dashboard.summary(client, company, date_from, date_to)
    return envelope(summary)


@router.get("/transactions/recent", response_model=Envelope[list[TransactionRead]])
def recent_transactions(
    company: str | None = None,
    limit: int = Query(default=10, ge=1, le=100),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(accounting_service.accounting_dashboard.recent_transactions(client, company, limit))
