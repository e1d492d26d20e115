from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.accounting import PaymentCreate, PaymentDetailRead, PaymentRead, PaymentUpdate
from app.schemas.common import DeleteResult, Envelope
from app.services import accounting as accounting_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/accounting/payments", tags=["accounting-payments"])


@router.get("", response_model=Envelope[list[PaymentRead]])
def list_payments(
    payment_type: str | None = None,
    party_type: str | None = None,
    status: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(accounting_service.payments.list(client, payment_type, party_type, status, limit))


@router.post(
    "",
    response_model=Envelope[PaymentRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_payment(payload: PaymentCreate, client: ERPNextClient = Depends(get_erp_client)):
    payment = accounting_service.payments.create(client, payload)
    return envelope(payment, "Payment created successfully")


@router.get("/{name}", response_model=Envelope[PaymentDetailRead])
def get_payment(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(accounting_service.payments.get(client, name))


@router.put("/{name}", response_model=Envelope[PaymentRead], dependencies=[Depends(require_erp_auth)])
def update_payment(name: str, payload: PaymentUpdate, client: ERPNextClient = Depends(get_erp_client)):
    payment = accounting_service.payments.update(client, name, payload)
    return envelope(payment, "Payment updated successfully")


@router.delete("/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_payment(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = accounting_service.payments.delete(client, name)
    return envelope(result, result.message)
