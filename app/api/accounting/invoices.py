from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.accounting import (
    PurchaseInvoiceCreate,
    PurchaseInvoiceRead,
    PurchaseInvoiceUpdate,
    SalesInvoiceCreate,
    SalesInvoiceRead,
    SalesInvoiceUpdate,
)
from app.schemas.common import DeleteResult, Envelope
from app.services import accounting as accounting_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/accounting", tags=["accounting-invoices"])


@router.get("/sales", response_model=Envelope[list[SalesInvoiceRead]])
def list_sales_invoices(
    customer: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    limit: int | None = Query(default=None, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    invoices = accounting_service.sales_invoices.list(client, customer, status, date_from, date_to, limit)
    return envelope(invoices)


@router.post(
    "/sales",
    response_model=Envelope[SalesInvoiceRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_sales_invoice(payload: SalesInvoiceCreate, client: ERPNextClient = Depends(get_erp_client)):
    invoice = accounting_service.sales_invoices.create(client, payload)
    return envelope(invoice, "Sales invoice created successfully")


@router.get("/sales/{name}", response_model=Envelope[SalesInvoiceRead])
def get_sales_invoice(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(accounting_service.sales_invoices.get(client, name))


@router.put(
    "/sales/{name}",
    response_model=Envelope[SalesInvoiceRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_sales_invoice(
    name: str, payload: SalesInvoiceUpdate, client: ERPNextClient = Depends(get_erp_client)
):
    invoice = accounting_service.sales_invoices.update(client, name, payload)
    return envelope(invoice, "Sales invoice updated successfully")


@router.delete(
    "/sales/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_sales_invoice(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = accounting_service.sales_invoices.delete(client, name)
    return envelope(result, result.message)


@router.get("/purchases", response_model=Envelope[list[PurchaseInvoiceRead]])
def list_purchase_invoices(
    status: str | None = None,
    supplier: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(accounting_service.purchase_invoices.list(client, status, supplier, limit))


@router.post(
    "/purchases",
    response_model=Envelope[PurchaseInvoiceRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_purchase_invoice(payload: PurchaseInvoiceCreate, client: ERPNextClient = Depends(get_erp_client)):
    invoice = accounting_service.purchase_invoices.create(client, payload)
    return envelope(invoice, "Purchase invoice created successfully")


@router.get("/purchases/{name}", response_model=Envelope[PurchaseInvoiceRead])
def get_purchase_invoice(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(accounting_service.purchase_invoices.get(client, name))


@router.put(
    "/purchases/{name}",
    response_model=Envelope[PurchaseInvoiceRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_purchase_invoice(
    name: str, payload: PurchaseInvoiceUpdate, client: ERPNextClient = Depends(get_erp_client)
):
    invoice = accounting_service.purchase_invoices.update(client, name, payload)
    return envelope(invoice, "Purchase invoice updated successfully")


@router.delete(
    "/purchases/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_purchase_invoice(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = accounting_service.purchase_invoices.delete(client, name)
    return envelope(result, result.message)
