from datetime import date

from fastapi import APIRouter, Depends, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import DeleteResult, Envelope
from app.schemas.crm.sales import (
    LeadCreate,
    LeadRead,
    LeadUpdate,
    OpportunityCreate,
    OpportunityRead,
    OpportunityUpdate,
    QuotationCreate,
    QuotationRead,
    QuotationUpdate,
    SalesOrderCreate,
    SalesOrderRead,
    SalesOrderUpdate,
)
from app.services import crm as crm_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/crm", tags=["crm-sales"])


@router.get("/leads", response_model=Envelope[list[LeadRead]])
def list_leads(
    status: str | None = None,
    source: str | None = None,
    territory: str | None = None,
    contact_by: str | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.leads.list(client, status, source, territory, contact_by))


@router.post(
    "/leads",
    response_model=Envelope[LeadRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_lead(payload: LeadCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.leads.create(client, payload), "Lead created successfully")


@router.get("/leads/{name}", response_model=Envelope[LeadRead])
def get_lead(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.leads.get(client, name))


@router.put("/leads/{name}", response_model=Envelope[LeadRead], dependencies=[Depends(require_erp_auth)])
def update_lead(name: str, payload: LeadUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.leads.update(client, name, payload), "Lead updated successfully")


@router.delete("/leads/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_lead(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.leads.delete(client, name)
    return envelope(result, result.message)


@router.get("/opportunities", response_model=Envelope[list[OpportunityRead]])
def list_opportunities(
    status: str | None = None,
    opportunity_type: str | None = None,
    sales_stage: str | None = None,
    customer: str | None = None,
    lead: str | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    records = crm_service.opportunities.list(client, status, opportunity_type, sales_stage, customer, lead)
    return envelope(records)


@router.post(
    "/opportunities",
    response_model=Envelope[OpportunityRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_opportunity(payload: OpportunityCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.opportunities.create(client, payload), "Opportunity created successfully")


@router.get("/opportunities/{name}", response_model=Envelope[OpportunityRead])
def get_opportunity(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.opportunities.get(client, name))


@router.put("/opportunities/{name}", response_model=Envelope[OpportunityRead], dependencies=[Depends(require_erp_auth)])
def update_opportunity(name: str, payload: OpportunityUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.opportunities.update(client, name, payload), "Opportunity updated successfully")


@router.delete("/opportunities/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_opportunity(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.opportunities.delete(client, name)
    return envelope(result, result.message)


@router.get("/quotations", response_model=Envelope[list[QuotationRead]])
def list_quotations(
    status: str | None = None,
    customer: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.quotations.list(client, status, customer, date_from, date_to))


@router.post(
    "/quotations",
    response_model=Envelope[QuotationRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_quotation(payload: QuotationCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.quotations.create(client, payload), "Quotation created successfully")


@router.get("/quotations/{name}", response_model=Envelope[QuotationRead])
def get_quotation(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.quotations.get(client, name))


@router.put("/quotations/{name}", response_model=Envelope[QuotationRead], dependencies=[Depends(require_erp_auth)])
def update_quotation(name: str, payload: QuotationUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.quotations.update(client, name, payload), "Quotation updated successfully")


@router.delete("/quotations/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_quotation(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.quotations.delete(client, name)
    return envelope(result, result.message)


@router.get("/sales-orders", response_model=Envelope[list[SalesOrderRead]])
def list_sales_orders(
    status: str | None = None,
    customer: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.sales_orders.list(client, status, customer, date_from, date_to))


@router.post(
    "/sales-orders",
    response_model=Envelope[SalesOrderRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_sales_order(payload: SalesOrderCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.sales_orders.create(client, payload), "Sales order created successfully")


@router.get("/sales-orders/{name}", response_model=Envelope[SalesOrderRead])
def get_sales_order(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.sales_orders.get(client, name))


@router.put("/sales-orders/{name}", response_model=Envelope[SalesOrderRead], dependencies=[Depends(require_erp_auth)])
def update_sales_order(name: str, payload: SalesOrderUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.sales_orders.update(client, name, payload), "Sales order updated successfully")


@router.delete("/sales-orders/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_sales_order(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.sales_orders.delete(client, name)
    return envelope(result, result.message)
