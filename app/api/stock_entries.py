from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import DeleteResult, Envelope
from app.schemas.stock import StockEntryCreate, StockEntryRead, StockEntryUpdate
from app.services import stock as stock_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/stock-entries", tags=["stock-entries"])

StockEntryAction = Literal["get-stock-entry-types", "filter"]


@router.get("")
def list_stock_entries(
    action: StockEntryAction | None = None,
    stock_entry_type: str | None = None,
    purpose: str | None = None,
    from_warehouse: str | None = None,
    to_warehouse: str | None = None,
    posting_date_from: date | None = None,
    posting_date_to: date | None = None,
    docstatus: str | None = None,
    limit: int = Query(default=stock_service.DEFAULT_LIST_LIMIT, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    entries = stock_service.stock_entries
    if action == "get-stock-entry-types":
        return envelope({"stock_entry_types": entries.entry_types(client)})
    if action == "filter":
        records = entries.list(
            client,
            stock_entry_type,
            purpose,
            from_warehouse,
            to_warehouse,
            posting_date_from,
            posting_date_to,
            docstatus,
            limit,
        )
    else:
        records = entries.list(client, limit=limit)
    return envelope({"stock_entries": records})


@router.post(
    "",
    response_model=Envelope[StockEntryRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_stock_entry(payload: StockEntryCreate, client: ERPNextClient = Depends(get_erp_client)):
    entry = stock_service.stock_entries.create(client, payload)
    return envelope(entry, "Stock entry created successfully")


@router.get("/options")
def stock_entry_options(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(stock_service.stock_entries.options(client))


@router.get("/{name}", response_model=Envelope[StockEntryRead], dependencies=[Depends(require_erp_auth)])
def get_stock_entry(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(stock_service.stock_entries.get(client, name))


@router.put("/{name}", response_model=Envelope[StockEntryRead], dependencies=[Depends(require_erp_auth)])
def update_stock_entry(name: str, payload: StockEntryUpdate, client: ERPNextClient = Depends(get_erp_client)):
    entry = stock_service.stock_entries.update(client, name, payload)
    return envelope(entry, "Stock entry updated successfully")


@router.delete("/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_stock_entry(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = stock_service.stock_entries.delete(client, name)
    return envelope(result, result.message)
