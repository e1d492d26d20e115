from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import DeleteResult, Envelope
from app.schemas.stock import DeliveryNoteCreate, DeliveryNoteRead, DeliveryNoteUpdate
from app.services import stock as stock_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/delivery-notes", tags=["delivery-notes"])

DeliveryNoteAction = Literal["get-customers", "get-delivery-note-types", "get-territories", "filter"]


@router.get("")
def list_delivery_notes(
    action: DeliveryNoteAction | None = None,
    customer: str | None = None,
    territory: str | None = None,
    posting_date_from: date | None = None,
    posting_date_to: date | None = None,
    docstatus: str | None = None,
    limit: int = Query(default=stock_service.DEFAULT_LIST_LIMIT, ge=1),
    client: ERPNextClient = Depends(get_erp_client),
):
    notes = stock_service.delivery_notes
    if action == "get-customers":
        return envelope({"customers": notes.customers(client)})
    if action == "get-delivery-note-types":
        return envelope({"delivery_note_types": notes.note_types(client)})
    if action == "get-territories":
        return envelope({"territories": notes.territories(client)})
    if action == "filter":
        records = notes.list(client, customer, territory, posting_date_from, posting_date_to, docstatus, limit)
    else:
        records = notes.list(client, limit=limit)
    return envelope({"delivery_notes": records})


@router.post(
    "",
    response_model=Envelope[DeliveryNoteRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_delivery_note(payload: DeliveryNoteCreate, client: ERPNextClient = Depends(get_erp_client)):
    note = stock_service.delivery_notes.create(client, payload)
    return envelope(note, "Delivery note created successfully")


@router.get("/options", response_model=Envelope[dict[str, list[dict]]])
def delivery_note_options(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(stock_service.delivery_notes.options(client))


@router.get("/{name}", response_model=Envelope[DeliveryNoteRead], dependencies=[Depends(require_erp_auth)])
def get_delivery_note(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(stock_service.delivery_notes.get(client, name))


@router.put("/{name}", response_model=Envelope[DeliveryNoteRead], dependencies=[Depends(require_erp_auth)])
def update_delivery_note(name: str, payload: DeliveryNoteUpdate, client: ERPNextClient = Depends(get_erp_client)):
    note = stock_service.delivery_notes.update(client, name, payload)
    return envelope(note, "Delivery note updated successfully")


@router.delete("/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_delivery_note(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = stock_service.delivery_notes.delete(client, name)
    return envelope(result, result.message)
