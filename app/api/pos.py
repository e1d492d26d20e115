from typing import Any

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import Envelope
from app.schemas.pos import POSCatalog, POSOrder, StockLevel
from app.services.erpnext.client import ERPNextClient
from app.services.pos import point_of_sale
from app.services.response import envelope

router = APIRouter(prefix="/pos", tags=["pos"])


@router.get("", response_model=Envelope[POSCatalog])
def pos_catalog(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(point_of_sale.catalog(client))


@router.post(
    "",
    response_model=Envelope[dict[str, Any]],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_pos_invoice(order: POSOrder, client: ERPNextClient = Depends(get_erp_client)):
    invoice = point_of_sale.create_invoice(client, order)
    return envelope(invoice, "Sales invoice created successfully")


@router.get("/stock-check", response_model=Envelope[list[StockLevel]])
def pos_stock_check(
    item_codes: str = Query(default=""),
    warehouse: str | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(point_of_sale.stock_levels(client, item_codes.split(","), warehouse))
