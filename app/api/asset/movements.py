from datetime import date

from fastapi import APIRouter, Depends, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.asset import AssetMovementCreate, AssetMovementRead, AssetMovementUpdate
from app.schemas.common import DeleteResult, Envelope
from app.services import asset as asset_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/asset/movements", tags=["asset-movements"])


@router.get("", response_model=Envelope[list[AssetMovementRead]])
def list_movements(
    asset: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(asset_service.asset_movements.list(client, asset, status, date_from, date_to))


@router.post(
    "",
    response_model=Envelope[AssetMovementRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_movement(payload: AssetMovementCreate, client: ERPNextClient = Depends(get_erp_client)):
    movement = asset_service.asset_movements.create(client, payload)
    return envelope(movement, "Asset movement created successfully")


@router.get("/{name}", response_model=Envelope[AssetMovementRead])
def get_movement(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_movements.get(client, name))


@router.put("/{name}", response_model=Envelope[AssetMovementRead], dependencies=[Depends(require_erp_auth)])
def update_movement(name: str, payload: AssetMovementUpdate, client: ERPNextClient = Depends(get_erp_client)):
    movement = asset_service.asset_movements.update(client, name, payload)
    return envelope(movement, "Asset movement updated successfully")


@router.delete("/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_movement(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.asset_movements.delete(client, name)
    return envelope(result, result.message)
