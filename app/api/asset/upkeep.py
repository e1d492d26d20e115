from datetime import date

from fastapi import APIRouter, Depends, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.asset import (
    AssetMaintenanceCreate,
    AssetMaintenanceRead,
    AssetMaintenanceUpdate,
    AssetRepairCreate,
    AssetRepairRead,
    AssetRepairUpdate,
    ValueAdjustmentCreate,
    ValueAdjustmentRead,
    ValueAdjustmentUpdate,
)
from app.schemas.common import DeleteResult, Envelope
from app.services import asset as asset_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/asset", tags=["asset-upkeep"])


# -----------------------------------------------------------------------------
# Maintenance
# -----------------------------------------------------------------------------


@router.get("/maintenance", response_model=Envelope[list[AssetMaintenanceRead]])
def list_maintenance(
    asset: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(asset_service.asset_maintenances.list(client, asset, status, date_from, date_to))


@router.post(
    "/maintenance",
    response_model=Envelope[AssetMaintenanceRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_maintenance(payload: AssetMaintenanceCreate, client: ERPNextClient = Depends(get_erp_client)):
    record = asset_service.asset_maintenances.create(client, payload)
    return envelope(record, "Asset maintenance created successfully")


@router.get("/maintenance/asset/{asset_name}", response_model=Envelope[list[AssetMaintenanceRead]])
def list_asset_maintenance(asset_name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_maintenances.list(client, asset=asset_name))


@router.get("/maintenance/{name}", response_model=Envelope[AssetMaintenanceRead])
def get_maintenance(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_maintenances.get(client, name))


@router.put(
    "/maintenance/{name}",
    response_model=Envelope[AssetMaintenanceRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_maintenance(
    name: str, payload: AssetMaintenanceUpdate, client: ERPNextClient = Depends(get_erp_client)
):
    record = asset_service.asset_maintenances.update(client, name, payload)
    return envelope(record, "Asset maintenance updated successfully")


@router.delete(
    "/maintenance/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_maintenance(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.asset_maintenances.delete(client, name)
    return envelope(result, result.message)


# -----------------------------------------------------------------------------
# Repairs
# -----------------------------------------------------------------------------


@router.get("/repairs", response_model=Envelope[list[AssetRepairRead]])
def list_repairs(
    asset: str | None = None,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(asset_service.asset_repairs.list(client, asset, status, date_from, date_to))


@router.post(
    "/repairs",
    response_model=Envelope[AssetRepairRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_repair(payload: AssetRepairCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_repairs.create(client, payload), "Asset repair created successfully")


@router.get("/repairs/asset/{asset_name}", response_model=Envelope[list[AssetRepairRead]])
def list_asset_repairs(asset_name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_repairs.list(client, asset=asset_name))


@router.get("/repairs/{name}", response_model=Envelope[AssetRepairRead])
def get_repair(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_repairs.get(client, name))


@router.put("/repairs/{name}", response_model=Envelope[AssetRepairRead], dependencies=[Depends(require_erp_auth)])
def update_repair(name: str, payload: AssetRepairUpdate, client: ERPNextClient = Depends(get_erp_client)):
    record = asset_service.asset_repairs.update(client, name, payload)
    return envelope(record, "Asset repair updated successfully")


@router.delete("/repairs/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_repair(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.asset_repairs.delete(client, name)
    return envelope(result, result.message)


# -----------------------------------------------------------------------------
# Value adjustments
# -----------------------------------------------------------------------------


@router.get("/value-adjustments", response_model=Envelope[list[ValueAdjustmentRead]])
def list_value_adjustments(
    asset: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(asset_service.value_adjustments.list(client, asset, date_from, date_to))


@router.post(
    "/value-adjustments",
    response_model=Envelope[ValueAdjustmentRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_value_adjustment(payload: ValueAdjustmentCreate, client: ERPNextClient = Depends(get_erp_client)):
    record = asset_service.value_adjustments.create(client, payload)
    return envelope(record, "Asset value adjustment created successfully")


@router.get("/value-adjustments/asset/{asset_name}", response_model=Envelope[list[ValueAdjustmentRead]])
def list_asset_value_adjustments(asset_name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.value_adjustments.list(client, asset=asset_name))


@router.get("/value-adjustments/{name}", response_model=Envelope[ValueAdjustmentRead])
def get_value_adjustment(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.value_adjustments.get(client, name))


@router.put(
    "/value-adjustments/{name}",
    response_model=Envelope[ValueAdjustmentRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_value_adjustment(
    name: str, payload: ValueAdjustmentUpdate, client: ERPNextClient = Depends(get_erp_client)
):
    record = asset_service.value_adjustments.update(client, name, payload)
    return envelope(record, "Asset value adjustment updated successfully")


@router.delete(
    "/value-adjustments/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_value_adjustment(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.value_adjustments.delete(client, name)
    return envelope(result, result.message)
