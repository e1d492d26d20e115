from fastapi import APIRouter, Depends, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.asset import (
    AssetCategoryCreate,
    AssetCategoryRead,
    AssetCategoryUpdate,
    AssetCreate,
    AssetRead,
    AssetUpdate,
    LocationCreate,
    LocationRead,
    LocationUpdate,
)
from app.schemas.common import DeleteResult, Envelope
from app.services import asset as asset_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/asset", tags=["asset-assets"])


@router.get("/assets", response_model=Envelope[list[AssetRead]])
def list_assets(
    asset_category: str | None = None,
    location: str | None = None,
    status: str | None = None,
    assigned_to: str | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(asset_service.assets.list(client, asset_category, location, status, assigned_to))


@router.post(
    "/assets",
    response_model=Envelope[AssetRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_asset(payload: AssetCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.assets.create(client, payload), "Asset created successfully")


@router.get("/assets/{name}", response_model=Envelope[AssetRead])
def get_asset(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.assets.get(client, name))


@router.put("/assets/{name}", response_model=Envelope[AssetRead], dependencies=[Depends(require_erp_auth)])
def update_asset(name: str, payload: AssetUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.assets.update(client, name, payload), "Asset updated successfully")


@router.delete("/assets/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_asset(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.assets.delete(client, name)
    return envelope(result, result.message)


@router.get("/categories", response_model=Envelope[list[AssetCategoryRead]])
def list_categories(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_categories.list(client))


@router.post(
    "/categories",
    response_model=Envelope[AssetCategoryRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_category(payload: AssetCategoryCreate, client: ERPNextClient = Depends(get_erp_client)):
    category = asset_service.asset_categories.create(client, payload)
    return envelope(category, "Asset category created successfully")


@router.get("/categories/{name}", response_model=Envelope[AssetCategoryRead])
def get_category(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_categories.get(client, name))


@router.put(
    "/categories/{name}",
    response_model=Envelope[AssetCategoryRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_category(name: str, payload: AssetCategoryUpdate, client: ERPNextClient = Depends(get_erp_client)):
    category = asset_service.asset_categories.update(client, name, payload)
    return envelope(category, "Asset category updated successfully")


@router.delete(
    "/categories/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_category(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.asset_categories.delete(client, name)
    return envelope(result, result.message)


@router.get("/locations", response_model=Envelope[list[LocationRead]])
def list_locations(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.locations.list(client))


@router.post(
    "/locations",
    response_model=Envelope[LocationRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_location(payload: LocationCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.locations.create(client, payload), "Location created successfully")


@router.get("/locations/{name}", response_model=Envelope[LocationRead])
def get_location(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.locations.get(client, name))


@router.put("/locations/{name}", response_model=Envelope[LocationRead], dependencies=[Depends(require_erp_auth)])
def update_location(name: str, payload: LocationUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.locations.update(client, name, payload), "Location updated successfully")


@router.delete(
    "/locations/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_location(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = asset_service.locations.delete(client, name)
    return envelope(result, result.message)
