from fastapi import APIRouter, Depends

from app.api.deps import get_erp_client
from app.schemas.asset import AssetDashboard
from app.schemas.common import Envelope
from app.services import asset as asset_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/asset", tags=["asset-dashboard"])


@router.get("/dashboard", response_model=Envelope[AssetDashboard])
def asset_dashboard(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_dashboard.summary(client))


@router.get("/options", response_model=Envelope[dict[str, list[dict]]])
def asset_options(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(asset_service.asset_dashboard.options(client))
