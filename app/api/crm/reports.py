from fastapi import APIRouter, Depends

from app.api.deps import get_erp_client
from app.schemas.common import Envelope
from app.schemas.crm.reports import CRMDashboard
from app.services import crm as crm_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/crm", tags=["crm-reports"])


@router.get("/dashboard", response_model=Envelope[CRMDashboard])
def crm_dashboard(territory: str | None = None, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.crm_reports.dashboard(client, territory))


@router.get("/options", response_model=Envelope[dict[str, list[dict]]])
def crm_options(client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.crm_reports.options(client))
