from datetime import date

from fastapi import APIRouter, Depends

from app.api.deps import get_erp_client
from app.services import accounting as accounting_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/accounting/reports", tags=["accounting-reports"])


@router.get("")
def financial_report(
    report_type: str | None = None,
    company: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    report = accounting_service.financial_reports.summary(client, report_type, company, date_from, date_to)
    return envelope({"report": report}, "Report generated successfully")


@router.get("/detailed")
def detailed_financial_report(
    report_type: str | None = None,
    company: str | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    report = accounting_service.financial_reports.detailed(client, report_type, company, from_date, to_date)
    return envelope({"report": report}, "Report generated successfully")
