from fastapi import APIRouter

from app.api.accounting.expenses import router as expenses_router
from app.api.accounting.invoices import router as invoices_router
from app.api.accounting.ledger import router as ledger_router
from app.api.accounting.payments import router as payments_router
from app.api.accounting.reports import router as reports_router

router = APIRouter(tags=["accounting"])
router.include_router(invoices_router)
router.include_router(expenses_router)
router.include_router(payments_router)
router.include_router(ledger_router)
router.include_router(reports_router)

__all__ = ["router"]
