from fastapi import APIRouter

from app.api.crm.contacts import router as contacts_router
from app.api.crm.conversations import router as conversations_router
from app.api.crm.reports import router as reports_router
from app.api.crm.sales import router as sales_router

router = APIRouter(tags=["crm"])
router.include_router(contacts_router)
router.include_router(conversations_router)
router.include_router(sales_router)
router.include_router(reports_router)

__all__ = ["router"]
