from fastapi import APIRouter

from app.api.asset.assets import router as assets_router
from app.api.asset.dashboard import router as dashboard_router
from app.api.asset.movements import router as movements_router
from app.api.asset.upkeep import router as upkeep_router

router = APIRouter(tags=["asset"])
router.include_router(assets_router)
router.include_router(movements_router)
router.include_router(upkeep_router)
router.include_router(dashboard_router)

__all__ = ["router"]
