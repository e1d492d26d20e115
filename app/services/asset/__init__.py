"""Asset Service Module.

Provides fixed-asset management backed by ERPNext documents:
- Assets, categories and locations
- Movements: Issue/Receipt/Transfer with per-line purpose validation
- Upkeep: Maintenance schedules, repairs and value adjustments
- Dashboard: Asset counts, book values, activity and due maintenance
"""

from app.services.asset.assets import (
    AssetCategories,
    Assets,
    Locations,
    asset_categories,
    assets,
    locations,
)
from app.services.asset.dashboard import AssetDashboardService, asset_dashboard
from app.services.asset.movements import AssetMovements, asset_movements
from app.services.asset.upkeep import (
    AssetMaintenances,
    AssetRepairs,
    ValueAdjustments,
    asset_maintenances,
    asset_repairs,
    value_adjustments,
)

__all__ = [
    "Assets",
    "AssetCategories",
    "Locations",
    "AssetMovements",
    "AssetMaintenances",
    "AssetRepairs",
    "ValueAdjustments",
    "AssetDashboardService",
    "assets",
    "asset_categories",
    "locations",
    "asset_movements",
    "asset_maintenances",
    "asset_repairs",
    "value_adjustments",
    "asset_dashboard",
]
