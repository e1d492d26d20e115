from __future__ import annotations

from datetime import date
from typing import Any

from app.config import settings
from app.schemas.asset import (
    AssetMaintenanceCreate,
    AssetMaintenanceRead,
    AssetRepairCreate,
    AssetRepairRead,
    ValueAdjustmentCreate,
    ValueAdjustmentRead,
    ValueAdjustmentUpdate,
)
from app.services.common import add_days, as_float, date_range_filters, eq_filters, iso
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.mappers import map_value_adjustment

MAINTENANCE_WINDOW_DAYS = 30


def maintenance_task_end(payload: AssetMaintenanceCreate) -> date:
    """End date for the generated maintenance task.

    Completed work ends the day after it started; scheduled work runs until
    the next maintenance date, or for a default window.
    """
    if payload.status == "Completed":
        return add_days(payload.maintenance_date, 1)
    return payload.next_maintenance_date or add_days(payload.maintenance_date, MAINTENANCE_WINDOW_DAYS)


class AssetMaintenances(DocumentResource[AssetMaintenanceRead]):
    doctype = "Asset Maintenance"
    read_model = AssetMaintenanceRead

    def list(
        self,
        client: ERPNextClient,
        asset: str | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[AssetMaintenanceRead]:
        filters = eq_filters(asset=asset, status=status)
        filters += date_range_filters("maintenance_date", date_from, date_to)
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: AssetMaintenanceCreate) -> dict[str, Any]:
        if payload.asset_maintenance_tasks:
            tasks = [task.model_dump(mode="json", exclude_none=True) for task in payload.asset_maintenance_tasks]
        else:
            tasks = [
                {
                    "maintenance_task": payload.maintenance_task or "General Maintenance",
                    "maintenance_status": "Completed" if payload.status == "Completed" else "Planned",
                    "start_date": iso(payload.maintenance_date),
                    "end_date": iso(maintenance_task_end(payload)),
                    "assign_to": payload.assign_to or "",
                    "periodicity": payload.periodicity,
                }
            ]
        return {
            "asset": payload.asset,
            "asset_name": payload.asset_name,
            "maintenance_type": payload.maintenance_type or "",
            "maintenance_date": iso(payload.maintenance_date),
            "description": payload.description or "",
            "cost": payload.cost,
            "next_maintenance_date": iso(payload.next_maintenance_date),
            "status": payload.status,
            "maintenance_team": payload.maintenance_team or settings.maintenance_team,
            "asset_maintenance_tasks": tasks,
        }


class AssetRepairs(DocumentResource[AssetRepairRead]):
    doctype = "Asset Repair"
    read_model = AssetRepairRead

    def list(
        self,
        client: ERPNextClient,
        asset: str | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[AssetRepairRead]:
        filters = eq_filters(asset=asset, status=status)
        filters += date_range_filters("repair_date", date_from, date_to)
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: AssetRepairCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["company"] = payload.company or settings.default_company or None
        if payload.completion_date is None and payload.status == "Completed":
            doc["completion_date"] = iso(payload.repair_date)
        return doc


class ValueAdjustments(DocumentResource[ValueAdjustmentRead]):
    doctype = "Asset Value Adjustment"
    read_model = ValueAdjustmentRead

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_value_adjustment(doc)

    def list(
        self,
        client: ERPNextClient,
        asset: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ValueAdjustmentRead]:
        filters = eq_filters(asset=asset)
        filters += date_range_filters("date", date_from, date_to)
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: ValueAdjustmentCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["difference_amount"] = payload.new_asset_value - payload.current_asset_value
        doc["company"] = payload.company or settings.default_company or None
        return doc

    def build_changes(
        self, client: ERPNextClient, payload: ValueAdjustmentUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, by_alias=True)
        if payload.new_asset_value is not None:
            changes["difference_amount"] = payload.new_asset_value - as_float(current.get("current_asset_value"))
        return changes


asset_maintenances = AssetMaintenances()
asset_repairs = AssetRepairs()
value_adjustments = ValueAdjustments()
