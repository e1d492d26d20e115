"""Asset dashboard and form options."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any

from app.logging import get_logger
from app.schemas.asset import (
    ASSET_STATUSES,
    AssetActivity,
    AssetDashboard,
    CategoryTotal,
    LocationTotal,
    MaintenanceDue,
)
from app.services.common import add_days, as_float, parse_date, today
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.fetcher import list_documents

logger = get_logger(__name__)

ATTENTION_WINDOW_DAYS = 30
RECENT_PER_DOCTYPE = 5
RECENT_LIMIT = 10
DUE_LIMIT = 10
MAINTENANCE_SAMPLE = 100
ASSET_LIST_LIMIT = 100000


def asset_book_value(asset: dict[str, Any]) -> float:
    gross = as_float(asset.get("gross_purchase_amount"))
    depreciation = as_float(asset.get("opening_accumulated_depreciation"))
    return max(0.0, gross - depreciation)


def group_assets(assets: list[dict[str, Any]]) -> tuple[list[CategoryTotal], list[LocationTotal]]:
    """Count and value assets per category and per location, in first-seen order."""
    by_category: dict[str, list[float]] = defaultdict(lambda: [0, 0.0])
    by_location: dict[str, list[float]] = defaultdict(lambda: [0, 0.0])
    for asset in assets:
        value = asset_book_value(asset)
        for bucket, key in (
            (by_category, asset.get("asset_category") or "Uncategorized"),
            (by_location, asset.get("location") or "Unspecified"),
        ):
            bucket[key][0] += 1
            bucket[key][1] += value
    categories = [CategoryTotal(category=key, count=count, value=value) for key, (count, value) in by_category.items()]
    locations = [LocationTotal(location=key, count=count, value=value) for key, (count, value) in by_location.items()]
    return categories, locations


def _scheduled(records: list[dict[str, Any]]) -> list[tuple[dict[str, Any], date]]:
    scheduled = []
    for record in records:
        due = parse_date(record.get("next_maintenance_date"))
        if due and record.get("status") == "Scheduled":
            scheduled.append((record, due))
    return scheduled


def count_requiring_attention(records: list[dict[str, Any]], current: date) -> int:
    horizon = add_days(current, ATTENTION_WINDOW_DAYS)
    return sum(1 for _, due in _scheduled(records) if current <= due <= horizon)


def maintenance_due(records: list[dict[str, Any]], current: date) -> list[MaintenanceDue]:
    due_items = [
        MaintenanceDue(
            asset=record.get("asset") or "Unknown Asset",
            due_date=due,
            days_remaining=(due - current).days,
            status=record.get("status"),
        )
        for record, due in _scheduled(records)
    ]
    due_items.sort(key=lambda item: item.days_remaining)
    return due_items[:DUE_LIMIT]


def recent_activities(
    maintenance: list[dict[str, Any]],
    movements: list[dict[str, Any]],
    repairs: list[dict[str, Any]],
) -> list[AssetActivity]:
    candidates: list[tuple[str, str, Any, str, str | None]] = []
    for item in maintenance:
        candidates.append(
            (
                "maintenance",
                item.get("asset") or "Unknown Asset",
                item.get("maintenance_date"),
                item.get("description") or f"Maintenance: {item.get('maintenance_type') or 'Completed'}",
                item.get("status"),
            )
        )
    for item in movements:
        candidates.append(
            (
                "movement",
                "Multiple Assets",
                item.get("movement_date"),
                f"Movement: {item.get('purpose') or 'Asset transfer'}",
                item.get("status"),
            )
        )
    for item in repairs:
        candidates.append(
            (
                "repair",
                item.get("asset") or "Unknown Asset",
                item.get("completion_date") or item.get("repair_date"),
                item.get("description") or "Repair completed",
                item.get("status"),
            )
        )

    activities = []
    for kind, asset, raw_date, description, status in candidates:
        activity_date = parse_date(raw_date)
        if activity_date is None or status == "Cancelled":
            continue
        activities.append(
            AssetActivity(type=kind, asset=asset, date=activity_date, description=description, status=status)
        )
    activities.sort(key=lambda activity: activity.date, reverse=True)
    return activities[:RECENT_LIMIT]


class AssetDashboardService:
    @staticmethod
    def summary(client: ERPNextClient) -> AssetDashboard:
        current = today()
        assets = client.get_list(
            "Asset",
            fields=["name", "asset_category", "gross_purchase_amount", "opening_accumulated_depreciation", "location"],
            limit_page_length=ASSET_LIST_LIMIT,
        )
        maintenance = list_documents(client, "Asset Maintenance", limit=MAINTENANCE_SAMPLE)
        recent_maintenance = list_documents(
            client, "Asset Maintenance", order_by="modified desc", limit=RECENT_PER_DOCTYPE
        )
        recent_repairs = list_documents(client, "Asset Repair", order_by="modified desc", limit=RECENT_PER_DOCTYPE)
        recent_movements = client.get_list(
            "Asset Movement",
            fields=["name", "purpose", "movement_date", "status"],
            order_by="modified desc",
            limit_page_length=RECENT_PER_DOCTYPE,
        )

        by_category, by_location = group_assets(assets)
        dashboard = AssetDashboard(
            total_assets=len(assets),
            assets_requiring_attention=count_requiring_attention(maintenance, current),
            assets_by_category=by_category,
            assets_by_location=by_location,
            recent_activities=recent_activities(recent_maintenance, recent_movements, recent_repairs),
            maintenance_due=maintenance_due(maintenance, current),
        )
        logger.info(
            "asset_dashboard_built assets=%s maintenance=%s", dashboard.total_assets, len(maintenance)
        )
        return dashboard

    @staticmethod
    def options(client: ERPNextClient) -> dict[str, list[dict[str, Any]]]:
        categories = client.get_list(
            "Asset Category", fields=["name", "asset_category_name"], limit_page_length=1000
        )
        locations = client.get_list(
            "Location", fields=["name", "location_name"], limit_page_length=1000
        )
        return {
            "categories": [
                {"name": row["name"], "category_name": row.get("asset_category_name") or row["name"]}
                for row in categories
            ],
            "locations": [
                {"name": row["name"], "location_name": row.get("location_name") or row["name"]}
                for row in locations
            ],
            "statuses": [{"value": status, "label": status} for status in ASSET_STATUSES],
        }


asset_dashboard = AssetDashboardService()
