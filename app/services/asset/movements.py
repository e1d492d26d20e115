"""Asset movements.

Lines are validated against the movement purpose before anything is sent to
the ERP. On create every referenced asset must exist; assets still in draft
are submitted first because the ERP only moves submitted assets.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import HTTPException

from app.config import settings
from app.logging import get_logger
from app.schemas.asset import AssetMovementCreate, AssetMovementRead, AssetMovementUpdate, MovementLine
from app.services.common import date_range_filters, eq_filters, iso
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient, ERPNextError, ERPNextNotFoundError
from app.services.erpnext.mappers import map_asset_movement, movement_line_to_remote
from app.validators.asset_movement import validate_asset_movement

logger = get_logger(__name__)


def _line_dicts(lines: list[MovementLine]) -> list[dict[str, Any]]:
    return [line.model_dump() for line in lines]


class AssetMovements(DocumentResource[AssetMovementRead]):
    doctype = "Asset Movement"
    read_model = AssetMovementRead

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_asset_movement(doc)

    def list(
        self,
        client: ERPNextClient,
        asset: str | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[AssetMovementRead]:
        filters = eq_filters(status=status)
        if asset:
            # asset lives on the child rows
            filters.append(["Asset Movement Item", "asset", "=", asset])
        filters += date_range_filters("movement_date", date_from, date_to)
        return self.query(client, filters)

    def ensure_submitted(self, client: ERPNextClient, asset_name: str) -> None:
        try:
            asset = client.get_doc("Asset", asset_name)
        except ERPNextNotFoundError as exc:
            raise HTTPException(status_code=404, detail=f"Asset {asset_name} does not exist") from exc
        if asset.get("docstatus") != 0:
            return
        logger.info("asset_submit_before_movement asset=%s", asset_name)
        try:
            client.submit({"doctype": "Asset", "name": asset_name})
        except ERPNextError as exc:
            raise HTTPException(
                status_code=400,
                detail=(
                    f"Asset {asset_name} is in draft status and cannot be submitted "
                    f"automatically. Please submit it first. ({exc.message})"
                ),
            ) from exc

    def build_doc(self, client: ERPNextClient, payload: AssetMovementCreate) -> dict[str, Any]:
        for line in payload.assets:
            self.ensure_submitted(client, line.asset)
        return {
            "company": payload.company or settings.default_company or None,
            "purpose": payload.purpose,
            "movement_date": iso(payload.movement_date),
            "reference_doctype": payload.reference_doctype or "",
            "reference_name": payload.reference_name or "",
            "status": payload.status or "Draft",
            "assets": [movement_line_to_remote(line) for line in _line_dicts(payload.assets)],
        }

    def build_changes(
        self, client: ERPNextClient, payload: AssetMovementUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"assets"})
        if payload.purpose is not None and payload.assets is not None:
            purpose, lines = payload.purpose, _line_dicts(payload.assets)
        else:
            existing = map_asset_movement(current)
            purpose = payload.purpose or existing.get("purpose")
            lines = _line_dicts(payload.assets) if payload.assets is not None else existing["assets"]
        try:
            validate_asset_movement(purpose, lines)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if payload.assets is not None:
            changes["assets"] = [movement_line_to_remote(line) for line in lines]
        return changes

    def update(self, client: ERPNextClient, name: str, payload: AssetMovementUpdate) -> AssetMovementRead:
        # A complete payload is checked before the current document is read
        if payload.purpose is not None and payload.assets is not None:
            try:
                validate_asset_movement(payload.purpose, _line_dicts(payload.assets))
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        return super().update(client, name, payload)


asset_movements = AssetMovements()
