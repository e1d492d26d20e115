from __future__ import annotations

from typing import Any

from app.schemas.asset import (
    AssetCategoryCreate,
    AssetCategoryRead,
    AssetCategoryUpdate,
    AssetCreate,
    AssetRead,
    LocationCreate,
    LocationRead,
)
from app.services.common import eq_filters
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient


class Assets(DocumentResource[AssetRead]):
    doctype = "Asset"
    read_model = AssetRead

    def list(
        self,
        client: ERPNextClient,
        asset_category: str | None = None,
        location: str | None = None,
        status: str | None = None,
        assigned_to: str | None = None,
    ) -> list[AssetRead]:
        filters = eq_filters(
            asset_category=asset_category,
            location=location,
            status=status,
            assigned_to=assigned_to,
        )
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: AssetCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        # Book value starts at the purchase value
        doc["current_value"] = payload.purchase_value
        return doc


class AssetCategories(DocumentResource[AssetCategoryRead]):
    doctype = "Asset Category"
    read_model = AssetCategoryRead
    order_by = "name asc"

    def list(self, client: ERPNextClient) -> list[AssetCategoryRead]:
        return self.query(client)

    def build_doc(self, client: ERPNextClient, payload: AssetCategoryCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True, exclude={"accounts"})
        doc["is_group"] = int(payload.is_group)
        account = payload.accounts[0] if payload.accounts else None
        if account and account.fixed_asset_account:
            row = account.model_dump(exclude_none=True)
            row["company"] = payload.company
            doc["accounts"] = [row]
        return doc

    def build_changes(
        self, client: ERPNextClient, payload: AssetCategoryUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True)
        if payload.is_group is not None:
            changes["is_group"] = int(payload.is_group)
        return changes


class Locations(DocumentResource[LocationRead]):
    doctype = "Location"
    read_model = LocationRead
    order_by = "location_name asc"

    def list(self, client: ERPNextClient) -> list[LocationRead]:
        return self.query(client)

    def build_doc(self, client: ERPNextClient, payload: LocationCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["is_group"] = int(payload.is_group)
        return doc


assets = Assets()
asset_categories = AssetCategories()
locations = Locations()
