from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.common import Amount, ERPDocumentRead, OptionalDate
from app.validators.asset_movement import validate_asset_movement

AssetStatus = Literal["Available", "In Use", "Under Maintenance", "Scrapped"]

ASSET_STATUSES: tuple[str, ...] = ("Available", "In Use", "Under Maintenance", "Scrapped")


# -----------------------------------------------------------------------------
# Assets
# -----------------------------------------------------------------------------


class AssetCreate(BaseModel):
    asset_name: str = Field(min_length=1, max_length=140)
    asset_category: str = Field(min_length=1)
    purchase_date: date
    purchase_value: float = Field(gt=0)
    item_code: str | None = None
    serial_no: str | None = None
    gross_purchase_amount: float | None = Field(default=None, ge=0)
    location: str | None = None
    status: AssetStatus = "Available"
    warranty_expiry_date: date | None = None
    assigned_to: str | None = None


class AssetUpdate(BaseModel):
    asset_name: str | None = Field(default=None, min_length=1, max_length=140)
    asset_category: str | None = None
    item_code: str | None = None
    serial_no: str | None = None
    purchase_date: date | None = None
    purchase_value: float | None = Field(default=None, gt=0)
    current_value: float | None = Field(default=None, ge=0)
    location: str | None = None
    status: AssetStatus | None = None
    warranty_expiry_date: date | None = None
    assigned_to: str | None = None


class AssetRead(ERPDocumentRead):
    asset_name: str | None = None
    asset_category: str | None = None
    item_code: str | None = None
    serial_no: str | None = None
    purchase_date: OptionalDate = None
    purchase_value: Amount = 0
    gross_purchase_amount: Amount = 0
    current_value: Amount = 0
    location: str | None = None
    status: str | None = None
    warranty_expiry_date: OptionalDate = None
    assigned_to: str | None = None
    owner: str | None = None


# -----------------------------------------------------------------------------
# Categories and locations
# -----------------------------------------------------------------------------


class CategoryAccount(BaseModel):
    model_config = ConfigDict(extra="ignore")

    company: str | None = None
    fixed_asset_account: str | None = None
    accumulated_depreciation_account: str | None = None
    depreciation_expense_account: str | None = None
    capital_work_in_progress_account: str | None = None


class AssetCategoryCreate(BaseModel):
    asset_category_name: str = Field(min_length=1, max_length=140)
    company: str = Field(min_length=1)
    parent_category: str | None = None
    is_group: bool = False
    accounts: list[CategoryAccount] = Field(default_factory=list)


class AssetCategoryUpdate(BaseModel):
    asset_category_name: str | None = Field(default=None, min_length=1, max_length=140)
    parent_category: str | None = None
    is_group: bool | None = None
    accounts: list[CategoryAccount] | None = None


class AssetCategoryRead(ERPDocumentRead):
    asset_category_name: str | None = None
    company: str | None = None
    parent_category: str | None = None
    is_group: int | None = None
    accounts: list[CategoryAccount] = Field(default_factory=list)


class LocationCreate(BaseModel):
    location_name: str = Field(min_length=1, max_length=140)
    parent_location: str | None = None
    is_group: bool = False
    latitude: float | None = None
    longitude: float | None = None


class LocationUpdate(BaseModel):
    location_name: str | None = Field(default=None, min_length=1, max_length=140)
    parent_location: str | None = None
    is_group: bool | None = None
    latitude: float | None = None
    longitude: float | None = None


class LocationRead(ERPDocumentRead):
    location_name: str | None = None
    parent_location: str | None = None
    is_group: int | None = None
    latitude: float | None = None
    longitude: float | None = None


# -----------------------------------------------------------------------------
# Movements
# -----------------------------------------------------------------------------


class MovementLine(BaseModel):
    asset: str | None = None
    asset_name: str | None = None
    from_location: str | None = None
    to_location: str | None = None
    from_employee: str | None = None
    to_employee: str | None = None


class AssetMovementCreate(BaseModel):
    purpose: str
    movement_date: date
    assets: list[MovementLine] = Field(default_factory=list)
    company: str | None = None
    reference_doctype: str | None = None
    reference_name: str | None = None
    status: str | None = None

    @model_validator(mode="after")
    def _check_lines(self) -> AssetMovementCreate:
        validate_asset_movement(self.purpose, self.assets)
        return self


class AssetMovementUpdate(BaseModel):
    purpose: str | None = None
    movement_date: date | None = None
    assets: list[MovementLine] | None = None
    company: str | None = None
    reference_doctype: str | None = None
    reference_name: str | None = None
    status: str | None = None


class AssetMovementRead(ERPDocumentRead):
    asset: str = ""
    assets: list[MovementLine] = Field(default_factory=list)
    from_location: str = ""
    to_location: str = ""
    from_employee: str = ""
    to_employee: str = ""
    movement_date: OptionalDate = None
    purpose: str | None = None
    status: str | None = None
    company: str | None = None
    owner: str | None = None


# -----------------------------------------------------------------------------
# Maintenance, repairs and value adjustments
# -----------------------------------------------------------------------------


class MaintenanceTask(BaseModel):
    model_config = ConfigDict(extra="allow")

    maintenance_task: str | None = None
    maintenance_status: str | None = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    assign_to: str | None = None
    periodicity: str | None = None


class AssetMaintenanceCreate(BaseModel):
    asset: str = Field(min_length=1)
    maintenance_date: date
    asset_name: str | None = None
    maintenance_type: str | None = None
    description: str | None = None
    cost: float = Field(default=0, ge=0)
    next_maintenance_date: date | None = None
    status: str = "Scheduled"
    maintenance_team: str | None = None
    maintenance_task: str | None = None
    assign_to: str | None = None
    periodicity: str | None = None
    asset_maintenance_tasks: list[MaintenanceTask] | None = None


class AssetMaintenanceUpdate(BaseModel):
    maintenance_type: str | None = None
    maintenance_date: date | None = None
    description: str | None = None
    cost: float | None = Field(default=None, ge=0)
    next_maintenance_date: date | None = None
    status: str | None = None
    maintenance_team: str | None = None


class AssetMaintenanceRead(ERPDocumentRead):
    asset: str | None = None
    asset_name: str | None = None
    maintenance_type: str | None = None
    maintenance_date: OptionalDate = None
    description: str | None = None
    cost: Amount = 0
    next_maintenance_date: OptionalDate = None
    status: str | None = None
    maintenance_team: str | None = None
    asset_maintenance_tasks: list[MaintenanceTask] = Field(default_factory=list)
    owner: str | None = None


class AssetRepairCreate(BaseModel):
    asset: str = Field(min_length=1)
    repair_date: date
    failure_date: date
    asset_name: str | None = None
    repair_type: str | None = None
    description: str | None = None
    cause_of_failure: str | None = None
    actions_performed: str | None = None
    cost: float = Field(default=0, ge=0)
    technician: str | None = None
    status: str = "Reported"
    company: str | None = None
    completion_date: date | None = None
    downtime: float = Field(default=0, ge=0)
    repair_details: str | None = None


class AssetRepairUpdate(BaseModel):
    repair_type: str | None = None
    repair_date: date | None = None
    failure_date: date | None = None
    description: str | None = None
    cause_of_failure: str | None = None
    actions_performed: str | None = None
    cost: float | None = Field(default=None, ge=0)
    technician: str | None = None
    status: str | None = None
    completion_date: date | None = None
    downtime: float | None = Field(default=None, ge=0)
    repair_details: str | None = None


class AssetRepairRead(ERPDocumentRead):
    asset: str | None = None
    repair_type: str | None = None
    repair_date: OptionalDate = None
    failure_date: OptionalDate = None
    description: str | None = None
    cause_of_failure: str | None = None
    actions_performed: str | None = None
    cost: Amount = 0
    technician: str | None = None
    status: str | None = None
    company: str | None = None
    completion_date: OptionalDate = None
    downtime: Amount = 0
    repair_details: str | None = None
    owner: str | None = None


class ValueAdjustmentCreate(BaseModel):
    asset: str = Field(min_length=1)
    date: date
    new_asset_value: float = Field(gt=0)
    current_asset_value: float = Field(default=0, ge=0)
    difference_account: str | None = None
    company: str | None = None
    finance_book: str | None = None
    reason: str | None = None


class ValueAdjustmentUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # "date" as a field name with a default shadows the type inside the class body
    adjustment_date: date | None = Field(default=None, alias="date")
    new_asset_value: float | None = Field(default=None, gt=0)
    difference_account: str | None = None
    reason: str | None = None


class ValueAdjustmentRead(ERPDocumentRead):
    asset: str | None = None
    adjustment_date: OptionalDate = None
    current_value: Amount = 0
    new_value: Amount = 0
    difference_amount: Amount = 0
    difference_account: str | None = None
    reason: str | None = None
    approved_by: str | None = None
    company: str | None = None
    owner: str | None = None


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------


class CategoryTotal(BaseModel):
    category: str
    count: int
    value: float


class LocationTotal(BaseModel):
    location: str
    count: int
    value: float


class AssetActivity(BaseModel):
    type: Literal["maintenance", "movement", "repair"]
    asset: str
    date: date
    description: str
    status: str | None = None


class MaintenanceDue(BaseModel):
    asset: str
    due_date: date
    days_remaining: int
    status: str | None = None


class AssetDashboard(BaseModel):
    total_assets: int
    assets_requiring_attention: int
    assets_by_category: list[CategoryTotal]
    assets_by_location: list[LocationTotal]
    recent_activities: list[AssetActivity]
    maintenance_due: list[MaintenanceDue]
