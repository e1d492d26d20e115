from app.validators.asset_movement import field_value

# purpose -> header warehouse that must be set
REQUIRED_WAREHOUSE = {
    "Material Issue": ("from_warehouse", "From Warehouse is required for Material Issue"),
    "Material Receipt": ("to_warehouse", "To Warehouse is required for Material Receipt"),
    "Manufacture": ("to_warehouse", "To Warehouse is required for Manufacturing"),
}


def validate_stock_entry(purpose, from_warehouse, to_warehouse, items) -> None:
    """Check the warehouses and item mix a stock entry purpose needs.

    Purposes without a rule pass unchanged. Raises ``ValueError``.
    """
    rule = REQUIRED_WAREHOUSE.get(purpose or "")
    if rule is not None:
        field, message = rule
        value = from_warehouse if field == "from_warehouse" else to_warehouse
        if not value:
            raise ValueError(message)

    if purpose == "Manufacture":
        finished = [bool(field_value(item, "is_finished_item")) for item in items or []]
        if not any(not flag for flag in finished):
            raise ValueError("At least one raw material is required for Manufacturing")
        if not any(finished):
            raise ValueError("At least one finished good is required for Manufacturing")
