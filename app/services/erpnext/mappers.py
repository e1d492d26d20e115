"""ERPNext document to API projection mappers.

Most doctypes are exposed with their remote field names and projected by
their read schema directly. The mappers below cover the doctypes whose
local field names differ from the remote ones:
- Purchase Invoice → purchase record (totals renamed)
- Expense Claim → expense record (amount fields renamed)
- Payment Entry → payment record (mode of payment, direction-aware amount)
- Asset Movement → movement record (first asset line lifted to the header)
- Asset Value Adjustment → adjustment record (date and value fields renamed)
- ToDo → CRM activity (description/allocated_to/reference_type renamed)

Remote field names are provisional; each rename lives in one ``*_FIELD_MAP``.
"""

from __future__ import annotations

from typing import Any

from app.services.common import as_float


def _rename(doc: dict[str, Any], field_map: dict[str, str]) -> dict[str, Any]:
    """Copy ``doc`` and add local keys from ``{local: remote}`` pairs."""
    mapped = dict(doc)
    for local, remote in field_map.items():
        mapped[local] = doc.get(remote)
    return mapped


# -----------------------------------------------------------------------------
# Field Maps ({local: remote})
# -----------------------------------------------------------------------------

PURCHASE_INVOICE_FIELD_MAP = {
    "total_amount": "grand_total",
    "total_tax": "total_taxes_and_charges",
}

EXPENSE_CLAIM_FIELD_MAP = {
    "amount": "total_amount",
    "tax_amount": "total_taxes_and_charges",
    "total_amount": "total_sanctioned_amount",
}

PAYMENT_ENTRY_FIELD_MAP = {
    "payment_method": "mode_of_payment",
}

VALUE_ADJUSTMENT_FIELD_MAP = {
    "adjustment_date": "date",
    "current_value": "current_asset_value",
    "new_value": "new_asset_value",
}

ACTIVITY_FIELD_MAP = {
    "subject": "description",
    "due_date": "date",
    "assigned_to": "allocated_to",
    "reference_doctype": "reference_type",
}


# -----------------------------------------------------------------------------
# Mappers
# -----------------------------------------------------------------------------


def map_purchase_invoice(doc: dict[str, Any]) -> dict[str, Any]:
    mapped = _rename(doc, PURCHASE_INVOICE_FIELD_MAP)
    mapped["total_tax"] = mapped.get("total_tax") or 0
    mapped["items"] = doc.get("items") or []
    return mapped


def map_expense_claim(doc: dict[str, Any]) -> dict[str, Any]:
    return _rename(doc, EXPENSE_CLAIM_FIELD_MAP)


def map_payment_entry(doc: dict[str, Any]) -> dict[str, Any]:
    """Map a Payment Entry.

    ``amount`` is the received amount for receipts and the paid amount for
    everything else, with the other side as fallback.
    """
    mapped = _rename(doc, PAYMENT_ENTRY_FIELD_MAP)
    paid = as_float(doc.get("paid_amount"))
    received = as_float(doc.get("received_amount"))
    if doc.get("payment_type") == "Receive":
        mapped["amount"] = received or paid
    else:
        mapped["amount"] = paid or received
    return mapped


def _movement_line(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "asset": row.get("asset") or "",
        "asset_name": row.get("asset_name") or "",
        "from_location": row.get("source_location") or row.get("from_location") or "",
        "to_location": row.get("target_location") or row.get("to_location") or "",
        "from_employee": row.get("from_employee") or "",
        "to_employee": row.get("to_employee") or "",
    }


def map_asset_movement(doc: dict[str, Any]) -> dict[str, Any]:
    """Map an Asset Movement.

    The header carries the first asset line's asset, locations and
    employees so list views can show a movement without its child table.
    """
    lines = [_movement_line(row) for row in doc.get("assets") or []]
    first = lines[0] if lines else _movement_line({})
    mapped = dict(doc)
    mapped["assets"] = lines
    mapped.update(first)
    mapped.pop("asset_name", None)
    return mapped


def movement_line_to_remote(line: dict[str, Any]) -> dict[str, Any]:
    """Build an outbound Asset Movement Item row from a local line."""
    return {
        "asset": line.get("asset"),
        "asset_name": line.get("asset_name") or "",
        "source_location": line.get("from_location") or "",
        "target_location": line.get("to_location") or "",
        "from_employee": line.get("from_employee") or "",
        "to_employee": line.get("to_employee") or "",
    }


def map_value_adjustment(doc: dict[str, Any]) -> dict[str, Any]:
    return _rename(doc, VALUE_ADJUSTMENT_FIELD_MAP)


def map_activity(doc: dict[str, Any]) -> dict[str, Any]:
    return _rename(doc, ACTIVITY_FIELD_MAP)


def activity_to_remote(values: dict[str, Any]) -> dict[str, Any]:
    """Translate local activity fields to ToDo fields, keeping unknown keys."""
    remote: dict[str, Any] = {}
    for key, value in values.items():
        remote[ACTIVITY_FIELD_MAP.get(key, key)] = value
    return remote
