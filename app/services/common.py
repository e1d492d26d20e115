from __future__ import annotations

import time
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any

from fastapi import HTTPException

from app.schemas.common import ItemLine


def as_float(value: Any) -> float:
    """Coerce a remote numeric field; missing or malformed values count as zero."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def today() -> date:
    return date.today()


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def timestamp_suffix() -> str:
    """Millisecond timestamp used to build unique document names."""
    return str(int(time.time() * 1000))


def date_range_filters(field: str, date_from: date | None, date_to: date | None) -> list[list[Any]]:
    filters: list[list[Any]] = []
    if date_from:
        filters.append([field, ">=", date_from.isoformat()])
    if date_to:
        filters.append([field, "<=", date_to.isoformat()])
    return filters


def eq_filters(**values: Any) -> list[list[Any]]:
    """Build ``[field, "=", value]`` filters for every non-empty value."""
    return [[field, "=", value] for field, value in values.items() if value not in (None, "")]


def build_item_rows(items: Iterable[ItemLine], child_doctype: str) -> tuple[list[dict[str, Any]], float]:
    """Convert item lines to child-table rows and return them with their total.

    ``amount`` is computed as ``qty * rate`` for every row.
    """
    rows: list[dict[str, Any]] = []
    total = 0.0
    for item in items:
        amount = item.qty * item.rate
        total += amount
        row = {
            "doctype": child_doctype,
            "parentfield": "items",
            "item_code": item.item_code,
            "item_name": item.item_name,
            "description": item.description,
            "qty": item.qty,
            "rate": item.rate,
            "amount": amount,
        }
        if item.uom:
            row["uom"] = item.uom
        if item.warehouse:
            row["warehouse"] = item.warehouse
        rows.append(row)
    return rows, total


def totals_fields(total: float) -> dict[str, float]:
    """Header totals the remote recomputes on save but requires on insert."""
    return {
        "total": total,
        "base_total": total,
        "net_total": total,
        "base_net_total": total,
        "grand_total": total,
        "base_grand_total": total,
    }


def bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=400, detail=detail)


# option key -> (doctype, fields, filters, limit)
OptionSources = dict[str, tuple[str, list[str], list | None, int]]


def load_options(client, sources: OptionSources) -> dict[str, list[dict[str, Any]]]:
    """Load each option list with a single ``get_list`` call."""
    return {
        key: client.get_list(doctype, fields=fields, filters=filters, limit_page_length=limit)
        for key, (doctype, fields, filters, limit) in sources.items()
    }
