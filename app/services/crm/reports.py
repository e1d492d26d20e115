"""CRM dashboard figures and form options."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from app.logging import get_logger
from app.schemas.crm.conversation import ActivityRead
from app.schemas.crm.reports import CRMDashboard, SalesPersonSummary, StageSummary
from app.services.common import OptionSources, as_float, load_options, today
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.mappers import map_activity

logger = get_logger(__name__)

TOP_SALES_PERSONS = 5
RECENT_ACTIVITY_LIMIT = 10
OPPORTUNITY_SAMPLE = 1000

CRM_OPTION_SOURCES: OptionSources = {
    "territories": ("Territory", ["name", "territory_name"], None, 100),
    "sales_persons": ("Sales Person", ["name", "sales_person_name"], None, 100),
    "customer_groups": ("Customer Group", ["name", "customer_group_name"], None, 100),
    "lead_sources": ("Lead Source", ["name", "source_name"], None, 100),
    "sales_stages": ("Sales Stage", ["name", "stage_name"], None, 100),
    "customers": ("Customer", ["name", "customer_name"], None, 100),
    "leads": ("Lead", ["name", "lead_name"], None, 100),
    "items": (
        "Item",
        ["name", "item_code", "item_name", "description", "stock_uom", "standard_rate"],
        [["disabled", "=", 0]],
        100,
    ),
}


def conversion_rate(converted: int, total: int) -> int:
    """Percentage of leads converted, rounded to a whole number."""
    if total <= 0:
        return 0
    return round(converted / total * 100)


def stage_summary(opportunities: list[dict[str, Any]]) -> list[StageSummary]:
    stages: dict[str, list[float]] = defaultdict(lambda: [0, 0.0])
    for opportunity in opportunities:
        stage = opportunity.get("sales_stage") or "Unknown"
        stages[stage][0] += 1
        stages[stage][1] += as_float(opportunity.get("opportunity_amount"))
    return [StageSummary(stage=stage, count=count, amount=amount) for stage, (count, amount) in stages.items()]


def top_sales_persons(opportunities: list[dict[str, Any]], limit: int = TOP_SALES_PERSONS) -> list[SalesPersonSummary]:
    persons: dict[str, list[float]] = defaultdict(lambda: [0, 0.0])
    for opportunity in opportunities:
        person = opportunity.get("contact_by") or "Unassigned"
        persons[person][0] += 1
        persons[person][1] += as_float(opportunity.get("opportunity_amount"))
    ranked = sorted(persons.items(), key=lambda item: item[1][1], reverse=True)
    return [
        SalesPersonSummary(name=name, opportunities=count, amount=amount)
        for name, (count, amount) in ranked[:limit]
    ]


class CRMReports:
    @staticmethod
    def dashboard(client: ERPNextClient, territory: str | None = None) -> CRMDashboard:
        scope = [["territory", "=", territory]] if territory else []
        current = today().isoformat()

        total_leads = client.get_count("Lead", scope)
        converted_leads = client.get_count("Lead", [["status", "=", "Converted"], *scope])
        open_opportunities = client.get_count("Opportunity", [["status", "=", "Open"], *scope])
        quotations_to_follow_up = client.get_count(
            "Quotation", [["status", "=", "Submitted"], ["valid_till", ">=", current], *scope]
        )

        by_stage = client.get_list(
            "Opportunity",
            fields=["sales_stage", "opportunity_amount"],
            filters=scope,
            limit_page_length=OPPORTUNITY_SAMPLE,
        )
        active = client.get_list(
            "Opportunity",
            fields=["contact_by", "opportunity_amount"],
            filters=[["status", "in", ["Open", "Quoted"]], *scope],
            limit_page_length=OPPORTUNITY_SAMPLE,
        )
        upcoming = client.get_list(
            "ToDo",
            fields=[
                "name",
                "description",
                "status",
                "priority",
                "date",
                "allocated_to",
                "reference_type",
                "reference_name",
                "creation",
                "modified",
                "owner",
            ],
            filters=[["status", "=", "Open"], ["date", ">=", current]],
            order_by="date asc",
            limit_page_length=RECENT_ACTIVITY_LIMIT,
        )

        dashboard = CRMDashboard(
            total_leads=total_leads,
            open_opportunities=open_opportunities,
            quotations_to_follow_up=quotations_to_follow_up,
            lead_conversion_rate=conversion_rate(converted_leads, total_leads),
            opportunities_by_stage=stage_summary(by_stage),
            recent_activities=[ActivityRead.model_validate(map_activity(row)) for row in upcoming],
            top_sales_persons=top_sales_persons(active),
        )
        logger.info("crm_dashboard_built territory=%s leads=%s", territory or "", total_leads)
        return dashboard

    @staticmethod
    def options(client: ERPNextClient) -> dict[str, list[dict[str, Any]]]:
        return load_options(client, CRM_OPTION_SOURCES)


crm_reports = CRMReports()
