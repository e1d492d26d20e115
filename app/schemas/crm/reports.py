from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.crm.conversation import ActivityRead


class StageSummary(BaseModel):
    stage: str
    count: int
    amount: float


class SalesPersonSummary(BaseModel):
    name: str
    opportunities: int
    amount: float


class CRMDashboard(BaseModel):
    total_leads: int = 0
    open_opportunities: int = 0
    quotations_to_follow_up: int = 0
    lead_conversion_rate: int = Field(default=0, ge=0, le=100)
    opportunities_by_stage: list[StageSummary] = Field(default_factory=list)
    recent_activities: list[ActivityRead] = Field(default_factory=list)
    top_sales_persons: list[SalesPersonSummary] = Field(default_factory=list)
