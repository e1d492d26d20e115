from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from app.schemas.common import ERPDocumentRead, OptionalDate


class CommunicationCreate(BaseModel):
    subject: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    communication_type: str = "Communication"
    status: str = "Open"
    reference_doctype: str | None = None
    reference_name: str | None = None


class CommunicationUpdate(BaseModel):
    subject: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    status: str | None = None


class CommunicationRead(ERPDocumentRead):
    communication_type: str | None = None
    communication_medium: str | None = None
    subject: str | None = None
    content: str | None = None
    status: str | None = None
    sender: str | None = None
    recipients: str | None = None
    reference_doctype: str | None = None
    reference_name: str | None = None
    owner: str | None = None


class ReferencedCommunicationCreate(BaseModel):
    subject: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    communication_type: str = "Communication"
    status: str = "Open"


class ActivityCreate(BaseModel):
    subject: str = Field(min_length=1)
    status: str = "Open"
    priority: str = "Medium"
    due_date: date | None = None
    assigned_to: str | None = None
    activity_type: str = "Task"
    reference_doctype: str | None = None
    reference_name: str | None = None


class ActivityUpdate(BaseModel):
    subject: str | None = Field(default=None, min_length=1)
    status: str | None = None
    priority: str | None = None
    due_date: date | None = None
    assigned_to: str | None = None


class ActivityRead(ERPDocumentRead):
    """ToDo projected as a CRM activity."""

    activity_type: str | None = "Task"
    subject: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: OptionalDate = None
    assigned_to: str | None = None
    reference_doctype: str | None = None
    reference_name: str | None = None
    owner: str | None = None
