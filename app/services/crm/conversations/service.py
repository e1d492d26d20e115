from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import HTTPException

from app.logging import get_logger
from app.schemas.crm.conversation import (
    ActivityCreate,
    ActivityRead,
    ActivityUpdate,
    CommunicationCreate,
    CommunicationRead,
    ReferencedCommunicationCreate,
)
from app.services.common import date_range_filters, eq_filters, iso, today
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient, ERPNextNotFoundError
from app.services.erpnext.mappers import activity_to_remote, map_activity

logger = get_logger(__name__)


def _require_reference(doctype: str | None, name: str | None) -> None:
    if not doctype or not name:
        raise HTTPException(status_code=400, detail="Doctype and name are required")


class Communications(DocumentResource[CommunicationRead]):
    doctype = "Communication"
    read_model = CommunicationRead

    def list(
        self,
        client: ERPNextClient,
        communication_type: str | None = None,
        status: str | None = None,
        reference_doctype: str | None = None,
        reference_name: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[CommunicationRead]:
        filters = eq_filters(
            communication_type=communication_type,
            status=status,
            reference_doctype=reference_doctype,
            reference_name=reference_name,
        )
        filters += date_range_filters("creation", date_from, date_to)
        return self.query(client, filters)

    def by_reference(self, client: ERPNextClient, doctype: str | None, name: str | None) -> list[CommunicationRead]:
        _require_reference(doctype, name)
        return self.query(client, eq_filters(reference_doctype=doctype, reference_name=name))

    def build_doc(self, client: ERPNextClient, payload: CommunicationCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc.setdefault("reference_doctype", "")
        doc.setdefault("reference_name", "")
        return doc

    def create_for_reference(
        self,
        client: ERPNextClient,
        doctype: str | None,
        name: str | None,
        payload: ReferencedCommunicationCreate,
    ) -> CommunicationRead:
        _require_reference(doctype, name)
        full = CommunicationCreate(**payload.model_dump(), reference_doctype=doctype, reference_name=name)
        return self.create(client, full)


class Activities(DocumentResource[ActivityRead]):
    """CRM activities stored as ToDo documents."""

    doctype = "ToDo"
    read_model = ActivityRead

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_activity(doc)

    def list(
        self,
        client: ERPNextClient,
        activity_type: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        assigned_to: str | None = None,
        reference_doctype: str | None = None,
        reference_name: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ActivityRead]:
        filters = eq_filters(
            **activity_to_remote(
                {
                    "activity_type": activity_type,
                    "status": status,
                    "priority": priority,
                    "assigned_to": assigned_to,
                    "reference_doctype": reference_doctype,
                    "reference_name": reference_name,
                }
            )
        )
        filters += date_range_filters("date", date_from, date_to)
        return self.query(client, filters)

    def by_reference(self, client: ERPNextClient, doctype: str | None, name: str | None) -> list[ActivityRead]:
        _require_reference(doctype, name)
        filters = eq_filters(reference_type=doctype, reference_name=name)
        return self.query(client, filters, order_by="date asc")

    def _check_reference(self, client: ERPNextClient, doctype: str, name: str) -> None:
        try:
            client.get_doc(doctype, name)
        except ERPNextNotFoundError as exc:
            raise HTTPException(
                status_code=404,
                detail=f"Referenced {doctype} document not found: {name}",
            ) from exc

    def _resolve_assignee(self, client: ERPNextClient, assignee: str | None) -> str:
        """Return the assignee if the user exists, otherwise leave the activity unassigned."""
        if not assignee:
            return ""
        if client.get_value("User", "name", {"name": assignee}):
            return assignee
        logger.warning("crm_activity_assignee_unknown user=%s", assignee)
        return ""

    def build_doc(self, client: ERPNextClient, payload: ActivityCreate) -> dict[str, Any]:
        if payload.reference_name and not payload.reference_doctype:
            raise HTTPException(
                status_code=400,
                detail="Reference doctype is required when reference name is provided",
            )
        doc = {
            "description": payload.subject,
            "status": payload.status,
            "priority": payload.priority,
            "date": iso(payload.due_date or today()),
            "allocated_to": self._resolve_assignee(client, payload.assigned_to),
            "activity_type": payload.activity_type,
        }
        if payload.reference_doctype and payload.reference_name:
            self._check_reference(client, payload.reference_doctype, payload.reference_name)
            doc["reference_type"] = payload.reference_doctype
            doc["reference_name"] = payload.reference_name
        return doc

    def create_for_reference(
        self,
        client: ERPNextClient,
        doctype: str | None,
        name: str | None,
        payload: ActivityCreate,
    ) -> ActivityRead:
        _require_reference(doctype, name)
        full = payload.model_copy(update={"reference_doctype": doctype, "reference_name": name})
        return self.create(client, full)

    def build_changes(
        self, client: ERPNextClient, payload: ActivityUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True)
        if "assigned_to" in changes:
            changes["assigned_to"] = self._resolve_assignee(client, changes["assigned_to"])
        return activity_to_remote(changes)


communications = Communications()
activities = Activities()
