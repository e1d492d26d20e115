"""Generic document resource service.

Each remote doctype exposed by the API is a ``DocumentResource`` subclass
declaring its doctype, read projection and list ordering. Subclasses
override ``map_doc`` to rename remote fields, ``build_doc`` to shape the
insert payload and ``build_changes`` to shape updates.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from app.logging import get_logger
from app.schemas.common import DeleteResult
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.fetcher import list_documents

logger = get_logger(__name__)

ReadT = TypeVar("ReadT", bound=BaseModel)


class DocumentResource(Generic[ReadT]):
    doctype: ClassVar[str]
    read_model: ClassVar[type[BaseModel]]
    order_by: ClassVar[str] = "creation desc"

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return doc

    def project(self, doc: dict[str, Any]) -> ReadT:
        return self.read_model.model_validate(self.map_doc(doc))

    def project_many(self, docs: list[dict[str, Any]]) -> list[ReadT]:
        records: list[ReadT] = []
        for doc in docs:
            try:
                records.append(self.project(doc))
            except ValidationError as exc:
                logger.warning(
                    "erp_projection_failed doctype=%s name=%s errors=%s",
                    self.doctype,
                    doc.get("name"),
                    exc.error_count(),
                )
        return records

    def query(
        self,
        client: ERPNextClient,
        filters: list | dict | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[ReadT]:
        docs = list_documents(
            client,
            self.doctype,
            filters=filters or None,
            order_by=order_by or self.order_by,
            limit=limit,
        )
        return self.project_many(docs)

    def get(self, client: ERPNextClient, name: str) -> ReadT:
        return self.project(client.get_doc(self.doctype, name))

    def build_doc(self, client: ERPNextClient, payload: BaseModel) -> dict[str, Any]:
        return payload.model_dump(mode="json", exclude_none=True)

    def create(self, client: ERPNextClient, payload: BaseModel) -> ReadT:
        doc = {key: value for key, value in self.build_doc(client, payload).items() if value is not None}
        doc["doctype"] = self.doctype
        created = client.insert(doc)
        logger.info("erp_document_created doctype=%s name=%s", self.doctype, created.get("name"))
        return self.project(created)

    def build_changes(
        self, client: ERPNextClient, payload: BaseModel, current: dict[str, Any]
    ) -> dict[str, Any]:
        return payload.model_dump(mode="json", exclude_unset=True)

    def update(self, client: ERPNextClient, name: str, payload: BaseModel) -> ReadT:
        current = client.get_doc(self.doctype, name)
        changes = self.build_changes(client, payload, current)
        merged = {**current, **changes, "doctype": self.doctype, "name": name}
        saved = client.save(merged)
        logger.info("erp_document_updated doctype=%s name=%s fields=%s", self.doctype, name, sorted(changes))
        return self.project(saved)

    def delete(self, client: ERPNextClient, name: str) -> DeleteResult:
        client.delete(self.doctype, name)
        logger.info("erp_document_deleted doctype=%s name=%s", self.doctype, name)
        return DeleteResult(name=name, message=f"{self.doctype} {name} deleted successfully")
