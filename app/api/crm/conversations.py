from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import DeleteResult, Envelope
from app.schemas.crm.conversation import (
    ActivityCreate,
    ActivityRead,
    ActivityUpdate,
    CommunicationCreate,
    CommunicationRead,
    CommunicationUpdate,
    ReferencedCommunicationCreate,
)
from app.services import crm as crm_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/crm", tags=["crm-conversations"])


# -----------------------------------------------------------------------------
# Communications
# -----------------------------------------------------------------------------


@router.get("/communications", response_model=Envelope[list[CommunicationRead]])
def list_communications(
    communication_type: str | None = None,
    status: str | None = None,
    reference_doctype: str | None = None,
    reference_name: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    records = crm_service.communications.list(
        client, communication_type, status, reference_doctype, reference_name, date_from, date_to
    )
    return envelope(records)


@router.post(
    "/communications",
    response_model=Envelope[CommunicationRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_communication(payload: CommunicationCreate, client: ERPNextClient = Depends(get_erp_client)):
    record = crm_service.communications.create(client, payload)
    return envelope(record, "Communication created successfully")


@router.get("/communications/by-reference", response_model=Envelope[list[CommunicationRead]])
def list_communications_by_reference(
    doctype: str | None = Query(default=None),
    name: str | None = Query(default=None),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.communications.by_reference(client, doctype, name))


@router.post(
    "/communications/by-reference",
    response_model=Envelope[CommunicationRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_communication_for_reference(
    payload: ReferencedCommunicationCreate,
    doctype: str | None = Query(default=None),
    name: str | None = Query(default=None),
    client: ERPNextClient = Depends(get_erp_client),
):
    record = crm_service.communications.create_for_reference(client, doctype, name, payload)
    return envelope(record, "Communication created successfully")


@router.get("/communications/{name}", response_model=Envelope[CommunicationRead])
def get_communication(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.communications.get(client, name))


@router.put(
    "/communications/{name}",
    response_model=Envelope[CommunicationRead],
    dependencies=[Depends(require_erp_auth)],
)
def update_communication(
    name: str, payload: CommunicationUpdate, client: ERPNextClient = Depends(get_erp_client)
):
    record = crm_service.communications.update(client, name, payload)
    return envelope(record, "Communication updated successfully")


@router.delete(
    "/communications/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_communication(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.communications.delete(client, name)
    return envelope(result, result.message)


# -----------------------------------------------------------------------------
# Activities
# -----------------------------------------------------------------------------


@router.get("/activities", response_model=Envelope[list[ActivityRead]])
def list_activities(
    activity_type: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    assigned_to: str | None = None,
    reference_doctype: str | None = None,
    reference_name: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    records = crm_service.activities.list(
        client,
        activity_type,
        status,
        priority,
        assigned_to,
        reference_doctype,
        reference_name,
        date_from,
        date_to,
    )
    return envelope(records)


@router.post(
    "/activities",
    response_model=Envelope[ActivityRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_activity(payload: ActivityCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.activities.create(client, payload), "Activity created successfully")


@router.get("/activities/by-reference", response_model=Envelope[list[ActivityRead]])
def list_activities_by_reference(
    doctype: str | None = Query(default=None),
    name: str | None = Query(default=None),
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.activities.by_reference(client, doctype, name))


@router.post(
    "/activities/by-reference",
    response_model=Envelope[ActivityRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_activity_for_reference(
    payload: ActivityCreate,
    doctype: str | None = Query(default=None),
    name: str | None = Query(default=None),
    client: ERPNextClient = Depends(get_erp_client),
):
    record = crm_service.activities.create_for_reference(client, doctype, name, payload)
    return envelope(record, "Activity created successfully")


@router.get("/activities/{name}", response_model=Envelope[ActivityRead])
def get_activity(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.activities.get(client, name))


@router.put("/activities/{name}", response_model=Envelope[ActivityRead], dependencies=[Depends(require_erp_auth)])
def update_activity(name: str, payload: ActivityUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.activities.update(client, name, payload), "Activity updated successfully")


@router.delete(
    "/activities/{name}",
    response_model=Envelope[DeleteResult],
    dependencies=[Depends(require_erp_auth)],
)
def delete_activity(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.activities.delete(client, name)
    return envelope(result, result.message)
