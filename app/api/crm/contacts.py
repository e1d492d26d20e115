from fastapi import APIRouter, Depends, status

from app.api.deps import get_erp_client, require_erp_auth
from app.schemas.common import DeleteResult, Envelope
from app.schemas.crm.contact import (
    AddressCreate,
    AddressRead,
    ContactCreate,
    ContactRead,
    CustomerCreate,
    CustomerRead,
    CustomerUpdate,
)
from app.services import crm as crm_service
from app.services.erpnext.client import ERPNextClient
from app.services.response import envelope

router = APIRouter(prefix="/crm/customers", tags=["crm-contacts"])


@router.get("", response_model=Envelope[list[CustomerRead]])
def list_customers(
    customer_type: str | None = None,
    customer_group: str | None = None,
    territory: str | None = None,
    client: ERPNextClient = Depends(get_erp_client),
):
    return envelope(crm_service.customers.list(client, customer_type, customer_group, territory))


@router.post(
    "",
    response_model=Envelope[CustomerRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_customer(payload: CustomerCreate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.customers.create(client, payload), "Customer created successfully")


@router.get("/{name}", response_model=Envelope[CustomerRead])
def get_customer(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.customers.get(client, name))


@router.put("/{name}", response_model=Envelope[CustomerRead], dependencies=[Depends(require_erp_auth)])
def update_customer(name: str, payload: CustomerUpdate, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.customers.update(client, name, payload), "Customer updated successfully")


@router.delete("/{name}", response_model=Envelope[DeleteResult], dependencies=[Depends(require_erp_auth)])
def delete_customer(name: str, client: ERPNextClient = Depends(get_erp_client)):
    result = crm_service.customers.delete(client, name)
    return envelope(result, result.message)


@router.get("/{name}/contacts", response_model=Envelope[list[ContactRead]])
def list_customer_contacts(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.customer_contacts.list_for_customer(client, name))


@router.post(
    "/{name}/contacts",
    response_model=Envelope[ContactRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_customer_contact(name: str, payload: ContactCreate, client: ERPNextClient = Depends(get_erp_client)):
    contact = crm_service.customer_contacts.create_for_customer(client, name, payload)
    return envelope(contact, "Contact created successfully")


@router.get("/{name}/addresses", response_model=Envelope[list[AddressRead]])
def list_customer_addresses(name: str, client: ERPNextClient = Depends(get_erp_client)):
    return envelope(crm_service.customer_addresses.list_for_customer(client, name))


@router.post(
    "/{name}/addresses",
    response_model=Envelope[AddressRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_erp_auth)],
)
def create_customer_address(name: str, payload: AddressCreate, client: ERPNextClient = Depends(get_erp_client)):
    address = crm_service.customer_addresses.create_for_customer(client, name, payload)
    return envelope(address, "Address created successfully")
