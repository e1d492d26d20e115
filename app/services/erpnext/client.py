"""ERPNext/Frappe API client.

Provides HTTP client for the Frappe document API with:
- API key + secret authentication
- Document CRUD through ``frappe.client`` whitelisted methods
- Automatic pagination for list endpoints
- Error handling and retry logic
- Rate limiting respect

Usage:
    client = ERPNextClient(
        base_url="https://erp.example.com",
        api_key="your-api-key",
        api_secret="your-api-secret",
    )

    # List submitted invoices for a company
    names = client.get_list("Sales Invoice", filters={"company": "Acme", "docstatus": 1})

    # Get single document
    invoice = client.get_doc("Sales Invoice", "ACC-SINV-2024-00001")

    # Create a document
    lead = client.insert({"doctype": "Lead", "lead_name": "Abebe"})
"""

from __future__ import annotations

import json
import time
from typing import Any, Iterator

import httpx

from app.config import Settings, settings
from app.logging import get_logger
from app.observability import ERP_CALL_LATENCY, ERP_CALLS

logger = get_logger(__name__)


class ERPNextError(Exception):
    """Base exception for ERPNext API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: dict | None = None,
        exc_type: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.exc_type = exc_type
        super().__init__(message)


class ERPNextAuthError(ERPNextError):
    """Authentication failed."""
    pass


class ERPNextNotFoundError(ERPNextError):
    """Document not found."""
    pass


class ERPNextRateLimitError(ERPNextError):
    """Rate limit exceeded."""
    pass


class ERPNextConfigError(ERPNextError):
    """ERP connection settings are missing."""
    pass


def _error_message(response: httpx.Response) -> tuple[str, dict | None]:
    """Extract the most useful error text from a Frappe error response.

    Frappe reports errors through ``message``, ``_server_messages`` (a JSON
    encoded list of JSON encoded dicts) or ``exception``.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None
    if not isinstance(data, dict):
        return str(data), None

    message = data.get("message")
    if isinstance(message, str) and message:
        return message, data

    server_messages = data.get("_server_messages")
    if server_messages:
        try:
            entries = json.loads(server_messages)
            texts = []
            for entry in entries:
                parsed = json.loads(entry) if isinstance(entry, str) else entry
                texts.append(parsed.get("message", "") if isinstance(parsed, dict) else str(parsed))
            joined = "; ".join(t for t in texts if t)
            if joined:
                return joined, data
        except (ValueError, TypeError, AttributeError):
            pass

    exception = data.get("exception")
    if isinstance(exception, str) and exception:
        # "frappe.exceptions.DoesNotExistError: Lead X not found"
        return exception.split(": ", 1)[-1], data

    return response.text or f"HTTP {response.status_code}", data


class ERPNextClient:
    """HTTP client for ERPNext/Frappe REST API.

    Attributes:
        base_url: ERPNext instance URL (e.g., https://erp.example.com)
        api_key: API key for authentication
        api_secret: API secret for authentication
        timeout: Request timeout in seconds
        page_size: Number of records per page for list requests
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_PAGE_SIZE = 100
    MAX_RETRIES = 3
    RETRY_DELAY = 1.0

    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_secret: str,
        timeout: float = DEFAULT_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.page_size = page_size

        # Build auth header (token format: api_key:api_secret)
        self._auth_header = f"token {api_key}:{api_secret}"

    @classmethod
    def from_settings(cls, config: Settings = settings) -> ERPNextClient:
        """Build a client from application settings.

        Raises:
            ERPNextConfigError: If the URL, key or secret is not configured
        """
        missing = [
            env
            for env, value in (
                ("ERP_API_URL", config.erp_api_url),
                ("ERP_API_KEY", config.erp_api_key),
                ("ERP_API_SECRET", config.erp_api_secret),
            )
            if not value
        ]
        if missing:
            raise ERPNextConfigError(
                f"Missing ERP API environment variables: {', '.join(missing)}",
                status_code=500,
            )
        return cls(
            base_url=config.erp_api_url,
            api_key=config.erp_api_key,
            api_secret=config.erp_api_secret,
            timeout=config.erp_timeout_seconds,
        )

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with authentication."""
        return {
            "Authorization": self._auth_header,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
        retries: int = 0,
    ) -> dict[str, Any]:
        """Make HTTP request to ERPNext API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path (e.g., /api/method/frappe.client.get)
            params: Query parameters
            json: JSON body for POST/PUT
            retries: Current retry count

        Returns:
            Parsed JSON response

        Raises:
            ERPNextError: On API errors
        """
        url = f"{self.base_url}{path}"
        started = time.perf_counter()

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    params=params,
                    json=json,
                )
        except httpx.TimeoutException as e:
            if retries < self.MAX_RETRIES:
                logger.warning("erpnext_timeout path=%s retries=%s", path, retries)
                ERP_CALLS.labels(method, "retried").inc()
                time.sleep(self.RETRY_DELAY)
                return self._request(method, path, params, json, retries + 1)
            ERP_CALLS.labels(method, "error").inc()
            raise ERPNextError(f"Request timeout: {e}", status_code=504) from e
        except httpx.RequestError as e:
            ERP_CALLS.labels(method, "error").inc()
            raise ERPNextError(f"Request failed: {e}", status_code=502) from e
        finally:
            ERP_CALL_LATENCY.labels(method).observe(time.perf_counter() - started)

        # Handle rate limiting
        if response.status_code == 429:
            if retries < self.MAX_RETRIES:
                retry_after = float(response.headers.get("Retry-After", self.RETRY_DELAY))
                logger.warning(
                    "erpnext_rate_limited retry_after=%s retries=%s",
                    retry_after,
                    retries,
                )
                ERP_CALLS.labels(method, "retried").inc()
                time.sleep(retry_after)
                return self._request(method, path, params, json, retries + 1)
            ERP_CALLS.labels(method, "error").inc()
            raise ERPNextRateLimitError(
                "Rate limit exceeded",
                status_code=429,
            )

        if response.status_code >= 400:
            ERP_CALLS.labels(method, "error").inc()
            error_msg, error_data = _error_message(response)
            exc_type = (error_data or {}).get("exc_type")

            # Handle auth errors
            if response.status_code == 401:
                raise ERPNextAuthError(
                    "Authentication failed - check API key and secret",
                    status_code=401,
                    response=error_data,
                    exc_type=exc_type,
                )

            if response.status_code == 403:
                raise ERPNextAuthError(
                    f"Access denied - {error_msg}",
                    status_code=403,
                    response=error_data,
                    exc_type=exc_type,
                )

            # Handle not found
            if response.status_code == 404 or exc_type == "DoesNotExistError":
                raise ERPNextNotFoundError(
                    error_msg,
                    status_code=404,
                    response=error_data,
                    exc_type=exc_type,
                )

            # Handle other errors
            raise ERPNextError(
                error_msg,
                status_code=response.status_code,
                response=error_data,
                exc_type=exc_type,
            )

        ERP_CALLS.labels(method, "ok").inc()
        return response.json()

    def call_method(self, method: str, args: dict | None = None) -> Any:
        """Call a whitelisted API method with a POST body.

        Args:
            method: Full method path (e.g., "frappe.client.insert")
            args: Method arguments

        Returns:
            The ``message`` payload of the response
        """
        path = f"/api/method/{method}"
        result = self._request("POST", path, json=args or {})
        return result.get("message", result)

    def get_method(self, method: str, params: dict | None = None) -> Any:
        """Call a whitelisted read-only method with query parameters."""
        path = f"/api/method/{method}"
        encoded: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if value is None:
                continue
            encoded[key] = json.dumps(value) if isinstance(value, (dict, list)) else value
        result = self._request("GET", path, params=encoded)
        return result.get("message", result)

    def get_doc(self, doctype: str, name: str) -> dict[str, Any]:
        """Get a single document by name.

        Args:
            doctype: ERPNext doctype (e.g., "Sales Invoice", "Asset")
            name: Document name/ID

        Returns:
            Full document dict including child tables

        Raises:
            ERPNextNotFoundError: If the document does not exist
        """
        doc = self.get_method("frappe.client.get", {"doctype": doctype, "name": name})
        if not doc:
            raise ERPNextNotFoundError(f"{doctype} {name} not found", status_code=404)
        return doc

    def get_list(
        self,
        doctype: str,
        fields: list[str] | None = None,
        filters: dict | list | None = None,
        order_by: str | None = None,
        limit_start: int = 0,
        limit_page_length: int | None = None,
        parent: str | None = None,
    ) -> list[dict[str, Any]]:
        """Get a list of documents.

        Args:
            doctype: ERPNext doctype
            fields: Fields to return (default: ["name"])
            filters: Filter conditions, dict or list of [field, op, value]
            order_by: Sort order (e.g., "creation desc")
            limit_start: Offset for pagination
            limit_page_length: Number of records to return
            parent: Parent doctype, required when listing child tables

        Returns:
            List of document dicts
        """
        result = self.get_method(
            "frappe.client.get_list",
            {
                "doctype": doctype,
                "fields": fields or ["name"],
                "filters": filters or None,
                "order_by": order_by,
                "limit_start": limit_start,
                "limit_page_length": self.page_size if limit_page_length is None else limit_page_length,
                "parent": parent,
            },
        )
        return result or []

    def get_all(
        self,
        doctype: str,
        fields: list[str] | None = None,
        filters: dict | list | None = None,
        order_by: str | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Get all documents with automatic pagination.

        Yields documents one at a time, handling pagination automatically.

        Args:
            doctype: ERPNext doctype
            fields: Fields to return
            filters: Filter conditions
            order_by: Sort order

        Yields:
            Document dicts
        """
        offset = 0
        while True:
            batch = self.get_list(
                doctype=doctype,
                fields=fields,
                filters=filters,
                order_by=order_by,
                limit_start=offset,
                limit_page_length=self.page_size,
            )

            if not batch:
                break

            yield from batch

            if len(batch) < self.page_size:
                break

            offset += self.page_size
            logger.debug("erpnext_pagination doctype=%s offset=%s", doctype, offset)

    def get_count(self, doctype: str, filters: dict | list | None = None) -> int:
        """Get count of documents matching filters.

        Args:
            doctype: ERPNext doctype
            filters: Filter conditions

        Returns:
            Count of matching documents
        """
        result = self.get_method("frappe.client.get_count", {"doctype": doctype, "filters": filters or None})
        return int(result or 0)

    def get_value(
        self,
        doctype: str,
        fieldname: str | list[str],
        filters: dict | str,
    ) -> dict[str, Any]:
        """Read one or more fields of a single document.

        Returns an empty dict when no document matches.
        """
        result = self.get_method(
            "frappe.client.get_value",
            {"doctype": doctype, "fieldname": fieldname, "filters": filters},
        )
        return result or {}

    def insert(self, doc: dict[str, Any]) -> dict[str, Any]:
        """Insert a new document. ``doc`` must carry its ``doctype``."""
        return self.call_method("frappe.client.insert", {"doc": doc})

    def save(self, doc: dict[str, Any]) -> dict[str, Any]:
        """Save an existing document. ``doc`` must carry ``doctype`` and ``name``."""
        return self.call_method("frappe.client.save", {"doc": doc})

    def submit(self, doc: dict[str, Any]) -> dict[str, Any]:
        """Submit a draft document (docstatus 0 -> 1)."""
        return self.call_method("frappe.client.submit", {"doc": doc})

    def delete(self, doctype: str, name: str) -> None:
        """Delete a document by name."""
        self.call_method("frappe.client.delete", {"doctype": doctype, "name": name})

    def get_logged_user(self) -> str:
        """Return the user the API credentials authenticate as."""
        return self.get_method("frappe.auth.get_logged_user")

    def test_connection(self) -> bool:
        """Test API connection and authentication.

        Returns:
            True if connection successful

        Raises:
            ERPNextError: If connection fails
        """
        user = self.get_logged_user()
        if not user:
            raise ERPNextAuthError("Authentication required", status_code=401)
        logger.info("erpnext_connected user=%s", user)
        return True
