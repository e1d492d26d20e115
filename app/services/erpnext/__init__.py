"""ERPNext integration module.

Provides access to the remote Frappe/ERPNext document API:
- client: HTTP client with token auth, typed errors and retry on 429/timeouts
- fetcher: two-step listing that expands names into full documents
- mappers: remote field names translated to and from API field names
"""

from app.services.erpnext.client import (
    ERPNextAuthError,
    ERPNextClient,
    ERPNextConfigError,
    ERPNextError,
    ERPNextNotFoundError,
    ERPNextRateLimitError,
)
from app.services.erpnext.fetcher import (
    FetchedDocuments,
    fetch_all_documents,
    fetch_documents,
    list_documents,
    list_names,
)

__all__ = [
    "ERPNextClient",
    "ERPNextError",
    "ERPNextAuthError",
    "ERPNextNotFoundError",
    "ERPNextRateLimitError",
    "ERPNextConfigError",
    "FetchedDocuments",
    "list_names",
    "fetch_documents",
    "list_documents",
    "fetch_all_documents",
]
