from fastapi import Depends, HTTPException

from app.logging import get_logger
from app.services.erpnext.client import ERPNextClient, ERPNextConfigError, ERPNextError

logger = get_logger(__name__)


def get_erp_client() -> ERPNextClient:
    """Per-request ERP client built from settings.

    Override this dependency in tests to inject a mock client.
    """
    return ERPNextClient.from_settings()


def require_erp_auth(client: ERPNextClient = Depends(get_erp_client)) -> None:
    """Reject the request unless the configured API credentials authenticate."""
    try:
        client.test_connection()
    except ERPNextConfigError:
        raise
    except ERPNextError as exc:
        logger.warning("erp_auth_failed status=%s error=%s", exc.status_code, exc.message)
        raise HTTPException(status_code=401, detail="Authentication required") from exc
