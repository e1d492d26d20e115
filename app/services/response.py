from typing import Any

DEFAULT_MESSAGE = "Request successful"


def envelope(data: Any, message: str | None = DEFAULT_MESSAGE) -> dict[str, Any]:
    """Wrap a payload in the ``{success, data, message}`` response envelope."""
    return {"success": True, "data": data, "message": message}


def error_envelope(error: str, details: Any = None, status_code: int | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": error, "details": details}
    if status_code is not None:
        payload["status_code"] = status_code
    return payload
