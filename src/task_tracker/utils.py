from __future__ import annotations

from typing import Any, Dict, Optional

DEFAULT_ERROR_MESSAGE = "Internal server error"


# PUBLIC_INTERFACE
def success_envelope(data: Any, **extra: Any) -> Dict[str, Any]:
    """
    Build the standard success envelope.

    Args:
        data: The payload (a task or a list of tasks).
        extra: Additional top-level keys, e.g. totalCount for list responses.

    Returns:
        Dict with keys: success, data and any extra keys.
    """
    envelope: Dict[str, Any] = {"success": True, "data": data}
    envelope.update(extra)
    return envelope


# PUBLIC_INTERFACE
def error_envelope(message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Build the standard failure envelope; an empty message becomes the generic one."""
    envelope: Dict[str, Any] = {"success": False, "message": message or DEFAULT_ERROR_MESSAGE}
    envelope.update(extra)
    return envelope


# PUBLIC_INTERFACE
def status_for(exc: BaseException) -> int:
    """Status code carried by an error, or 500 when it carries none."""
    code = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if isinstance(code, int) and not isinstance(code, bool) and 400 <= code <= 599:
        return code
    return 500
