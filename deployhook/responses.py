"""JSON response envelope shared by every webhook reply."""

from fastapi.responses import JSONResponse


def webhook_response(
    status_code: int, message: str, headers: dict[str, str] | None = None, **details
) -> JSONResponse:
    """Render ``{"status", "message", **details}``; status is "error" for codes >= 400."""
    body = {"status": "error" if status_code >= 400 else "success", "message": message, **details}
    return JSONResponse(status_code=status_code, content=body, headers=headers)
