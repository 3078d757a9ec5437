"""Webhook rejection taxonomy and the exception handlers that render it."""

from enum import Enum

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from deployhook.responses import webhook_response


class RejectionReason(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    BAD_ROUTE = "bad_route"
    TENANT_NOT_FOUND = "tenant_not_found"
    TENANT_NOT_CONFIGURED = "tenant_not_configured"
    EMPTY_PAYLOAD = "empty_payload"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_JSON = "invalid_json"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    RejectionReason.METHOD_NOT_ALLOWED: 405,
    RejectionReason.BAD_ROUTE: 400,
    RejectionReason.TENANT_NOT_FOUND: 404,
    RejectionReason.TENANT_NOT_CONFIGURED: 401,
    RejectionReason.EMPTY_PAYLOAD: 400,
    RejectionReason.PAYLOAD_TOO_LARGE: 413,
    RejectionReason.INVALID_SIGNATURE: 401,
    RejectionReason.INVALID_JSON: 400,
}


class WebhookRejected(Exception):
    """Raised by the classifier when a request fails one of its gates."""

    def __init__(self, reason: RejectionReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    @property
    def status_code(self) -> int:
        return self.reason.status_code


async def webhook_rejected_handler(request: Request, exc: WebhookRejected) -> JSONResponse:
    headers = {"Allow": "POST"} if exc.reason is RejectionReason.METHOD_NOT_ALLOWED else None
    return webhook_response(exc.status_code, exc.message, headers=headers)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # slowapi's middleware calls this synchronously
    return webhook_response(429, f"Rate limit exceeded: {exc.detail}")


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Give framework-level 405s (verbs no route accepts) the same body and Allow header as the classifier's."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    request.app.state.logger.warning(f"Invalid request method: {request.method}")
    return webhook_response(405, "Method not allowed. Use POST.", headers={"Allow": "POST"})
