"""Inbound webhook validation.

``RequestClassifier.classify`` walks a request through a fixed sequence of
gates and either returns a ``VerifiedEvent`` or raises ``WebhookRejected``
for the first gate that fails:

    method -> route -> tenant -> secret -> payload size -> signature -> event

Content-Type is only advisory: GitHub always sends a JSON body, so an
unexpected header value is logged and processing continues.
"""

import json
import logging
import re
from typing import Mapping

from deployhook.errors import RejectionReason, WebhookRejected
from deployhook.models import UNKNOWN, EventKind, PushEnvelope, VerifiedEvent
from deployhook.signature import SIGNATURE_HEADER, verify_signature
from deployhook.store import BaseConfigStore

EVENT_HEADER = "X-GitHub-Event"
ROUTE_PATTERN = re.compile(r"/webhook/([A-Za-z0-9_-]+)/?")
DEFAULT_MAX_PAYLOAD_BYTES = 10 * 1024 * 1024


def _header(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup for plain dicts and Starlette headers alike."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


class RequestClassifier:
    def __init__(
        self,
        store: BaseConfigStore,
        logger: logging.Logger,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
    ):
        self.store = store
        self.logger = logger
        self.max_payload_bytes = max_payload_bytes

    def _reject(self, reason: RejectionReason, message: str, log_message: str) -> WebhookRejected:
        self.logger.warning(log_message)
        return WebhookRejected(reason, message)

    def classify(
        self, method: str, path: str, headers: Mapping[str, str], body: bytes
    ) -> VerifiedEvent:
        if method != "POST":
            raise self._reject(
                RejectionReason.METHOD_NOT_ALLOWED,
                "Method not allowed. Use POST.",
                f"Invalid request method: {method}",
            )

        content_type = _header(headers, "Content-Type")
        if "json" not in content_type.lower():
            self.logger.warning(f"Unexpected Content-Type: {content_type!r} (continuing anyway)")

        match = ROUTE_PATTERN.fullmatch(path)
        if not match:
            raise self._reject(
                RejectionReason.BAD_ROUTE,
                "Invalid webhook URL. Expected /webhook/<app>",
                f"Invalid webhook URL: {path!r}",
            )
        tenant = match.group(1)
        self.logger.info(f"Webhook received for: {tenant}")

        if not self.store.tenant_exists(tenant):
            raise self._reject(
                RejectionReason.TENANT_NOT_FOUND, "App not found", f"App not found: {tenant}"
            )

        secret = self.store.get_secret(tenant)
        if not secret:
            raise self._reject(
                RejectionReason.TENANT_NOT_CONFIGURED,
                "Webhook not configured for this app",
                f"No webhook secret configured for: {tenant}",
            )

        if not body:
            raise self._reject(
                RejectionReason.EMPTY_PAYLOAD, "Empty payload", f"Empty payload received for: {tenant}"
            )

        if len(body) > self.max_payload_bytes:
            limit_mb = self.max_payload_bytes // (1024 * 1024)
            raise self._reject(
                RejectionReason.PAYLOAD_TOO_LARGE,
                f"Payload too large. Maximum size is {limit_mb}MB.",
                f"Payload too large for: {tenant} (size: {len(body)})",
            )

        if not verify_signature(body, secret, _header(headers, SIGNATURE_HEADER)):
            raise self._reject(
                RejectionReason.INVALID_SIGNATURE, "Invalid signature", f"Invalid signature for: {tenant}"
            )
        self.logger.info(f"Signature validated for: {tenant}")

        event = _header(headers, EVENT_HEADER) or UNKNOWN
        if event == EventKind.PING.value:
            return VerifiedEvent(tenant=tenant, kind=EventKind.PING, event=event)
        if event != EventKind.PUSH.value:
            return VerifiedEvent(tenant=tenant, kind=EventKind.OTHER, event=event)

        try:
            data = json.loads(body)
        except (ValueError, RecursionError) as e:
            reason = "Maximum nesting depth exceeded" if isinstance(e, RecursionError) else str(e)
            raise self._reject(
                RejectionReason.INVALID_JSON,
                f"Invalid JSON payload: {reason}",
                f"Invalid JSON payload for: {tenant} - {reason}",
            )

        return VerifiedEvent(
            tenant=tenant, kind=EventKind.PUSH, event=event, push=PushEnvelope.from_payload(data)
        )
