"""Webhook event and deployment outcome models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

UNKNOWN = "unknown"


class EventKind(str, Enum):
    PING = "ping"
    PUSH = "push"
    OTHER = "other"


class DeploymentError(str, Enum):
    SCRIPT_NOT_FOUND = "script_not_found"
    DEPLOYMENT_FAILED = "deployment_failed"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else UNKNOWN


def _nested(data: dict, key: str, field: str) -> Any:
    inner = data.get(key)
    return inner.get(field) if isinstance(inner, dict) else None


class PushEnvelope(BaseModel):
    """The parts of a push payload that get logged and echoed back."""
    model_config = ConfigDict(frozen=True)

    ref: str = UNKNOWN
    pusher: str = UNKNOWN
    repository: str = UNKNOWN

    @classmethod
    def from_payload(cls, data: Any) -> "PushEnvelope":
        """Build an envelope from decoded JSON, substituting "unknown" for anything missing or not a string."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            ref=_text(data.get("ref")),
            pusher=_text(_nested(data, "pusher", "name")),
            repository=_text(_nested(data, "repository", "full_name")),
        )


class VerifiedEvent(BaseModel):
    """A request whose signature has been checked against the tenant secret."""
    model_config = ConfigDict(frozen=True)

    tenant: str
    kind: EventKind
    event: str
    push: PushEnvelope | None = None


class DeploymentOutcome(BaseModel):
    success: bool
    output: str = ""
    error: DeploymentError | None = None
    exit_code: int | None = None
