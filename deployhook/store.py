"""Tenant configuration store.

Tenants and their webhook secrets are owned by the host provisioning tools;
this service only reads them. Every lookup re-reads the source, so edits made
while the service is running apply to the next request.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class BaseConfigStore(ABC):
    """Read-only tenant lookups."""

    @abstractmethod
    def tenant_exists(self, tenant: str) -> bool:
        """Return True if ``tenant`` is a known deployment target."""
        pass

    @abstractmethod
    def get_secret(self, tenant: str) -> bytes | None:
        """Return the tenant's webhook secret, or None if webhooks are not enabled for it."""
        pass


class JsonConfigStore(BaseConfigStore):
    """Store backed by two JSON documents keyed by tenant id.

    ``apps_file``:     {"bob": {...}, ...}
    ``webhooks_file``: {"bob": {"secret": "..."}, ...}

    An unreadable or malformed file is treated as empty, so the request
    pipeline sees "not found" instead of an exception.
    """

    def __init__(self, apps_file: Path, webhooks_file: Path, logger: logging.Logger):
        self.apps_file = Path(apps_file)
        self.webhooks_file = Path(webhooks_file)
        self.logger = logger

    def _load(self, path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self.logger.warning(f"Config file not found: {path}")
            return {}
        except (OSError, ValueError) as e:
            self.logger.warning(f"Config file unreadable: {path} ({e})")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Config file is not a JSON object: {path}")
            return {}
        return data

    def tenant_exists(self, tenant: str) -> bool:
        return tenant in self._load(self.apps_file)

    def get_secret(self, tenant: str) -> bytes | None:
        entry = self._load(self.webhooks_file).get(tenant)
        if not isinstance(entry, dict):
            return None
        secret = entry.get("secret")
        if not isinstance(secret, str) or not secret:
            return None
        return secret.encode("utf-8")
