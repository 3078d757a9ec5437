"""Shared fixtures for the deployhook test suite.

Every test gets its own config files, log file and tenant home tree under
``tmp_path``; nothing touches /etc, /var/log or /home.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from deployhook.config import Settings
from deployhook.factory import create_app
from deployhook.signature import SIGNATURE_HEADER, sign_payload

SECRET = "s3cr3t-webhook-key"

PUSH_PAYLOAD = {
    "ref": "refs/heads/main",
    "pusher": {"name": "alice"},
    "repository": {"full_name": "org/repo"},
}


@pytest.fixture
def apps_file(tmp_path: Path) -> Path:
    path = tmp_path / "apps.json"
    # carol exists but has no webhook secret
    path.write_text(json.dumps({"bob": {"domain": "bob.example.com"}, "carol": {}}))
    return path


@pytest.fixture
def webhooks_file(tmp_path: Path) -> Path:
    path = tmp_path / "webhooks.json"
    path.write_text(json.dumps({"bob": {"secret": SECRET}}))
    return path


@pytest.fixture
def home_root(tmp_path: Path) -> Path:
    root = tmp_path / "home"
    script = root / "bob" / "deploy.sh"
    script.parent.mkdir(parents=True)
    script.write_text("#!/bin/sh\necho deployed\n")
    script.chmod(0o755)
    return root


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "log" / "webhook.log"


@pytest.fixture
def settings(apps_file: Path, webhooks_file: Path, home_root: Path, log_file: Path) -> Settings:
    return Settings(
        _env_file=None,
        apps_file=apps_file,
        webhooks_file=webhooks_file,
        log_file=log_file,
        home_root=home_root,
        rate_limit_enabled=False,
    )


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.deployhook")


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def post_webhook(client):
    """Factory that POSTs a GitHub-style signed webhook.

    ``signature`` overrides the computed header; pass "" to omit it.
    """

    def _post(
        path: str = "/webhook/bob",
        body: bytes | dict = b'{"zen": "Design for failure."}',
        event: str | None = "ping",
        secret: str = SECRET,
        signature: str | None = None,
        content_type: str = "application/json",
    ):
        if isinstance(body, dict):
            body = json.dumps(body).encode()
        headers = {"Content-Type": content_type}
        if event is not None:
            headers["X-GitHub-Event"] = event
        sig = sign_payload(body, secret.encode()) if signature is None else signature
        if sig:
            headers[SIGNATURE_HEADER] = sig
        return client.post(path, content=body, headers=headers)

    return _post
