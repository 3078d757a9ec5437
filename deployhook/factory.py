"""Application factory - wires the webhook pipeline onto a FastAPI app."""

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from deployhook import __version__
from deployhook.classifier import RequestClassifier
from deployhook.config import Settings, settings as default_settings
from deployhook.deploy import DeploymentTrigger
from deployhook.errors import (
    WebhookRejected,
    method_not_allowed_handler,
    rate_limit_exceeded_handler,
    webhook_rejected_handler,
)
from deployhook.logs import configure_logging
from deployhook.routers import health, webhook
from deployhook.store import JsonConfigStore


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    logger = configure_logging(settings.log_file, settings.log_level)

    app = FastAPI(
        title="deployhook",
        description="GitHub webhook receiver that deploys apps on push",
        version=__version__,
        debug=settings.debug,
    )

    store = JsonConfigStore(settings.apps_file, settings.webhooks_file, logger)
    app.state.settings = settings
    app.state.logger = logger
    app.state.classifier = RequestClassifier(store, logger, settings.max_payload_bytes)
    app.state.trigger = DeploymentTrigger(
        settings.home_root, settings.deploy_script, logger, sudo_path=settings.sudo_path
    )

    # Rate limiting
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.webhook_rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    if settings.rate_limit_enabled:
        app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(WebhookRejected, webhook_rejected_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    app.include_router(health.router)
    app.include_router(webhook.router)
    return app
