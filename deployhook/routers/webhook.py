"""Webhook endpoint - validates pushes and deploys after the response is sent."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from deployhook.classifier import RequestClassifier
from deployhook.deploy import DeploymentTrigger, run_deployment
from deployhook.dependencies import get_classifier, get_log_sink, get_trigger
from deployhook.models import EventKind, VerifiedEvent
from deployhook.responses import webhook_response

router = APIRouter(tags=["webhook"])

# Every path and common method is routed here so the classifier, not the framework,
# answers 400 and 405. Other verbs are handled by errors.method_not_allowed_handler.
WEBHOOK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def route_path(request: Request) -> str:
    """Request path relative to the mount point, so ``--root-path`` deployments still match."""
    path = request.scope["path"]
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path) and path[len(root_path) : len(root_path) + 1] in ("", "/"):
        return path[len(root_path) :] or "/"
    return path


async def read_body(request: Request, limit: int) -> bytes:
    """Read at most ``limit + 1`` bytes; enough to tell an oversized body without buffering all of it."""
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        chunks.append(chunk)
        size += len(chunk)
        if size > limit:
            break
    return b"".join(chunks)[: limit + 1]


def respond(
    event: VerifiedEvent,
    background_tasks: BackgroundTasks,
    trigger: DeploymentTrigger,
    logger: logging.Logger,
) -> JSONResponse:
    tenant = event.tenant

    if event.kind is EventKind.PING:
        logger.info(f"Ping received for: {tenant}")
        return webhook_response(200, "Pong! Webhook configured successfully.", app=tenant)

    if event.kind is EventKind.OTHER:
        logger.info(f"Ignoring event type '{event.event}' for: {tenant}")
        return webhook_response(
            200, f"Event '{event.event}' acknowledged but not processed.", app=tenant, event=event.event
        )

    push = event.push
    logger.info(f"Push event: {push.repository} ({push.ref}) by {push.pusher}")
    # Starlette runs background tasks only once the response has been sent
    background_tasks.add_task(run_deployment, trigger, tenant, logger)
    return webhook_response(
        200, "Deployment started", app=tenant, ref=push.ref, repository=push.repository
    )


@router.api_route("/{request_path:path}", methods=WEBHOOK_METHODS)
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    classifier: RequestClassifier = Depends(get_classifier),
    trigger: DeploymentTrigger = Depends(get_trigger),
    logger: logging.Logger = Depends(get_log_sink),
):
    """Receive a GitHub webhook for an app and deploy it on push."""
    body = await read_body(request, classifier.max_payload_bytes)
    event = classifier.classify(request.method, route_path(request), request.headers, body)
    return respond(event, background_tasks, trigger, logger)
