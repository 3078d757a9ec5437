import os
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deployhook import __version__
from deployhook.config import Settings
from deployhook.dependencies import get_settings


router = APIRouter(tags=["health"])

_startup_time = datetime.now(timezone.utc)


class SourceStatus(BaseModel):
    path: str
    readable: bool
    status: str


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    sources: dict[str, SourceStatus]


def _check_source(path: Path) -> SourceStatus:
    if not path.is_file():
        return SourceStatus(path=str(path), readable=False, status="missing")
    if not os.access(path, os.R_OK):
        return SourceStatus(path=str(path), readable=False, status="not readable")
    return SourceStatus(path=str(path), readable=True, status="ok")


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    uptime = (datetime.now(timezone.utc) - _startup_time).total_seconds()
    sources = {
        "apps_file": _check_source(settings.apps_file),
        "webhooks_file": _check_source(settings.webhooks_file),
    }

    return HealthResponse(
        status="ok" if all(s.readable for s in sources.values()) else "degraded",
        version=__version__,
        uptime_seconds=round(uptime, 2),
        sources=sources,
    )
