"""deployhook - FastAPI application entry point (``uvicorn deployhook.main:app``)."""

from deployhook.factory import create_app

app = create_app()
