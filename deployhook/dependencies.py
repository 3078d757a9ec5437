"""FastAPI dependencies that hand out the components built by ``create_app``."""

import logging

from fastapi import Request

from deployhook.classifier import RequestClassifier
from deployhook.config import Settings
from deployhook.deploy import DeploymentTrigger


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_classifier(request: Request) -> RequestClassifier:
    return request.app.state.classifier


def get_trigger(request: Request) -> DeploymentTrigger:
    return request.app.state.trigger


def get_log_sink(request: Request) -> logging.Logger:
    return request.app.state.logger
