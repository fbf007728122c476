"""
Grapher analysis server.

Serves expression evaluation and asymptote/hole detection over HTTP using
FastAPI.

Environment variables:
    GRAPHER_APP_HOST - Host to bind to (default: 0.0.0.0)
    GRAPHER_APP_PORT - Port to listen on (default: 8098)
    GRAPHER_LOG_LEVEL - Log level (debug, info, warning, error)
    GRAPHER_DETECTION_CONFIG - Optional YAML or JSON file with detection thresholds

Usage:
    python -m grapher.server
    GRAPHER_DETECTION_CONFIG=./detection.yaml GRAPHER_APP_PORT=9000 python -m grapher.server
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI

from grapher import __version__
from grapher.analysis import (
    DEFAULT_DETECTION_THRESHOLDS,
    DetectionThresholds,
    load_detection_thresholds,
)
from grapher.server.router import create_analysis_router

ENV_VAR_LOG_LEVEL = "GRAPHER_LOG_LEVEL"
ENV_VAR_APP_HOST = "GRAPHER_APP_HOST"
ENV_VAR_APP_PORT = "GRAPHER_APP_PORT"
ENV_VAR_DETECTION_CONFIG = "GRAPHER_DETECTION_CONFIG"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8098

logger = logging.getLogger(__name__)


def thresholds_from_env() -> DetectionThresholds:
    """Loads detection thresholds from GRAPHER_DETECTION_CONFIG, if set."""
    config_path = os.getenv(ENV_VAR_DETECTION_CONFIG)
    if not config_path:
        return DEFAULT_DETECTION_THRESHOLDS

    thresholds = load_detection_thresholds(config_path)
    logger.info("detection_config_loaded", extra={"path": config_path})
    return thresholds


def create_app(thresholds: Optional[DetectionThresholds] = None) -> FastAPI:
    """Create and return a FastAPI application for curve analysis."""
    app = FastAPI(
        title="Grapher Analysis Server",
        description="Evaluates expressions and detects asymptotes and holes",
        version=__version__,
    )
    app.include_router(
        create_analysis_router(thresholds=thresholds or DEFAULT_DETECTION_THRESHOLDS)
    )
    return app


def main() -> None:
    logging.basicConfig(
        level=os.getenv(ENV_VAR_LOG_LEVEL, "warning").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    host = os.getenv(ENV_VAR_APP_HOST, DEFAULT_HOST)
    port = int(os.getenv(ENV_VAR_APP_PORT, str(DEFAULT_PORT)))

    app = create_app(thresholds_from_env())
    logger.info("starting_analysis_server", extra={"host": host, "port": port})
    uvicorn.run(app, host=host, port=port, log_level=os.getenv(ENV_VAR_LOG_LEVEL, "warning").lower())
