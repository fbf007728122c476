"""
FastAPI router exposing expression evaluation and curve analysis.

Endpoints are plain (non-async) functions: detection is CPU bound and
FastAPI runs such handlers in its thread pool, keeping the event loop free.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from grapher.analysis import (
    DEFAULT_DETECTION_THRESHOLDS,
    DetectionThresholds,
    describe_features,
    detect_features,
    summarize_features,
)
from grapher.expr import CompiledExpression, ExpressionError, compile_expression
from grapher.server.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    EvaluateRequest,
    EvaluateResponse,
    FeatureModel,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "/grapher/v1"


def _compile_or_400(expression: str) -> CompiledExpression:
    try:
        return compile_expression(expression)
    except ExpressionError as e:
        logger.info(
            "invalid_expression",
            extra={"expression": expression, "error": e.message, "position": e.position},
        )
        raise HTTPException(
            status_code=400,
            detail={
                "error": type(e).__name__,
                "message": e.message,
                "position": e.position,
            },
        )


def create_analysis_router(
    *,
    thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
    prefix: str = DEFAULT_PREFIX,
) -> APIRouter:
    """Create FastAPI router for the analysis service."""
    router = APIRouter(prefix=prefix, tags=["Curve Analysis"])

    @router.get("/health")
    def health_check():
        """Health check endpoint for the analysis service."""
        return {"status": "healthy", "service": "grapher"}

    @router.post("/evaluate", response_model=EvaluateResponse)
    def evaluate_points(request: EvaluateRequest):
        """
        Evaluate an expression at each of the given points.

        Points where the function is undefined (division by zero, log of a
        negative number, unbound names) are returned as null.
        """
        compiled = _compile_or_400(request.expression)
        values = [compiled.evaluate_at(x, request.variable) for x in request.xs]
        return EvaluateResponse(
            expression=request.expression,
            normalized=compiled.source,
            values=values,
        )

    @router.post("/analyze", response_model=AnalyzeResponse)
    def analyze(request: AnalyzeRequest):
        """
        Detect vertical asymptotes, horizontal asymptotes and holes of an
        expression within a view window.
        """
        compiled = _compile_or_400(request.expression)
        features = detect_features(compiled, request.window.to_window(), thresholds)

        logger.debug(
            "expression_analyzed",
            extra={
                "expression": request.expression,
                "asymptotes": len(features.asymptotes),
                "holes": len(features.holes),
            },
        )

        return AnalyzeResponse(
            expression=request.expression,
            normalized=compiled.source,
            asymptotes=[FeatureModel.from_feature(a) for a in features.asymptotes],
            holes=[FeatureModel.from_feature(h) for h in features.holes],
            descriptions=describe_features(features),
            badges=summarize_features(features),
            complete=features.complete,
        )

    return router
