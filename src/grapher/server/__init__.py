"""
HTTP service exposing the expression engine and curve analysis.
"""

from .app import create_app, main
from .router import create_analysis_router

__all__ = ["create_app", "create_analysis_router", "main"]
