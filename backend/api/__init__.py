"""
IOU API package.

Provides the FastAPI application for the IOU favor tracker.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
