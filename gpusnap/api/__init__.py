"""FastAPI application for serving GPU snapshots."""

from .app import create_app, router

__all__ = ["create_app", "router"]
