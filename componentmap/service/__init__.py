"""Live-inspection service exposing the component manifest."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
