"""
Task Tracker backend package.

Exposes the application factory at package level:
    from task_tracker import create_app
"""

from .main import create_app  # noqa: F401

__all__ = ["create_app"]
