# bloglist/__init__.py

"""REST API for a small blog: posts, users and token-based login."""

from .main import create_app

__all__ = ["create_app"]
