"""CueLine REST API."""

from cueline.api.app import create_app

__all__ = ["create_app"]
