"""HTTP service exposing report parsing."""

from cov.server.app import create_app, serve

__all__ = ["create_app", "serve"]
