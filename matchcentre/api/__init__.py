"""
FastAPI application exposing the catalog read API.
"""

__all__ = ["app"]


def __getattr__(name):
    if name == "app":
        from .app import app as _app

        return _app
    raise AttributeError(f"module 'matchcentre.api' has no attribute '{name}'")
