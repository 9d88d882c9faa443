"""HTTP transport for the processing and indicator operations."""

from marketdata.api.app import create_app

__all__ = ["create_app"]
