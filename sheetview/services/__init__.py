"""
Service layer for the viewer.

Contains the filtering and pagination engine and the session that
orchestrates it, decoupled from transport layers (HTTP/MCP).
"""

from sheetview.services.viewer_session import ViewerSession

__all__ = [
    "ViewerSession",
]
