"""n8nlink HTTP API.

Serves the agent tools and n8n:// resources over FastAPI.
"""

from .app import create_app

__all__ = ["create_app"]
