"""n8nlink API routes."""

from . import health, resources, tools

__all__ = [
    "health",
    "resources",
    "tools",
]
