"""n8nlink: expose an n8n instance as agent tools and resources."""

__version__ = "0.1.0"
