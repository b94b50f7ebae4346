"""n8nlink CLI commands."""
