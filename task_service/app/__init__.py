"""Task Service - microservice for task management."""

__version__ = "1.0.0"
