"""User Service - microservice for user management."""

__version__ = "1.0.0"
