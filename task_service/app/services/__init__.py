"""Service layer for Task Service."""
