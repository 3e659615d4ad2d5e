"""Concrete adapters for external services."""
