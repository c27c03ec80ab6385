"""Adapters for the external services the build depends on."""
