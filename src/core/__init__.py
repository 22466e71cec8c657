"""Shared core models, configuration, errors and logging."""
