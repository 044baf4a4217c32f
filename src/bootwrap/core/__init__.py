"""Core models, settings and exceptions."""
