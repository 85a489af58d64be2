"""Publish page component prototypes to a WPRO REST API."""

__version__ = "0.1.0"
