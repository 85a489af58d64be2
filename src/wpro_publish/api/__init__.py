"""WPRO API client and payload models."""

from .client import STATUS_MESSAGES, WproClient, describe_status
from .models import ComponentDocument, PublishRequest, UploadOutcome

__all__ = [
    "STATUS_MESSAGES",
    "WproClient",
    "describe_status",
    "ComponentDocument",
    "PublishRequest",
    "UploadOutcome",
]
