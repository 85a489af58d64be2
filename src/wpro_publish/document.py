"""Loading and validation of component YAML files."""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from .api.models import ComponentDocument
from .errors import DocumentError

logger = logging.getLogger(__name__)


def load_document(path: Path) -> ComponentDocument:
    """
    Read a component YAML file and validate its required keys.

    The whole file is read and parsed at once. ``settings`` must be a
    non-empty mapping and ``groupId`` a non-empty identifier; every other
    top-level key is ignored.

    Args:
        path: Path to the YAML file

    Returns:
        The parsed component document

    Raises:
        DocumentError: If the file cannot be read, is empty, is not valid
            YAML, or lacks ``settings`` / ``groupId``
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentError(f"Component file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Failed to read component file {path}: {e}") from e

    if not text:
        raise DocumentError("Failed loading yaml file, aborting publish!")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML in {path}: {e}") from e

    return parse_document(data)


def parse_document(data: object) -> ComponentDocument:
    """Validate already-parsed YAML data as a component document."""
    if not isinstance(data, Mapping) or not data.get("settings"):
        raise DocumentError("No groupData present in the returned file, aborting publish!")

    settings = data["settings"]
    if not isinstance(settings, Mapping):
        raise DocumentError(f"'settings' must be a mapping, got {type(settings).__name__}")

    group_id = data.get("groupId")
    if group_id is None or group_id == "":
        raise DocumentError("No groupId present in the returned file, aborting publish!")

    try:
        document = ComponentDocument.model_validate({"groupId": group_id, "settings": dict(settings)})
    except ValidationError as e:
        raise DocumentError(f"Invalid component document: {e}") from e

    logger.debug("Loaded component %s with %d settings", document.group_id, len(document.settings))
    return document
