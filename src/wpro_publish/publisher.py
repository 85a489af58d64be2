"""Component upload and service publish steps."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from .api import PublishRequest, UploadOutcome, WproClient, describe_status
from .config import Settings
from .document import load_document
from .errors import ApiError, ServicePublishError

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """Result of a publish run."""

    group_id: str
    upload: UploadOutcome | None = None
    service_published: bool = False
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.dry_run or (self.upload is not None and self.upload.succeeded)


def _log_failure(method: str, error: ApiError) -> None:
    if error.status_code is None:
        logger.error(f"{method} failed: {error}")
    else:
        logger.error(
            f"{method} failed with status {error.status_code}: {describe_status(error.status_code)}"
        )


async def upload_component(client: WproClient, request: PublishRequest) -> UploadOutcome:
    """
    Upload a component, falling back from POST to PUT.

    A failed POST is followed by exactly one PUT of the same payload to the
    component's own resource. Failures of either call are logged, never raised.

    Args:
        client: API client
        request: Payload to upload

    Returns:
        Which call succeeded, or FAILED_BOTH
    """
    try:
        response = await client.create_component(request)
        if response.content:
            logger.info("Component successfully published with POST!")
        return UploadOutcome.CREATED_VIA_POST
    except ApiError as e:
        _log_failure("POST", e)

    logger.info("Attempting to publish component with PUT...")
    try:
        response = await client.update_component(request)
        if response.content:
            logger.info("Component successfully published with PUT!")
        return UploadOutcome.UPDATED_VIA_PUT
    except ApiError as e:
        _log_failure("PUT", e)

    return UploadOutcome.FAILED_BOTH


async def publish_service(client: WproClient) -> bool:
    """
    Trigger the full service publish.

    Returns True only for an HTTP 204 response. A missing service resource is
    a no-op.

    Raises:
        ServicePublishError: If the request fails
    """
    if client.settings.service_publish_resource is None:
        logger.debug("Service publish resource not configured, skipping")
        return False

    try:
        response = await client.publish_service()
    except ApiError as e:
        logger.error("Full service publish failed!")
        raise ServicePublishError(f"Full service publish failed: {e}") from e

    if response.status_code == 204:
        logger.info("Full service publish successful!")
        return True

    logger.warning(
        f"Full service publish returned status {response.status_code}, expected 204; "
        "not reporting it as published"
    )
    return False


async def run_publish(
    settings: Settings,
    path: Path,
    *,
    dry_run: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PublishResult:
    """
    Validate configuration and input, then upload and publish.

    No request is sent until the configuration and the component file have
    both been validated.

    Args:
        settings: Resolved run configuration
        path: Component YAML file
        dry_run: Validate and log the requests without sending them
        transport: Optional httpx transport for the API client

    Raises:
        ConfigurationError: If the URL or token is missing
        DocumentError: If the component file is invalid
        ServicePublishError: If the service publish request fails
    """
    settings.validate_for_publish()
    document = load_document(path)
    request = document.to_request(settings.component_type)
    result = PublishResult(group_id=request.group_id, dry_run=dry_run)

    if dry_run:
        logger.info(f"[DRY-RUN] Would POST {settings.prototype_resource}")
        logger.info(f"[DRY-RUN] Fallback PUT {settings.component_url(request.group_id)}")
        logger.debug(f"[DRY-RUN] Payload: {json.dumps(request.to_payload(), sort_keys=True)}")
        if settings.service_publish_resource:
            logger.info(f"[DRY-RUN] Would POST {settings.service_publish_resource}")
        return result

    async with WproClient(settings, transport=transport) as client:
        result.upload = await upload_component(client, request)
        if not result.upload.succeeded:
            logger.warning("Component upload failed, continuing with service publish")
        result.service_published = await publish_service(client)

    return result
