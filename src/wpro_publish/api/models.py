"""Pydantic models for component documents and API payloads."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class UploadOutcome(str, Enum):
    """How the component upload step ended."""

    CREATED_VIA_POST = "created_via_post"
    UPDATED_VIA_PUT = "updated_via_put"
    FAILED_BOTH = "failed_both"

    @property
    def succeeded(self) -> bool:
        return self is not UploadOutcome.FAILED_BOTH


class PublishRequest(BaseModel):
    """Payload sent to the component prototype resource."""

    group_data: dict[Any, Any] = Field(alias="groupData")
    group_id: str = Field(alias="groupId")
    type: str

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the API."""
        return self.model_dump(mode="json", by_alias=True)


class ComponentDocument(BaseModel):
    """Component definition parsed from a YAML file.

    Only ``groupId`` and ``settings`` are read; other top-level keys are ignored.
    """

    group_id: str = Field(alias="groupId", min_length=1)
    settings: dict[Any, Any] = Field(min_length=1)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("group_id", mode="before")
    @classmethod
    def _coerce_group_id(cls, value: Any) -> Any:
        # YAML turns bare numeric identifiers into int/float
        if isinstance(value, bool):
            raise ValueError("groupId must be a string or number")
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def to_request(self, component_type: str) -> PublishRequest:
        return PublishRequest(group_data=self.settings, group_id=self.group_id, type=component_type)
