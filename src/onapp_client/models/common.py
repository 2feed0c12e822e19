"""Base classes shared by OnApp request and response records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class OnAppRecord(BaseModel):
    """A record returned by the API.

    Unknown fields are ignored so newer control panels keep parsing.
    Every field is optional because the API omits empty values.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        # The API sends "" for unset timestamps and ids.
        if value == "":
            return None
        return value


class OnAppRequest(BaseModel):
    """A payload sent to the API; unset fields are left out of the body."""

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
