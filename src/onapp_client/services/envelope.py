"""Envelope helpers.

The API wraps every record in a single-key object naming its type, both
ways: ``{"instance_package": {...}}``. Collections are arrays of such
envelopes (``[{"user": {...}}, {"user": {...}}]``), not one wrapper around
a flat array.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import OnAppAPIError
from ..models.common import OnAppRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


def wrap(key: str, payload: OnAppRequest | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(payload, OnAppRequest):
        return {key: payload.to_payload()}
    return {key: dict(payload)}


def _parse(model: type[ModelT], key: str, data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise OnAppAPIError(0, f"malformed {key} record: {e.error_count()} validation errors") from e


def unwrap(payload: Any, key: str, model: type[ModelT]) -> ModelT:
    if not isinstance(payload, dict) or key not in payload:
        raise OnAppAPIError(0, f"expected {{{key!r}: ...}} envelope in response")
    return _parse(model, key, payload[key])


def unwrap_list(payload: Any, key: str, model: type[ModelT]) -> list[ModelT]:
    """Unwrap a list of envelopes, preserving server order."""
    if not isinstance(payload, list):
        raise OnAppAPIError(
            0, f"expected list of {key!r} envelopes, got {type(payload).__name__}"
        )
    return [unwrap(item, key, model) for item in payload]
