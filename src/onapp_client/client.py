"""Async HTTP transport for the OnApp REST API.

OnAppClient is the single point of HTTP interaction for the resource
services. It owns the base URL, basic-auth credentials and the ``.json``
format suffix convention, and maps failures onto the error hierarchy in
:mod:`onapp_client.errors`.

There is no module-level client: each OnAppClient either wraps an injected
``httpx.AsyncClient`` (never closed here) or creates and owns one.
No retries are attempted; every call is a single round trip.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .errors import OnAppArgumentError, OnAppTransportError, error_for_status
from .models.common import OnAppRequest
from .observability.logging import get_logger, request_id_ctx
from .observability.metrics import (
    API_REQUEST_DURATION_SECONDS,
    API_REQUESTS_TOTAL,
    resource_label,
)
from .settings import DEFAULT_TIMEOUT_SECONDS, DEFAULT_TRANSACTION_PAGE_SIZE, OnAppSettings

logger = get_logger(__name__)

API_FORMAT = ".json"


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Pagination options for list endpoints."""

    page: int | None = None
    per_page: int | None = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.page is not None:
            params["page"] = str(int(self.page))
        if self.per_page is not None:
            params["per_page"] = str(int(self.per_page))
        return params


def encode_params(
    options: ListOptions | Mapping[str, Any] | None,
) -> dict[str, str]:
    """Encode list options or a plain filter mapping as query parameters.

    ``None`` values are dropped; booleans become ``1``/``0`` the way the
    OnApp API expects them.
    """
    if options is None:
        return {}
    if isinstance(options, ListOptions):
        return options.to_params()

    params: dict[str, str] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[str(key)] = "1" if value else "0"
        else:
            params[str(key)] = str(value)
    return params


def require_id(value: Any, name: str = "id") -> int:
    """Validate an OnApp identifier (an int >= 1) and return it."""
    # bool is an int subclass; True must not pass as id 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise OnAppArgumentError(name, "must be an integer")
    if value < 1:
        raise OnAppArgumentError(name, "cannot be less than 1")
    return value


def require_payload(value: Any, name: str, *, allow_empty: bool = True) -> None:
    """Reject a missing payload, and an empty one unless ``allow_empty``.

    Create calls pass ``allow_empty=False``: a request model with no field
    set, or an empty mapping, would otherwise post an empty envelope.
    """
    if value is None:
        raise OnAppArgumentError(name, "cannot be None")
    if allow_empty:
        return
    if isinstance(value, OnAppRequest):
        empty = not value.to_payload()
    elif isinstance(value, Mapping):
        empty = not value
    else:
        raise OnAppArgumentError(name, "must be a request model or a mapping")
    if empty:
        raise OnAppArgumentError(name, "cannot be empty")


def _extract_message(resp: httpx.Response) -> tuple[str, Any]:
    """Pull a readable message and the raw ``errors`` field out of a response."""
    body = resp.text
    message = body[:200] if body else f"HTTP {resp.status_code}"
    errors: Any = None

    try:
        payload = resp.json()
    except ValueError:
        return message, errors

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, dict):
            # {"errors": {"label": ["can't be blank"]}}
            parts = []
            for field_name, problems in errors.items():
                if isinstance(problems, list):
                    problems = ", ".join(str(p) for p in problems)
                parts.append(f"{field_name} {problems}")
            message = "; ".join(parts) or message
        elif isinstance(errors, list):
            message = "; ".join(str(e) for e in errors) or message
        elif "error" in payload:
            message = str(payload["error"])
        elif "message" in payload:
            message = str(payload["message"])
    return message, errors


class OnAppClient:
    """Minimal async OnApp API client authenticated with basic auth."""

    def __init__(
        self,
        *,
        base_url: str,
        user: str,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transaction_page_size: int = DEFAULT_TRANSACTION_PAGE_SIZE,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        if not user:
            raise ValueError("user is required")
        if not api_key:
            raise ValueError("api_key is required")

        self._base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(user, api_key)
        self._timeout = float(timeout_seconds)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()
        self.transaction_page_size = int(transaction_page_size)

    @classmethod
    def from_settings(
        cls,
        settings: OnAppSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> OnAppClient:
        errors = settings.validate()
        if errors:
            raise ValueError("invalid OnApp settings: " + "; ".join(errors))
        return cls(
            base_url=settings.base_url,
            user=settings.user,
            api_key=settings.api_key,
            http_client=http_client,
            timeout_seconds=settings.timeout_seconds,
            transaction_page_size=settings.transaction_page_size,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> OnAppClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        rid = request_id_ctx.get()
        if rid:
            headers["X-Request-ID"] = rid
        return headers

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.status_code < 300:
            return

        message, errors = _extract_message(resp)
        raise error_for_status(
            resp.status_code,
            message,
            errors=errors,
            response_body=resp.text,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (or None).

        ``path`` is relative to the base URL and already carries the
        format suffix. Raises OnAppTransportError on network failure and
        an OnAppAPIError subclass on non-2xx responses.
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        resource = resource_label(path)
        started = time.perf_counter()

        try:
            resp = await self._client.request(
                method,
                url,
                headers=self._headers(),
                auth=self._auth,
                json=json,
                params=dict(params) if params else None,
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            # Transport failures plus decoding errors and redirect loops.
            API_REQUESTS_TOTAL.labels(method=method, resource=resource, status="error").inc()
            logger.warning(
                "onapp_request_failed",
                method=method,
                path=path,
                error=e.__class__.__name__,
            )
            raise OnAppTransportError(method, path, str(e) or e.__class__.__name__) from e
        finally:
            API_REQUEST_DURATION_SECONDS.labels(method=method, resource=resource).observe(
                time.perf_counter() - started
            )

        API_REQUESTS_TOTAL.labels(
            method=method, resource=resource, status=str(resp.status_code)
        ).inc()

        if resp.status_code >= 300:
            logger.warning(
                "onapp_request_rejected",
                method=method,
                path=path,
                status=resp.status_code,
            )
        self._raise_for_status(resp)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise error_for_status(
                resp.status_code,
                f"invalid JSON in response to {method} {path}",
                response_body=resp.text,
            ) from e
