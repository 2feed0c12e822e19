"""OnApp client error hierarchy.

Every failure is raised as a subclass of :class:`OnAppError`. Callers that
drive virtual machine actions must tell two cases apart:

* :class:`OnAppArgumentError`, :class:`OnAppTransportError` and
  :class:`OnAppAPIError` from the action call itself mean the action was not
  accepted; retrying is safe.
* :class:`TransactionLookupError` means the action *was* accepted and only the
  follow-up transaction query failed; retrying the action may run it twice.

Errors never carry ``httpx.Response`` objects or credentials.
"""

from __future__ import annotations

from typing import Any

# Cap on how much of a response body is kept on an error.
_MAX_BODY_CHARS = 500


class OnAppError(Exception):
    """Base exception for the OnApp client."""


class OnAppArgumentError(OnAppError, ValueError):
    """Client-side precondition failure; no request was sent."""

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"{argument} is invalid because {reason}")


class OnAppTransportError(OnAppError):
    """Network-level failure (connect error, timeout, protocol error)."""

    def __init__(self, method: str, path: str, message: str = "") -> None:
        self.method = method
        self.path = path
        self.message = message
        super().__init__(f"OnApp transport error on {method} {path}: {message}")


class OnAppAPIError(OnAppError):
    """Non-2xx or malformed response from the OnApp API."""

    def __init__(
        self,
        status_code: int,
        message: str = "",
        *,
        errors: Any = None,
        response_body: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.errors = errors
        self.response_body = response_body[:_MAX_BODY_CHARS]
        super().__init__(f"OnApp API error {status_code}: {message}")


class OnAppAuthError(OnAppAPIError):
    """401/403 (bad credentials or missing permission)."""


class OnAppNotFoundError(OnAppAPIError):
    """404 (resource does not exist)."""


class OnAppValidationError(OnAppAPIError):
    """422 (server-side validation of the payload failed)."""


class TransactionLookupError(OnAppError):
    """The primary request succeeded but the transaction query failed.

    ``action_accepted`` is always True: the server has already taken the
    action, so blindly retrying it risks a duplicate effect. The underlying
    error is available as ``__cause__``.
    """

    action_accepted = True

    def __init__(self, resource_id: int, action: str, message: str = "") -> None:
        self.resource_id = resource_id
        self.action = action
        self.message = message
        super().__init__(
            f"{action} accepted for resource {resource_id} "
            f"but transaction lookup failed: {message}"
        )


def error_for_status(
    status_code: int,
    message: str,
    *,
    errors: Any = None,
    response_body: str = "",
) -> OnAppAPIError:
    """Build the most specific OnAppAPIError subclass for ``status_code``."""
    err_cls: type[OnAppAPIError]
    if status_code in (401, 403):
        err_cls = OnAppAuthError
    elif status_code == 404:
        err_cls = OnAppNotFoundError
    elif status_code == 422:
        err_cls = OnAppValidationError
    else:
        err_cls = OnAppAPIError
    return err_cls(
        status_code,
        message,
        errors=errors,
        response_body=response_body,
    )
