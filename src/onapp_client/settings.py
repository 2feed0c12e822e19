"""OnApp client configuration settings.

OnAppSettings is the single configuration object accepted by
OnAppClient.from_settings(). It is a plain dataclass (not env-coupled) so
tests can inject config without touching os.environ.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_TRANSACTION_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class OnAppSettings:
    """Connection settings for an OnApp control panel."""

    # ── Endpoint ───────────────────────────────────────────────────
    base_url: str = ""
    """Control panel URL (e.g. https://cp.example.com)."""

    # ── Credentials ────────────────────────────────────────────────
    user: str = ""
    """Login (or e-mail) used for HTTP basic auth."""

    api_key: str = ""
    """API key used as the basic auth password. Never log this."""

    # ── Transport ──────────────────────────────────────────────────
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    """Per-request transport timeout."""

    # ── Transactions ───────────────────────────────────────────────
    transaction_page_size: int = DEFAULT_TRANSACTION_PAGE_SIZE
    """per_page used when looking up the transaction behind an action."""

    def validate(self) -> list[str]:
        """Return a list of configuration errors. Empty means valid."""
        errors: list[str] = []
        if not self.base_url:
            errors.append("base_url is required")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append("base_url must start with http:// or https://")
        if not self.user:
            errors.append("user is required")
        if not self.api_key:
            errors.append("api_key is required")
        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")
        if self.transaction_page_size < 1:
            errors.append("transaction_page_size must be >= 1")
        return errors

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> OnAppSettings:
        """Build settings from environment variables.

        This is a convenience factory for production use. Tests should
        construct OnAppSettings directly.
        """
        if env is None:
            env = dict(os.environ)

        timeout_raw = env.get("ONAPP_TIMEOUT_SECONDS", "").strip()
        page_size_raw = env.get("ONAPP_TRANSACTION_PAGE_SIZE", "").strip()

        return cls(
            base_url=env.get("ONAPP_URL", "").strip().rstrip("/"),
            user=env.get("ONAPP_USER", ""),
            api_key=env.get("ONAPP_API_KEY", ""),
            timeout_seconds=float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS,
            transaction_page_size=(
                int(page_size_raw) if page_size_raw else DEFAULT_TRANSACTION_PAGE_SIZE
            ),
        )
