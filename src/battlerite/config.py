"""Configuration for the Battlerite client.

The configuration container is frozen (immutable) and slotted. Every
field has a sensible default so that a zero-argument ``ClientConfig()``
is always valid; only the API key has to be supplied for authenticated
requests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL: str = "https://api.dc01.gamelockerapp.com/shards/global/"
DEFAULT_STATUS_URL: str = "https://api.dc01.gamelockerapp.com/status"
JSON_API_MEDIA_TYPE: str = "application/vnd.api+json"

_ENV_API_KEY = "BATTLERITE_API_KEY"
_ENV_BASE_URL = "BATTLERITE_BASE_URL"
_ENV_TIMEOUT = "BATTLERITE_TIMEOUT_SECONDS"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Settings shared by the transport and the client.

    Attributes:
        api_key: Gamelocker API key sent verbatim in the
            ``Authorization`` header.
        base_url: Shard endpoint that resource paths are appended to.
            Must end with ``"/"``.
        status_url: Absolute URL of the service status resource, which
            lives outside the shard endpoint.
        timeout_seconds: Per-request timeout passed to the HTTP layer.
        accept: Media type requested in the ``Accept`` header.

    Raises:
        ValueError: If any configuration invariant is violated.
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    status_url: str = DEFAULT_STATUS_URL
    timeout_seconds: float = 10.0
    accept: str = JSON_API_MEDIA_TYPE

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if self.timeout_seconds <= 0.0:
            msg = f"timeout_seconds must be positive, got {self.timeout_seconds}"
            raise ValueError(msg)

        for name in ("base_url", "status_url"):
            url: str = getattr(self, name)
            if not url.startswith(("http://", "https://")):
                msg = f"{name} must be an http(s) URL, got {url!r}"
                raise ValueError(msg)

        if not self.base_url.endswith("/"):
            msg = f"base_url must end with '/', got {self.base_url!r}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a configuration from ``BATTLERITE_*`` environment variables.

        Unset variables fall back to the dataclass defaults.

        Returns:
            A validated :class:`ClientConfig`.

        Raises:
            ValueError: If ``BATTLERITE_TIMEOUT_SECONDS`` is not a number
                or any resulting value fails validation.
        """
        timeout_raw = os.getenv(_ENV_TIMEOUT)
        try:
            timeout = float(timeout_raw) if timeout_raw else 10.0
        except ValueError as exc:
            msg = f"{_ENV_TIMEOUT} must be a number, got {timeout_raw!r}"
            raise ValueError(msg) from exc
        return cls(
            api_key=os.getenv(_ENV_API_KEY, ""),
            base_url=os.getenv(_ENV_BASE_URL, DEFAULT_BASE_URL),
            timeout_seconds=timeout,
        )
