"""HTTP transport backed by :mod:`requests`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from battlerite.exceptions import RateLimitError, TransportError

if TYPE_CHECKING:
    from battlerite.config import ClientConfig

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-Ratelimit-Remaining"
RATE_LIMIT_DOCS = "https://battlerite-docs.readthedocs.io/en/master/ratelimits/ratelimits.html"


class RequestsTransport:
    """Authenticated GET transport for the Gamelocker API.

    Satisfies the :class:`~battlerite.api.base.Transport` protocol.
    Reuses one :class:`requests.Session` for connection pooling and
    sends the API key and JSON:API media type with every request.

    Attributes:
        _session: Session carrying the default headers.
        _timeout: Per-request timeout in seconds.
    """

    __slots__ = ("_session", "_timeout")

    def __init__(
        self,
        config: ClientConfig,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration supplying the API key, media
                type and timeout.
            session: Optional pre-built session, mainly for tests.
        """
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {"Authorization": config.api_key, "Accept": config.accept}
        )
        self._timeout = config.timeout_seconds

    def get(self, url: str) -> bytes:
        """Fetch *url* and return the response body.

        The rate-limit header is checked before the status code: the
        service answers the request that exhausts the budget with
        ``X-Ratelimit-Remaining: 0``.

        Args:
            url: Absolute URL including any query string.

        Returns:
            The raw response body.

        Raises:
            RateLimitError: If ``X-Ratelimit-Remaining`` is ``"0"``.
            TransportError: On connection failures, timeouts and error
                status codes.
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            msg = f"request to {url} failed: {exc}"
            raise TransportError(msg) from exc

        if response.headers.get(RATE_LIMIT_HEADER) == "0":
            logger.warning("Rate limit exhausted after request to %s", url)
            msg = (
                "Request rate limit hit 0, wait for more requests; "
                f"learn more: {RATE_LIMIT_DOCS}"
            )
            raise RateLimitError(msg)

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            msg = f"request to {url} returned HTTP {response.status_code}"
            raise TransportError(msg) from exc

        return response.content

    def close(self) -> None:
        """Release the pooled connections."""
        self._session.close()
