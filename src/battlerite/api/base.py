"""Transport protocol for the Battlerite client.

Defines the :class:`Transport` structural interface. A transport turns
a URL into the raw response body; everything above it (envelope
parsing, decoding, graph resolution) is pure and never touches the
network. Concrete transports are responsible for:

* **Authentication** -- sending the API key with every request.
* **Timeouts** -- bounding each request by the configured limit.
* **Rate limiting** -- raising
  :class:`~battlerite.exceptions.RateLimitError` when the service
  reports an exhausted request budget.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Structural interface for HTTP transports.

    Any class that implements :meth:`get` is a valid ``Transport``
    without needing to inherit from this class.
    """

    def get(self, url: str) -> bytes:
        """Issue an authenticated GET request and return the body.

        Args:
            url: Absolute URL including any query string.

        Returns:
            The raw response body.

        Raises:
            RateLimitError: If the request budget is exhausted.
            TransportError: If the request fails or returns an error
                status.
        """
        ...
