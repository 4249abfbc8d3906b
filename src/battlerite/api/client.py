"""High-level client for the Gamelocker Battlerite API.

:class:`BattleriteClient` maps each service operation onto one GET
request through a :class:`~battlerite.api.base.Transport` and hands the
response body to the matching decoder. The client itself holds no
state beyond its configuration and transport: nothing is cached,
retried or paginated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from battlerite.api.envelope import Document, parse_document
from battlerite.api.filters import encode_query
from battlerite.api.http import RequestsTransport
from battlerite.config import ClientConfig
from battlerite.decoding.matches import match_from_document, matches_from_document
from battlerite.decoding.records import (
    decode_player,
    decode_players,
    decode_status,
    decode_teams,
)
from battlerite.decoding.telemetry import decode_telemetry
from battlerite.exceptions import TransportError

if TYPE_CHECKING:
    from battlerite.api.base import Transport
    from battlerite.api.filters import MatchFilter, PlayerFilter, TeamFilter
    from battlerite.schemas.entities import Match, Player, Status, Team
    from battlerite.schemas.telemetry import Telemetry

logger = logging.getLogger(__name__)


class BattleriteClient:
    """Fetches and decodes Battlerite resources.

    Example::

        client = BattleriteClient(ClientConfig(api_key="..."))
        match = client.get_match("AB9C81FABFD748C8A7EC545AA6AF97CC")
        telemetry = client.get_telemetry(match.asset.url)

    Attributes:
        _config: Client configuration.
        _transport: Transport used for every request.
    """

    __slots__ = ("_config", "_transport")

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration; defaults to
                :meth:`ClientConfig.from_env`.
            transport: Transport to issue requests with; defaults to a
                :class:`RequestsTransport` built from *config*.
        """
        self._config = config if config is not None else ClientConfig.from_env()
        self._transport = (
            transport if transport is not None else RequestsTransport(self._config)
        )

    @property
    def config(self) -> ClientConfig:
        """The configuration this client was built with."""
        return self._config

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_status(self) -> Status:
        """Return the state of the Gamelocker API."""
        document = self._fetch_document(self._config.status_url)
        return decode_status(document.data)

    def get_player(self, player_id: int) -> Player:
        """Return a single player by account id."""
        document = self._fetch_document(self._url(f"players/{player_id}"))
        return decode_player(document.data)

    def get_players(self, player_filter: PlayerFilter) -> tuple[Player, ...]:
        """Return the players matching *player_filter*."""
        url = self._url("players", player_filter.query_params())
        return decode_players(self._fetch_document(url).data)

    def get_teams(self, team_filter: TeamFilter) -> tuple[Team, ...]:
        """Return the teams matching *team_filter*.

        Raises:
            FilterError: If the filter lacks a season or player ids. No
                request is made in that case.
        """
        url = self._url("teams", team_filter.query_params())
        return decode_teams(self._fetch_document(url).data)

    def get_match(self, match_id: str) -> Match:
        """Return a single fully resolved match by id."""
        document = self._fetch_document(self._url(f"matches/{match_id}"))
        return match_from_document(document)

    def get_matches(self, match_filter: MatchFilter) -> tuple[Match, ...]:
        """Return the matches matching *match_filter*, fully resolved."""
        url = self._url("matches", match_filter.query_params())
        return matches_from_document(self._fetch_document(url))

    def get_telemetry(self, url: str) -> Telemetry:
        """Download and classify a match's telemetry.

        Args:
            url: Absolute telemetry URL, normally ``match.asset.url``.

        Returns:
            The classified :class:`Telemetry`.
        """
        telemetry = decode_telemetry(self._transport.get(url))
        logger.info(
            "Fetched telemetry: %d rounds, %d round events",
            len(telemetry.round_finished_events),
            len(telemetry.round_events),
        )
        return telemetry

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _url(self, resource: str, params: list[tuple[str, str]] | None = None) -> str:
        url = f"{self._config.base_url}{resource}"
        if params:
            url = f"{url}?{encode_query(params)}"
        return url

    def _fetch_document(self, url: str) -> Document:
        """GET *url* and parse the JSON:API document.

        Raises:
            TransportError: If the document carries errors but no data.
        """
        document = parse_document(self._transport.get(url))
        if document.data is None and document.errors:
            msg = f"service returned errors for {url}: {document.error_summary()}"
            raise TransportError(msg)
        return document
