"""Search filters for the players, teams and matches collections.

Each filter renders the query parameters documented by the service.
Unset fields (``None``, ``0`` or empty) are left out of the query;
list values are comma-joined.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from battlerite.exceptions import FilterError

# JSON:API parameter names keep their brackets and list commas readable.
_SAFE_QUERY_CHARS = "[],"


def encode_query(params: list[tuple[str, str]]) -> str:
    """Encode ``(name, value)`` pairs into a query string."""
    return urlencode(params, safe=_SAFE_QUERY_CHARS)


def _join(values: tuple[object, ...]) -> str:
    return ",".join(str(v) for v in values)


@dataclass(frozen=True, slots=True)
class PlayerFilter:
    """Filter for the players collection.

    The service only honours one criterion per request; when several
    are set it uses the first, so usually exactly one field is given.

    Attributes:
        names: Player display names.
        user_ids: Numeric account identifiers.
        steam_ids: Steam account identifiers.
    """

    names: tuple[str, ...] = ()
    user_ids: tuple[int, ...] = ()
    steam_ids: tuple[int, ...] = ()

    def query_params(self) -> list[tuple[str, str]]:
        """Return the query parameters for this filter."""
        params: list[tuple[str, str]] = []
        if self.names:
            params.append(("filter[playerNames]", _join(self.names)))
        if self.user_ids:
            params.append(("filter[playerIds]", _join(self.user_ids)))
        if self.steam_ids:
            params.append(("filter[steamIds]", _join(self.steam_ids)))
        return params


@dataclass(frozen=True, slots=True)
class TeamFilter:
    """Filter for the teams collection.

    Both fields are required by the service.

    Attributes:
        season: Ranked season number.
        player_ids: Account identifiers of team members.
    """

    season: int = 0
    player_ids: tuple[int, ...] = ()

    def query_params(self) -> list[tuple[str, str]]:
        """Return the query parameters for this filter.

        Raises:
            FilterError: If the season or the player ids are missing.
        """
        if self.season == 0:
            msg = "TeamFilter must contain a season"
            raise FilterError(msg)
        if not self.player_ids:
            msg = "TeamFilter must contain player_ids"
            raise FilterError(msg)
        return [
            ("tag[season]", str(self.season)),
            ("tag[playerIds]", _join(self.player_ids)),
        ]


@dataclass(frozen=True, slots=True)
class MatchFilter:
    """Filter for the matches collection.

    Attributes:
        page_offset: Number of matches to skip.
        page_limit: Maximum number of matches to return.
        sort: Sort key, e.g. ``"createdAt"`` or ``"-createdAt"``.
        created_at_start: ISO 8601 lower bound on the match time.
        created_at_end: ISO 8601 upper bound on the match time.
        player_ids: Only matches involving these players.
        patch_versions: Only matches played on these patches.
    """

    page_offset: int = 0
    page_limit: int = 0
    sort: str = ""
    created_at_start: str = ""
    created_at_end: str = ""
    player_ids: tuple[str, ...] = ()
    patch_versions: tuple[str, ...] = ()

    def query_params(self) -> list[tuple[str, str]]:
        """Return the query parameters for this filter."""
        params: list[tuple[str, str]] = []
        if self.page_offset:
            params.append(("page[offset]", str(self.page_offset)))
        if self.page_limit:
            params.append(("page[limit]", str(self.page_limit)))
        if self.sort:
            params.append(("sort", self.sort))
        if self.created_at_start:
            params.append(("filter[createdAt-start]", self.created_at_start))
        if self.created_at_end:
            params.append(("filter[createdAt-end]", self.created_at_end))
        if self.player_ids:
            params.append(("filter[playerIds]", _join(self.player_ids)))
        if self.patch_versions:
            params.append(("filter[patchVersion]", _join(self.patch_versions)))
        return params
