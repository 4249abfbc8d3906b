"""Record types for the match telemetry event stream.

A telemetry file is a flat array of heterogeneous events, each tagged
with a ``type`` discriminator. Every event kind decodes into one of the
ten frozen dataclasses below; :class:`Telemetry` is the partitioned
aggregate produced by :func:`battlerite.decoding.telemetry.classify_events`.

All event records share ``type``, ``cursor`` and ``time``. ``cursor``
is the wire sequence number assigned by the service; it is carried
through unchanged and never validated for monotonicity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class MatchStart:
    """Emitted once when the match server starts the match."""

    type: str
    cursor: int
    time: int
    match_id: str
    external_match_id: str
    version: str
    event_type: str
    game_mode: int
    map_id: str
    team_size: int
    region: str


@dataclass(frozen=True, slots=True)
class RoundEvent:
    """A per-user occurrence during a round (kills, orbs, etc.).

    Attributes:
        event_type: Kind of round occurrence, from ``dataObject.type``.
        value: Numeric payload whose meaning depends on ``event_type``.
        time_into_round: Seconds elapsed since the round started.
    """

    type: str
    cursor: int
    time: int
    match_id: str
    external_match_id: str
    user_id: str
    round: int
    character: int
    event_type: str
    value: int
    time_into_round: int


@dataclass(frozen=True, slots=True)
class UserRoundSpell:
    """Ability usage totals for one character in one round."""

    type: str
    cursor: int
    time: int
    account_id: str
    match_id: str
    round: int
    character: int
    type_id: int
    source_type_id: int
    score_type: str
    value: int


@dataclass(frozen=True, slots=True)
class DeathEvent:
    """A character death."""

    type: str
    cursor: int
    time: int
    match_id: str
    external_match_id: str
    user_id: str


@dataclass(frozen=True, slots=True)
class MatchReservedUser:
    """Loadout and ranking information for a user reserved into the match."""

    type: str
    cursor: int
    time: int
    account_id: str
    match_id: str
    server_type: str
    character_level: int
    team_id: str
    total_time_played: int
    character_time_played: int
    character: int
    team: int
    ranking_type: str
    mount: int
    attachment: int
    outfit: int
    emote: int
    league: int
    division: int
    division_rating: int
    season_id: int


@dataclass(frozen=True, slots=True)
class RegionSample:
    """A latency measurement taken while a user was queueing.

    Attributes:
        region: Region name.
        latency_ms: Round-trip latency in milliseconds.
    """

    region: str
    latency_ms: int


@dataclass(frozen=True, slots=True)
class QueueEvent:
    """Matchmaking queue state for a user.

    Attributes:
        queue_types: Queue identifiers exactly as sent by the service.
        team_members: Team member payload exactly as sent by the service.
        region_samples: Latency samples gathered while queueing.
    """

    type: str
    cursor: int
    time: int
    user_id: str
    team_id: str
    session_id: str
    season: int
    event_type: str
    time_joined_queue: str
    time_in_queue: float
    character: int
    character_archetype: int
    queue_types: tuple[Any, ...]
    limit_matchmaking_range: bool
    region_samples: tuple[RegionSample, ...]
    preferred_region: str
    ranking_type: str
    league: int
    division: int
    division_rating: int
    team_size: int
    team_members: Any
    placement_games_left: int
    match_id: str
    match_region: str
    team_side: int
    auto_matchmaking: bool


@dataclass(frozen=True, slots=True)
class TeamUpdateEvent:
    """Ranking change applied to a team after the match."""

    type: str
    cursor: int
    time: int
    season: int
    team_id: str
    match_id: str
    external_match_id: str
    user_ids: tuple[int, ...]
    mode: str
    league: int
    prev_league: int
    prev_division: int
    division: int
    prev_division_rating: int
    division_rating: int
    prev_wins: int
    wins: int
    prev_losses: int
    losses: int
    ranking_change_type: str
    prev_placement_games_left: int
    placement_games_left: int
    match_region: str


@dataclass(frozen=True, slots=True)
class ServerShutdown:
    """Emitted when the match server closes."""

    type: str
    cursor: int
    time: int
    match_id: str
    external_match_id: str
    match_time: int
    reason: str


@dataclass(frozen=True, slots=True)
class PlayerStats:
    """A player's cumulative stats at the end of a round."""

    user_id: str
    kills: int
    deaths: int
    score: int
    damage_done: int
    damage_received: int
    healing_done: int
    healing_received: int
    disables_done: int
    disables_received: int
    energy_gained: int
    energy_used: int
    time_alive: int
    ability_uses: int


@dataclass(frozen=True, slots=True)
class RoundFinishedEvent:
    """Emitted at the end of every round."""

    type: str
    cursor: int
    time: int
    match_id: str
    external_match_id: str
    round: int
    round_length: int
    winning_team: int
    player_stats: tuple[PlayerStats, ...]


@dataclass(frozen=True, slots=True)
class MatchFinishedEvent:
    """Emitted once when the match ends.

    Attributes:
        leavers: Leaver payload exactly as sent by the service.
    """

    type: str
    cursor: int
    time: int
    team_one_score: int
    team_two_score: int
    match_length: int
    match_id: str
    external_match_id: str
    leavers: Any
    region: str


TelemetryEvent = Union[
    MatchStart,
    RoundEvent,
    UserRoundSpell,
    DeathEvent,
    MatchReservedUser,
    QueueEvent,
    TeamUpdateEvent,
    ServerShutdown,
    RoundFinishedEvent,
    MatchFinishedEvent,
]


@dataclass(frozen=True, slots=True)
class Telemetry:
    """A match's telemetry partitioned by event kind.

    Sequence slots keep the wire order of their own kind; ordering
    across kinds is not retained. Singleton slots are ``None`` when the
    stream contained no event of that kind and hold the last occurrence
    when it contained several.
    """

    match_start: MatchStart | None = None
    round_events: tuple[RoundEvent, ...] = ()
    user_round_spells: tuple[UserRoundSpell, ...] = ()
    death_events: tuple[DeathEvent, ...] = ()
    match_reserved_users: tuple[MatchReservedUser, ...] = ()
    queue_events: tuple[QueueEvent, ...] = ()
    team_update_events: tuple[TeamUpdateEvent, ...] = ()
    server_shutdown: ServerShutdown | None = None
    round_finished_events: tuple[RoundFinishedEvent, ...] = ()
    match_finished_event: MatchFinishedEvent | None = None
