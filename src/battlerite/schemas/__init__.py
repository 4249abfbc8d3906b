"""Immutable record types produced by the decoders.

Re-exports the match-graph entities and the telemetry event records so
that downstream code can import everything from :mod:`battlerite.schemas`.
"""

from battlerite.schemas.entities import (
    Asset,
    Match,
    MatchPlayer,
    Participant,
    Player,
    ResourceRef,
    Round,
    Roster,
    Status,
    Team,
)
from battlerite.schemas.telemetry import (
    DeathEvent,
    MatchFinishedEvent,
    MatchReservedUser,
    MatchStart,
    PlayerStats,
    QueueEvent,
    RegionSample,
    RoundEvent,
    RoundFinishedEvent,
    ServerShutdown,
    TeamUpdateEvent,
    Telemetry,
    TelemetryEvent,
    UserRoundSpell,
)

__all__ = [
    "Asset",
    "DeathEvent",
    "Match",
    "MatchFinishedEvent",
    "MatchPlayer",
    "MatchReservedUser",
    "MatchStart",
    "Participant",
    "Player",
    "PlayerStats",
    "QueueEvent",
    "RegionSample",
    "ResourceRef",
    "Round",
    "RoundEvent",
    "RoundFinishedEvent",
    "Roster",
    "ServerShutdown",
    "Status",
    "Team",
    "TeamUpdateEvent",
    "Telemetry",
    "TelemetryEvent",
    "UserRoundSpell",
]
