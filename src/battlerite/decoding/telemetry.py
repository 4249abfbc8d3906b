"""Telemetry event classifier.

A telemetry file is a bare JSON array of events of the form::

    {"type": "Structures.RoundEvent", "cursor": 17, "dataObject": {...}}

:func:`classify_events` walks the array once, selects a decoder for each
event from its ``type`` discriminator, and partitions the decoded
records into a :class:`~battlerite.schemas.telemetry.Telemetry`.

Events whose discriminator is not one of the ten known kinds are
skipped without error so that kinds added by the service later never
break decoding. A known event with a missing or malformed field aborts
the whole call with a :class:`~battlerite.exceptions.DecodeError`
carrying the event index and field path.

``MatchStart``, ``ServerShutdown`` and ``MatchFinishedEvent`` occupy a
single slot each; when the stream holds more than one, the last one is
kept. Whether the service ever legitimately repeats them is unknown.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

import orjson

from battlerite.decoding.fields import FieldReader, expect_array
from battlerite.exceptions import DecodeError
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

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """The closed set of telemetry event kinds, valued by wire discriminator."""

    MATCH_START = "Structures.MatchStart"
    ROUND_EVENT = "Structures.RoundEvent"
    USER_ROUND_SPELL = "Structures.UserRoundSpell"
    DEATH_EVENT = "Structures.DeathEvent"
    MATCH_RESERVED_USER = "Structures.MatchReservedUser"
    QUEUE_EVENT = "com.stunlock.service.matchmaking.avro.QueueEvent"
    TEAM_UPDATE_EVENT = "com.stunlock.battlerite.team.TeamUpdateEvent"
    SERVER_SHUTDOWN = "Structures.ServerShutdown"
    ROUND_FINISHED_EVENT = "Structures.RoundFinishedEvent"
    MATCH_FINISHED_EVENT = "Structures.MatchFinishedEvent"


_DISCRIMINATORS: dict[str, EventKind] = {kind.value: kind for kind in EventKind}

# Kinds that hold at most one record; the last occurrence wins.
SINGLETON_KINDS: frozenset[EventKind] = frozenset(
    {
        EventKind.MATCH_START,
        EventKind.SERVER_SHUTDOWN,
        EventKind.MATCH_FINISHED_EVENT,
    }
)

# Telemetry field that receives each kind's records.
_SLOTS: dict[EventKind, str] = {
    EventKind.MATCH_START: "match_start",
    EventKind.ROUND_EVENT: "round_events",
    EventKind.USER_ROUND_SPELL: "user_round_spells",
    EventKind.DEATH_EVENT: "death_events",
    EventKind.MATCH_RESERVED_USER: "match_reserved_users",
    EventKind.QUEUE_EVENT: "queue_events",
    EventKind.TEAM_UPDATE_EVENT: "team_update_events",
    EventKind.SERVER_SHUTDOWN: "server_shutdown",
    EventKind.ROUND_FINISHED_EVENT: "round_finished_events",
    EventKind.MATCH_FINISHED_EVENT: "match_finished_event",
}


def event_kind(discriminator: object) -> EventKind | None:
    """Return the kind for a wire discriminator, or ``None`` if unknown."""
    if not isinstance(discriminator, str):
        return None
    return _DISCRIMINATORS.get(discriminator)


# ------------------------------------------------------------------
# Per-kind decoders
# ------------------------------------------------------------------


def _header(event: FieldReader) -> tuple[str, int, FieldReader, int]:
    """Return ``(type, cursor, dataObject, time)`` shared by every event."""
    body = event.obj("dataObject")
    return event.string("type"), event.integer("cursor"), body, body.integer("time")


def _decode_match_start(event: FieldReader) -> MatchStart:
    type_, cursor, body, time = _header(event)
    return MatchStart(
        type=type_,
        cursor=cursor,
        time=time,
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        version=body.string("version"),
        event_type=body.string("type"),
        game_mode=body.integer("gameMode"),
        map_id=body.string("mapID"),
        team_size=body.integer("teamSize"),
        region=body.string("region"),
    )


def _decode_round_event(event: FieldReader) -> RoundEvent:
    type_, cursor, body, time = _header(event)
    return RoundEvent(
        type=type_,
        cursor=cursor,
        time=time,
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        user_id=body.string("userID"),
        round=body.integer("round"),
        character=body.integer("character"),
        event_type=body.string("type"),
        value=body.integer("value"),
        time_into_round=body.integer("timeIntoRound"),
    )


def _decode_user_round_spell(event: FieldReader) -> UserRoundSpell:
    type_, cursor, body, time = _header(event)
    return UserRoundSpell(
        type=type_,
        cursor=cursor,
        time=time,
        account_id=body.string("accountId"),
        match_id=body.string("matchId"),
        round=body.integer("round"),
        character=body.integer("character"),
        type_id=body.integer("typeId"),
        source_type_id=body.integer("sourceTypeId"),
        score_type=body.string("scoreType"),
        value=body.integer("value"),
    )


def _decode_death_event(event: FieldReader) -> DeathEvent:
    type_, cursor, body, time = _header(event)
    return DeathEvent(
        type=type_,
        cursor=cursor,
        time=time,
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        user_id=body.string("userID"),
    )


def _decode_match_reserved_user(event: FieldReader) -> MatchReservedUser:
    type_, cursor, body, time = _header(event)
    return MatchReservedUser(
        type=type_,
        cursor=cursor,
        time=time,
        account_id=body.string("accountId"),
        match_id=body.string("matchId"),
        server_type=body.string("serverType"),
        character_level=body.integer("characterLevel"),
        team_id=body.string("teamId"),
        total_time_played=body.integer("totalTimePlayed"),
        character_time_played=body.integer("characterTimePlayed"),
        character=body.integer("character"),
        team=body.integer("team"),
        ranking_type=body.string("rankingType"),
        mount=body.integer("mount"),
        attachment=body.integer("attachment"),
        outfit=body.integer("outfit"),
        emote=body.integer("emote"),
        league=body.integer("league"),
        division=body.integer("division"),
        division_rating=body.integer("divisionRating"),
        season_id=body.integer("seasonId"),
    )


def _decode_region_sample(sample: FieldReader) -> RegionSample:
    return RegionSample(
        region=sample.string("region"),
        latency_ms=sample.integer("latencyMS"),
    )


def _decode_queue_event(event: FieldReader) -> QueueEvent:
    type_, cursor, body, time = _header(event)
    return QueueEvent(
        type=type_,
        cursor=cursor,
        time=time,
        user_id=body.string("userId"),
        team_id=body.string("teamId"),
        session_id=body.string("sessionId"),
        season=body.integer("season"),
        event_type=body.string("eventType"),
        time_joined_queue=body.string("timeJoinedQueue"),
        time_in_queue=body.number("timeInQueue"),
        character=body.integer("character"),
        character_archetype=body.integer("characterArchetype"),
        queue_types=tuple(body.array("queueTypes")),
        limit_matchmaking_range=body.boolean("limitMatchmakingRange"),
        region_samples=tuple(
            _decode_region_sample(s) for s in body.objects("regionSamples")
        ),
        preferred_region=body.string("preferredRegion"),
        ranking_type=body.string("rankingType"),
        league=body.integer("league"),
        division=body.integer("division"),
        division_rating=body.integer("divisionRating"),
        team_size=body.integer("teamSize"),
        team_members=body.raw("teamMembers"),
        placement_games_left=body.integer("placementGamesLeft"),
        match_id=body.string("matchId"),
        match_region=body.string("matchRegion"),
        team_side=body.integer("teamSide"),
        auto_matchmaking=body.boolean("autoMatchmaking"),
    )


def _decode_team_update_event(event: FieldReader) -> TeamUpdateEvent:
    type_, cursor, body, time = _header(event)
    return TeamUpdateEvent(
        type=type_,
        cursor=cursor,
        time=time,
        season=body.integer("season"),
        team_id=body.string("teamID"),
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        user_ids=body.integers("userIDs"),
        mode=body.string("mode"),
        league=body.integer("league"),
        prev_league=body.integer("prevLeague"),
        prev_division=body.integer("prevDivision"),
        division=body.integer("division"),
        prev_division_rating=body.integer("prevDivisionRating"),
        division_rating=body.integer("divisionRating"),
        prev_wins=body.integer("prevWins"),
        wins=body.integer("wins"),
        prev_losses=body.integer("prevLosses"),
        losses=body.integer("losses"),
        ranking_change_type=body.string("rankingChangeType"),
        prev_placement_games_left=body.integer("prevPlacementGamesLeft"),
        placement_games_left=body.integer("placementGamesLeft"),
        match_region=body.string("matchRegion"),
    )


def _decode_server_shutdown(event: FieldReader) -> ServerShutdown:
    type_, cursor, body, time = _header(event)
    return ServerShutdown(
        type=type_,
        cursor=cursor,
        time=time,
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        match_time=body.integer("matchTime"),
        reason=body.string("reason"),
    )


def _decode_player_stats(stats: FieldReader) -> PlayerStats:
    return PlayerStats(
        user_id=stats.string("userID"),
        kills=stats.integer("kills"),
        deaths=stats.integer("deaths"),
        score=stats.integer("score"),
        damage_done=stats.integer("damageDone"),
        damage_received=stats.integer("damageReceived"),
        healing_done=stats.integer("healingDone"),
        healing_received=stats.integer("healingReceived"),
        disables_done=stats.integer("disablesDone"),
        disables_received=stats.integer("disablesReceived"),
        energy_gained=stats.integer("energyGained"),
        energy_used=stats.integer("energyUsed"),
        time_alive=stats.integer("timeAlive"),
        ability_uses=stats.integer("abilityUses"),
    )


def _decode_round_finished_event(event: FieldReader) -> RoundFinishedEvent:
    type_, cursor, body, time = _header(event)
    return RoundFinishedEvent(
        type=type_,
        cursor=cursor,
        time=time,
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        round=body.integer("round"),
        round_length=body.integer("roundLength"),
        winning_team=body.integer("winningTeam"),
        player_stats=tuple(
            _decode_player_stats(s) for s in body.objects("playerStats")
        ),
    )


def _decode_match_finished_event(event: FieldReader) -> MatchFinishedEvent:
    type_, cursor, body, time = _header(event)
    return MatchFinishedEvent(
        type=type_,
        cursor=cursor,
        time=time,
        team_one_score=body.integer("teamOneScore"),
        team_two_score=body.integer("teamTwoScore"),
        match_length=body.integer("matchLength"),
        match_id=body.string("matchID"),
        external_match_id=body.string("externalMatchID"),
        leavers=body.raw("leavers"),
        region=body.string("region"),
    )


EVENT_DECODERS: dict[EventKind, Callable[[FieldReader], TelemetryEvent]] = {
    EventKind.MATCH_START: _decode_match_start,
    EventKind.ROUND_EVENT: _decode_round_event,
    EventKind.USER_ROUND_SPELL: _decode_user_round_spell,
    EventKind.DEATH_EVENT: _decode_death_event,
    EventKind.MATCH_RESERVED_USER: _decode_match_reserved_user,
    EventKind.QUEUE_EVENT: _decode_queue_event,
    EventKind.TEAM_UPDATE_EVENT: _decode_team_update_event,
    EventKind.SERVER_SHUTDOWN: _decode_server_shutdown,
    EventKind.ROUND_FINISHED_EVENT: _decode_round_finished_event,
    EventKind.MATCH_FINISHED_EVENT: _decode_match_finished_event,
}


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def decode_event(raw: object, index: int = 0) -> TelemetryEvent | None:
    """Decode a single telemetry event.

    Args:
        raw: One element of the telemetry array.
        index: Position of *raw* in the array, reported in errors.

    Returns:
        The decoded record, or ``None`` if the discriminator is not a
        known kind.

    Raises:
        FieldTypeError: If *raw* is not a JSON object, or a field of a
            known kind has the wrong shape.
        MissingFieldError: If a known kind lacks a required field.
    """
    event = FieldReader.wrap(raw, f"[{index}]", index)
    kind = event_kind(event.raw("type"))
    if kind is None:
        return None
    return EVENT_DECODERS[kind](event)


def classify_events(events: Sequence[Any]) -> Telemetry:
    """Partition a telemetry event array into a typed aggregate.

    Args:
        events: The telemetry array, in wire order.

    Returns:
        A :class:`Telemetry` whose sequence slots preserve the wire
        order of each kind and whose singleton slots hold the last
        occurrence of their kind (or ``None``).

    Raises:
        DecodeError: If any known event is malformed. No partial
            aggregate is returned.
    """
    sequences: dict[EventKind, list[TelemetryEvent]] = {
        kind: [] for kind in EventKind if kind not in SINGLETON_KINDS
    }
    singletons: dict[EventKind, TelemetryEvent] = {}
    decoded = 0

    for index, raw in enumerate(events):
        record = decode_event(raw, index)
        if record is None:
            continue
        kind = _DISCRIMINATORS[record.type]
        if kind in SINGLETON_KINDS:
            singletons[kind] = record
        else:
            sequences[kind].append(record)
        decoded += 1

    logger.debug("Decoded %d of %d telemetry events", decoded, len(events))

    fields: dict[str, Any] = {
        _SLOTS[kind]: tuple(records) for kind, records in sequences.items()
    }
    fields.update({_SLOTS[kind]: record for kind, record in singletons.items()})
    return Telemetry(**fields)


def decode_telemetry(payload: bytes | str) -> Telemetry:
    """Parse a raw telemetry download and classify its events.

    Args:
        payload: The telemetry file body: a bare JSON array.

    Returns:
        The classified :class:`Telemetry`.

    Raises:
        DecodeError: If *payload* is not valid JSON.
        FieldTypeError: If *payload* is not a JSON array.
    """
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        msg = f"telemetry payload is not valid JSON: {exc}"
        raise DecodeError(msg) from exc
    return classify_events(expect_array(data))
