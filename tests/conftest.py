"""Shared test fixtures for the Battlerite client.

Provides builders for wire-shaped payloads, exactly as the Gamelocker
API serializes them (numbers as floats, booleans as strings where the
service does so):

* :func:`wire` -- a :class:`WireBuilder` for JSON:API resource objects
  (matches, rosters, participants, players, rounds, assets).
* :func:`make_event` -- a factory for telemetry events of any kind.
* :func:`match_document` -- a complete single-match response with two
  rosters, three participants, three players, two rounds and an asset.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

# ------------------------------------------------------------------
# Telemetry bodies (dataObject) per discriminator
# ------------------------------------------------------------------

_PLAYER_STATS: dict[str, Any] = {
    "userID": "1001",
    "kills": 2.0,
    "deaths": 1.0,
    "score": 140.0,
    "damageDone": 512.0,
    "damageReceived": 300.0,
    "healingDone": 88.0,
    "healingReceived": 40.0,
    "disablesDone": 6.0,
    "disablesReceived": 3.0,
    "energyGained": 120.0,
    "energyUsed": 100.0,
    "timeAlive": 95.0,
    "abilityUses": 41.0,
}

EVENT_BODIES: dict[str, dict[str, Any]] = {
    "Structures.MatchStart": {
        "time": 1520000000.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "version": "2.13",
        "type": "RANKED",
        "gameMode": 1733162751.0,
        "mapID": "map-1",
        "teamSize": 3.0,
        "region": "eu-west",
    },
    "Structures.RoundEvent": {
        "time": 1520000010.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "userID": "1001",
        "round": 1.0,
        "character": 7.0,
        "type": "KILL",
        "value": 1.0,
        "timeIntoRound": 34.0,
    },
    "Structures.UserRoundSpell": {
        "time": 1520000020.0,
        "accountId": "1001",
        "matchId": "M1",
        "round": 1.0,
        "character": 7.0,
        "typeId": 1138.0,
        "sourceTypeId": 1138.0,
        "scoreType": "DamageDone",
        "value": 96.0,
    },
    "Structures.DeathEvent": {
        "time": 1520000030.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "userID": "1002",
    },
    "Structures.MatchReservedUser": {
        "time": 1520000000.0,
        "accountId": "1001",
        "matchId": "M1",
        "serverType": "QUICK2V2",
        "characterLevel": 9.0,
        "teamId": "T1",
        "totalTimePlayed": 36000.0,
        "characterTimePlayed": 7200.0,
        "character": 7.0,
        "team": 1.0,
        "rankingType": "RANKED",
        "mount": 60001.0,
        "attachment": 0.0,
        "outfit": 2.0,
        "emote": 3.0,
        "league": 4.0,
        "division": 2.0,
        "divisionRating": 55.0,
        "seasonId": 8.0,
    },
    "com.stunlock.service.matchmaking.avro.QueueEvent": {
        "time": 1519999900.0,
        "userId": "1001",
        "teamId": "T1",
        "sessionId": "S1",
        "season": 8.0,
        "eventType": "MATCHED",
        "timeJoinedQueue": "2018-03-02T12:00:00Z",
        "timeInQueue": 12.5,
        "character": 7.0,
        "characterArchetype": 1.0,
        "queueTypes": ["RANKED_2V2"],
        "limitMatchmakingRange": False,
        "regionSamples": [
            {"region": "eu-west", "latencyMS": 32.0},
            {"region": "us-east", "latencyMS": 110.0},
        ],
        "preferredRegion": "eu-west",
        "rankingType": "RANKED",
        "league": 4.0,
        "division": 2.0,
        "divisionRating": 55.0,
        "teamSize": 2.0,
        "teamMembers": ["1001", "1003"],
        "placementGamesLeft": 0.0,
        "matchId": "M1",
        "matchRegion": "eu-west",
        "teamSide": 1.0,
        "autoMatchmaking": True,
    },
    "com.stunlock.battlerite.team.TeamUpdateEvent": {
        "time": 1520000500.0,
        "season": 8.0,
        "teamID": "T1",
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "userIDs": [1001.0, 1003.0],
        "mode": "RANKED_2V2",
        "league": 4.0,
        "prevLeague": 4.0,
        "prevDivision": 2.0,
        "division": 2.0,
        "prevDivisionRating": 55.0,
        "divisionRating": 70.0,
        "prevWins": 10.0,
        "wins": 11.0,
        "prevLosses": 5.0,
        "losses": 5.0,
        "rankingChangeType": "RATING",
        "prevPlacementGamesLeft": 0.0,
        "placementGamesLeft": 0.0,
        "matchRegion": "eu-west",
    },
    "Structures.ServerShutdown": {
        "time": 1520000600.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "matchTime": 480.0,
        "reason": "MatchEnded",
    },
    "Structures.RoundFinishedEvent": {
        "time": 1520000100.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "round": 1.0,
        "roundLength": 90.0,
        "winningTeam": 1.0,
        "playerStats": [_PLAYER_STATS],
    },
    "Structures.MatchFinishedEvent": {
        "time": 1520000590.0,
        "teamOneScore": 3.0,
        "teamTwoScore": 1.0,
        "matchLength": 470.0,
        "matchID": "M1",
        "externalMatchID": "EXT1",
        "leavers": [],
        "region": "eu-west",
    },
}

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


def build_event(discriminator: str, cursor: int = 0, **body: Any) -> dict[str, Any]:
    """Return a wire telemetry event, overriding ``dataObject`` members."""
    data_object = copy.deepcopy(EVENT_BODIES.get(discriminator, {"time": 0.0}))
    data_object.update(body)
    return {"type": discriminator, "cursor": float(cursor), "dataObject": data_object}


@pytest.fixture()
def make_event() -> Callable[..., dict[str, Any]]:
    """Return the telemetry event factory."""
    return build_event


# ------------------------------------------------------------------
# JSON:API resources
# ------------------------------------------------------------------


def _refs(type_: str, ids: list[str]) -> dict[str, Any]:
    return {"data": [{"type": type_, "id": i} for i in ids]}


class WireBuilder:
    """Builders for JSON:API resource objects as the service sends them."""

    @staticmethod
    def asset(asset_id: str = "a1") -> dict[str, Any]:
        return {
            "type": "asset",
            "id": asset_id,
            "attributes": {
                "URL": f"https://cdn.gamelockerapp.com/telemetry/{asset_id}.json",
                "createdAt": "2018-03-02T12:08:00Z",
                "description": "",
                "name": "telemetry",
            },
        }

    @staticmethod
    def round(round_id: str, ordinal: int = 0, winning_team: int = 1) -> dict[str, Any]:
        return {
            "type": "round",
            "id": round_id,
            "attributes": {
                "duration": 90.0,
                "ordinal": float(ordinal),
                "stats": {"winningTeam": float(winning_team)},
            },
        }

    @staticmethod
    def roster(
        roster_id: str,
        participant_ids: list[str],
        won: str = "true",
        team_id: str | None = None,
    ) -> dict[str, Any]:
        team_data = {"type": "team", "id": team_id} if team_id else None
        return {
            "type": "roster",
            "id": roster_id,
            "attributes": {
                "shardId": "global",
                "won": won,
                "stats": {"score": 3.0 if won == "true" else 1.0},
            },
            "relationships": {
                "participants": _refs("participant", participant_ids),
                "team": {"data": team_data},
            },
        }

    @staticmethod
    def participant(
        participant_id: str,
        player_id: str | None,
        user_id: str = "1001",
    ) -> dict[str, Any]:
        player_data = {"type": "player", "id": player_id} if player_id else None
        return {
            "type": "participant",
            "id": participant_id,
            "attributes": {
                "actor": "7",
                "shardId": "global",
                "stats": {
                    "userID": user_id,
                    "damageDone": 512.0,
                    "damageReceived": 300.0,
                    "deaths": 1.0,
                    "energyGained": 120.0,
                    "energyUsed": 100.0,
                    "kills": 2.0,
                    "score": 140.0,
                    "timeAlive": 95.0,
                    "abilityUses": 41.0,
                    "disablesDone": 6.0,
                    "disablesReceived": 3.0,
                    "emote": 3.0,
                    "mount": 60001.0,
                    "outfit": 2.0,
                    "attachment": 0.0,
                    "healingDone": 88.0,
                    "healingReceived": 40.0,
                    "side": 1.0,
                },
            },
            "relationships": {"player": {"data": player_data}},
        }

    @staticmethod
    def player(player_id: str, name: str = "") -> dict[str, Any]:
        return {
            "type": "player",
            "id": player_id,
            "attributes": {
                "name": name or f"player-{player_id}",
                "patchVersion": "",
                "shardId": "global",
                "stats": {},
                "titleId": "stunlock-studios-battlerite",
            },
            "relationships": {"assets": {"data": []}},
            "links": {
                "self": f"https://api.dc01.gamelockerapp.com/shards/global/players/{player_id}",
                "schema": "",
            },
        }

    @staticmethod
    def match(
        match_id: str,
        roster_ids: list[str],
        round_ids: list[str] | None = None,
        asset_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        return {
            "type": "match",
            "id": match_id,
            "attributes": {
                "createdAt": "2018-03-02T12:00:00Z",
                "duration": 470.0,
                "gameMode": "1733162751",
                "patchVersion": "2.13",
                "shardId": "global",
                "stats": {"mapID": "map-1", "type": "QUICK2V2"},
                "tags": {},
                "titleId": "stunlock-studios-battlerite",
            },
            "relationships": {
                "assets": _refs("asset", asset_ids or []),
                "rosters": _refs("roster", roster_ids),
                "rounds": _refs("round", round_ids or []),
                "spectators": {"data": []},
            },
            "links": {
                "self": f"https://api.dc01.gamelockerapp.com/shards/global/matches/{match_id}",
                "schema": "",
            },
        }


@pytest.fixture()
def wire() -> WireBuilder:
    """Return the JSON:API resource builder."""
    return WireBuilder()


@pytest.fixture()
def match_document(wire: WireBuilder) -> dict[str, Any]:
    """Return a single-match response with a shuffled ``included`` table.

    Rosters ``r1`` (participants ``p1``, ``p2``) and ``r2`` (``p3``);
    players ``u1``-``u3``; rounds ``rd1``, ``rd2``; asset ``a1``. The
    table also holds an unrelated participant ``p4`` and player ``u4``.
    """
    return {
        "data": wire.match("M1", ["r1", "r2"], ["rd1", "rd2"], ["a1"]),
        "included": [
            wire.participant("p3", "u3"),
            wire.player("u1", "Alice"),
            wire.roster("r2", ["p3"], won="false"),
            wire.round("rd2", ordinal=1, winning_team=2),
            wire.participant("p1", "u1"),
            wire.asset("a1"),
            wire.player("u4", "Mallory"),
            wire.participant("p4", "u4"),
            wire.roster("r1", ["p1", "p2"], won="true", team_id="T1"),
            wire.player("u3", "Carol"),
            wire.round("rd1", ordinal=0, winning_team=1),
            wire.participant("p2", "u2"),
            wire.player("u2", "Bob"),
        ],
        "links": {"self": "https://api.dc01.gamelockerapp.com/shards/global/matches/M1"},
        "meta": {},
    }
