"""Tests for battlerite.decoding.records.

Checks the flat decoders for status, player, team, asset, round,
roster, participant and embedded match-player resources against
wire-shaped fixtures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
import pytest

from battlerite.decoding.records import (
    CHAMPIONS,
    CHARACTER_STAT_OFFSETS,
    _PARTICIPANT_STATS,
    _PLAYER_STAT_KEYS,
    _snake,
    decode_asset,
    decode_match_player,
    decode_participant,
    decode_player,
    decode_players,
    decode_roster,
    decode_round,
    decode_status,
    decode_team,
    decode_teams,
)
from battlerite.exceptions import FieldTypeError, MissingFieldError
from battlerite.schemas.entities import ResourceRef

if TYPE_CHECKING:
    from collections.abc import Callable

    from battlerite.schemas.entities import (
        Asset,
        MatchPlayer,
        Participant,
        Player,
        Round,
        Roster,
        Team,
    )
    from conftest import WireBuilder


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------


def _player_resource(stats: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "type": "player",
        "id": "776425336524472320",
        "attributes": {
            "name": "Boltman",
            "patchVersion": "",
            "shardId": "global",
            "stats": stats if stats is not None else {},
            "titleId": "stunlock-studios-battlerite",
        },
        "links": {
            "self": "https://api.dc01.gamelockerapp.com/shards/global/players/776425336524472320",
        },
    }


def _team_resource(team_id: str = "654") -> dict[str, Any]:
    return {
        "type": "team",
        "id": team_id,
        "attributes": {
            "name": "Sunday League",
            "shardId": "global",
            "titleId": "stunlock-studios-battlerite",
            "stats": {
                "placementGamesLeft": 0.0,
                "avatar": 39000.0,
                "wins": 12.0,
                "losses": 4.0,
                "members": [1001.0, 1003.0],
                "division": 2.0,
                "divisionRating": 55.0,
                "topDivision": 1.0,
                "topDivisionRating": 80.0,
                "league": 4.0,
                "topLeague": 5.0,
            },
        },
        "relationships": {"assets": {"data": []}},
    }


# ------------------------------------------------------------------
# Status
# ------------------------------------------------------------------


class TestDecodeStatus:
    """Service status resource."""

    def test_fields(self) -> None:
        """Status exposes release time and version."""
        status = decode_status(
            {
                "type": "status",
                "id": "gamelocker",
                "attributes": {"releasedAt": "2018-01-01T00:00:00Z", "version": "v6.2.2"},
            }
        )
        assert status.id == "gamelocker"
        assert status.released_at == "2018-01-01T00:00:00Z"
        assert status.version == "v6.2.2"

    def test_missing_attributes(self) -> None:
        """Missing attributes are reported with their path."""
        with pytest.raises(MissingFieldError) as excinfo:
            decode_status({"type": "status", "id": "x"})
        assert excinfo.value.path == "data.attributes"


# ------------------------------------------------------------------
# Players
# ------------------------------------------------------------------


class TestDecodePlayer:
    """Player resources from the players endpoint."""

    def test_identity(self) -> None:
        """The numeric-string id is parsed into an int."""
        player = decode_player(_player_resource())
        assert player.id == 776425336524472320
        assert player.name == "Boltman"
        assert player.title_id == "stunlock-studios-battlerite"
        assert player.link_self.endswith("/players/776425336524472320")

    def test_missing_stats_default_to_zero(self) -> None:
        """Accounts without stats decode with zero counters."""
        player = decode_player(_player_resource())
        assert player.wins == 0
        assert player.account_level == 0
        assert player.character_stats["xp"]["Jade"] == 0

    def test_null_stat_defaults_to_zero(self) -> None:
        """A null stat value is treated like an absent one."""
        player = decode_player(_player_resource({"2": None}))
        assert player.wins == 0

    def test_numeric_stat_keys(self) -> None:
        """Scalar stats are read from their numeric wire keys."""
        player = decode_player(
            _player_resource({"2": 120.0, "3": 80.0, "26": 31.0, "picture": 39003.0})
        )
        assert player.wins == 120
        assert player.losses == 80
        assert player.account_level == 31
        assert player.picture == 39003

    def test_character_stats_offsets(self) -> None:
        """Per-champion stats live at offset plus character index."""
        index = CHAMPIONS["Blossom"][0]
        stats = {
            str(CHARACTER_STAT_OFFSETS["levels"] + index): 14.0,
            str(CHARACTER_STAT_OFFSETS["wins"] + CHAMPIONS["Jade"][0]): 33.0,
        }
        player = decode_player(_player_resource(stats))
        assert player.character_stats["levels"]["Blossom"] == 14
        assert player.character_stats["wins"]["Jade"] == 33
        assert set(player.character_stats) == set(CHARACTER_STAT_OFFSETS)
        assert set(player.character_stats["levels"]) == set(CHAMPIONS)

    def test_decode_players_paths(self) -> None:
        """Array decoding reports the failing element."""
        bad = _player_resource()
        del bad["attributes"]["name"]
        with pytest.raises(MissingFieldError) as excinfo:
            decode_players([_player_resource(), bad])
        assert excinfo.value.path == "data[1].attributes.name"

    def test_decode_players_requires_array(self) -> None:
        """A single object is not accepted as a collection."""
        with pytest.raises(FieldTypeError):
            decode_players(_player_resource())


# ------------------------------------------------------------------
# Teams
# ------------------------------------------------------------------


class TestDecodeTeam:
    """Team resources from the teams endpoint."""

    def test_fields(self) -> None:
        """Team stats are truncated to ints and members kept in order."""
        team = decode_team(_team_resource())
        assert team.id == 654
        assert team.name == "Sunday League"
        assert team.members == (1001, 1003)
        assert team.wins == 12
        assert team.top_league == 5
        assert team.assets == ()

    def test_decode_teams(self) -> None:
        """Every element of the array is decoded in order."""
        teams = decode_teams([_team_resource("1"), _team_resource("2")])
        assert [t.id for t in teams] == [1, 2]


# ------------------------------------------------------------------
# Match resources
# ------------------------------------------------------------------


class TestMatchResources:
    """Resources found in a match response's included table."""

    def test_asset(self, wire: WireBuilder) -> None:
        """Assets expose the telemetry URL."""
        asset = decode_asset(wire.asset("a1"), "included[0]")
        assert asset.id == "a1"
        assert asset.url.endswith("/a1.json")
        assert asset.name == "telemetry"

    def test_asset_without_description(self, wire: WireBuilder) -> None:
        """The description attribute is optional."""
        raw = wire.asset("a1")
        del raw["attributes"]["description"]
        assert decode_asset(raw).description == ""

    def test_round(self, wire: WireBuilder) -> None:
        """Rounds carry ordinal, duration and winner."""
        rnd = decode_round(wire.round("rd1", ordinal=2, winning_team=2))
        assert (rnd.ordinal, rnd.duration, rnd.winning_team) == (2, 90, 2)

    def test_roster(self, wire: WireBuilder) -> None:
        """Rosters keep their participant ids and string 'won' flag."""
        roster = decode_roster(wire.roster("r1", ["p1", "p2"], won="true", team_id="T1"))
        assert roster.won is True
        assert roster.score == 3
        assert roster.participant_ids == ("p1", "p2")
        assert roster.team_id == "T1"

    def test_roster_without_team(self, wire: WireBuilder) -> None:
        """A null or absent team relationship gives no team id."""
        raw = wire.roster("r2", ["p3"], won="false")
        assert decode_roster(raw).team_id is None
        del raw["relationships"]["team"]
        assert decode_roster(raw).won is False
        assert decode_roster(raw).team_id is None

    def test_roster_bad_won(self, wire: WireBuilder) -> None:
        """An unrecognised 'won' value is a type error."""
        raw = wire.roster("r1", [])
        raw["attributes"]["won"] = "maybe"
        with pytest.raises(FieldTypeError) as excinfo:
            decode_roster(raw, "included[3]")
        assert excinfo.value.path == "included[3].attributes.won"

    def test_participant(self, wire: WireBuilder) -> None:
        """Participants parse string ids and snake-case their counters."""
        participant = decode_participant(wire.participant("p1", "1001"))
        assert participant.actor == 7
        assert participant.user_id == 1001
        assert participant.player_id == "1001"
        assert participant.damage_done == 512
        assert participant.healing_received == 40
        assert participant.ability_uses == 41

    def test_participant_without_player(self, wire: WireBuilder) -> None:
        """A null player linkage leaves player_id unset."""
        participant = decode_participant(wire.participant("p9", None))
        assert participant.player_id is None

    def test_match_player(self, wire: WireBuilder) -> None:
        """Embedded players keep their raw attributes."""
        player = decode_match_player(wire.player("u1", "Alice"))
        assert player.id == "u1"
        assert player.attributes["name"] == "Alice"
        assert player.assets == ()
        assert player.link_self.endswith("/players/u1")

    def test_match_player_assets(self, wire: WireBuilder) -> None:
        """Player asset linkage is captured as references."""
        raw = wire.player("u1")
        raw["relationships"]["assets"]["data"] = [{"type": "asset", "id": "x"}]
        assert decode_match_player(raw).assets == (ResourceRef("asset", "x"),)

    def test_participant_user_id_independent_of_player(self, wire: WireBuilder) -> None:
        """The numeric userID stat is separate from the player linkage id."""
        participant = decode_participant(wire.participant("p1", "u1", user_id="1003"))
        assert participant.user_id == 1003
        assert participant.player_id == "u1"


# ------------------------------------------------------------------
# Round trip
# ------------------------------------------------------------------


def _refs_wire(refs: tuple[ResourceRef, ...]) -> dict[str, Any]:
    return {"data": [{"type": r.type, "id": r.id} for r in refs]}


def _asset_wire(asset: Asset) -> dict[str, Any]:
    return {
        "type": asset.type,
        "id": asset.id,
        "attributes": {
            "URL": asset.url,
            "createdAt": asset.created_at,
            "description": asset.description,
            "name": asset.name,
        },
    }


def _round_wire(rnd: Round) -> dict[str, Any]:
    return {
        "type": rnd.type,
        "id": rnd.id,
        "attributes": {
            "duration": rnd.duration,
            "ordinal": rnd.ordinal,
            "stats": {"winningTeam": rnd.winning_team},
        },
    }


def _roster_wire(roster: Roster) -> dict[str, Any]:
    team = {"type": "team", "id": roster.team_id} if roster.team_id else None
    return {
        "type": roster.type,
        "id": roster.id,
        "attributes": {
            "shardId": roster.shard_id,
            "won": roster.won,
            "stats": {"score": roster.score},
        },
        "relationships": {
            "participants": {
                "data": [{"type": "participant", "id": i} for i in roster.participant_ids]
            },
            "team": {"data": team},
        },
    }


def _participant_wire(participant: Participant) -> dict[str, Any]:
    stats: dict[str, Any] = {"userID": str(participant.user_id)}
    stats.update({name: getattr(participant, _snake(name)) for name in _PARTICIPANT_STATS})
    player = (
        {"type": "player", "id": participant.player_id} if participant.player_id else None
    )
    return {
        "type": participant.type,
        "id": participant.id,
        "attributes": {
            "actor": str(participant.actor),
            "shardId": participant.shard_id,
            "stats": stats,
        },
        "relationships": {"player": {"data": player}},
    }


def _team_wire(team: Team) -> dict[str, Any]:
    return {
        "type": team.type,
        "id": str(team.id),
        "attributes": {
            "name": team.name,
            "shardId": team.shard_id,
            "titleId": team.title_id,
            "stats": {
                "placementGamesLeft": team.placement_games_left,
                "avatar": team.avatar,
                "wins": team.wins,
                "losses": team.losses,
                "members": list(team.members),
                "division": team.division,
                "divisionRating": team.division_rating,
                "topDivision": team.top_division,
                "topDivisionRating": team.top_division_rating,
                "league": team.league,
                "topLeague": team.top_league,
            },
        },
        "relationships": {"assets": _refs_wire(team.assets)},
    }


def _player_wire(player: Player) -> dict[str, Any]:
    stats: dict[str, Any] = {
        key: getattr(player, field) for field, key in _PLAYER_STAT_KEYS.items()
    }
    for stat, offset in CHARACTER_STAT_OFFSETS.items():
        for champion, (index, _internal) in CHAMPIONS.items():
            stats[str(offset + index)] = player.character_stats[stat][champion]
    return {
        "type": player.type,
        "id": str(player.id),
        "attributes": {"name": player.name, "titleId": player.title_id, "stats": stats},
        "links": {"self": player.link_self},
    }


def _match_player_wire(player: MatchPlayer) -> dict[str, Any]:
    return {
        "type": player.type,
        "id": player.id,
        "attributes": player.attributes,
        "relationships": {"assets": _refs_wire(player.assets)},
        "links": {"self": player.link_self},
    }


def _sample_player() -> dict[str, Any]:
    stats = {"2": 120.0, "3": 80.0, "26": 31.0, "70": 1500.0, "picture": 39003.0}
    stats[str(CHARACTER_STAT_OFFSETS["levels"] + CHAMPIONS["Blossom"][0])] = 14.0
    stats[str(CHARACTER_STAT_OFFSETS["xp"] + CHAMPIONS["Jamila"][0])] = 9000.0
    return _player_resource(stats)


def _sample_team() -> dict[str, Any]:
    raw = _team_resource()
    raw["relationships"]["assets"]["data"] = [{"type": "asset", "id": "avatar-1"}]
    return raw


def _sample_match_player(wire: WireBuilder) -> dict[str, Any]:
    raw = wire.player("u1", "Alice")
    raw["relationships"]["assets"]["data"] = [{"type": "asset", "id": "x"}]
    return raw


ROUND_TRIP_CASES = [
    pytest.param(decode_asset, _asset_wire, lambda w: w.asset("a1"), id="asset"),
    pytest.param(decode_round, _round_wire, lambda w: w.round("rd1", 2, 2), id="round"),
    pytest.param(
        decode_roster,
        _roster_wire,
        lambda w: w.roster("r1", ["p2", "p1"], won="false", team_id="T9"),
        id="roster",
    ),
    pytest.param(
        decode_roster, _roster_wire, lambda w: w.roster("r2", ["p3"]), id="roster-no-team"
    ),
    pytest.param(
        decode_participant,
        _participant_wire,
        lambda w: w.participant("p1", "u1", user_id="1003"),
        id="participant",
    ),
    pytest.param(
        decode_participant,
        _participant_wire,
        lambda w: w.participant("p9", None),
        id="participant-no-player",
    ),
    pytest.param(decode_team, _team_wire, lambda w: _sample_team(), id="team"),
    pytest.param(decode_player, _player_wire, lambda w: _sample_player(), id="player"),
    pytest.param(
        decode_match_player, _match_player_wire, _sample_match_player, id="match-player"
    ),
]


class TestRoundTrip:
    """Decoding, re-serializing and re-decoding loses nothing."""

    @pytest.mark.parametrize(("decode", "to_wire", "source"), ROUND_TRIP_CASES)
    def test_round_trip(
        self,
        wire: WireBuilder,
        decode: Callable[[Any], Any],
        to_wire: Callable[[Any], dict[str, Any]],
        source: Callable[[WireBuilder], dict[str, Any]],
    ) -> None:
        """The re-decoded record equals the original field for field."""
        record = decode(source(wire))
        rebuilt = orjson.loads(orjson.dumps(to_wire(record)))
        assert decode(rebuilt) == record

    def test_player_round_trip_keeps_champion_stats(self) -> None:
        """Per-champion values survive the numeric key encoding."""
        player = decode_player(_sample_player())
        again = decode_player(orjson.loads(orjson.dumps(_player_wire(player))))
        assert again.character_stats["levels"]["Blossom"] == 14
        assert again.character_stats["xp"]["Jamila"] == 9000
        assert again.rating_mean == 1500
