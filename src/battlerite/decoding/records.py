"""Flat decoders for single JSON:API resource objects.

Each ``decode_*`` function maps exactly one resource object onto one
record from :mod:`battlerite.schemas.entities`. The functions do not
follow relationships; they only capture the referenced ids so that
:mod:`battlerite.decoding.matches` can join resources afterwards.

All decoders share the same contract: the whole record is produced or a
:class:`~battlerite.exceptions.DecodeError` is raised naming the first
missing or malformed field.
"""

from __future__ import annotations

from typing import Any

from battlerite.decoding.fields import FieldReader, expect_array
from battlerite.schemas.entities import (
    Asset,
    MatchPlayer,
    Participant,
    Player,
    Round,
    Roster,
    Status,
    Team,
)

# Champion name -> (character index, internal character name), as used by
# the service's mapping files.
CHAMPIONS: dict[str, tuple[int, str]] = {
    "Lucie": (1, "Alchemist"),
    "Sirius": (2, "Astronomer"),
    "Iva": (3, "Engineer"),
    "Jade": (4, "Gunner"),
    "RuhKaan": (5, "Harbinger"),
    "Oldur": (6, "Herald"),
    "Ashka": (7, "Igniter"),
    "Varesh": (8, "Inhibitor"),
    "Pearl": (9, "Inquisitor"),
    "Taya": (10, "Nomad"),
    "Poloma": (11, "Psychopomp"),
    "Croak": (12, "Ranid"),
    "Freya": (13, "Ravener"),
    "Jumong": (14, "Seeker"),
    "Shifu": (15, "Spearmaster"),
    "Ezmo": (16, "Stormcaller"),
    "Bakko": (17, "Vanguard"),
    "Rook": (18, "Glutton"),
    "Pestilus": (19, "BloodPriest"),
    "Destiny": (20, "MetalWarden"),
    "Raigon": (21, "Swordmaster"),
    "Blossom": (22, "Druid"),
    "Thorn": (25, "Thorn"),
    "Zander": (35, "MirrorMage"),
    "Ulric": (39, "Paladin"),
    "Alysia": (41, "FrostMage"),
    "Jamila": (43, "Stalker"),
}

# Per-champion stats live under key ``offset + character index``.
CHARACTER_STAT_OFFSETS: dict[str, int] = {
    "xp": 11000,
    "wins": 12000,
    "losses": 13000,
    "kills": 14000,
    "deaths": 15000,
    "time_played": 16000,
    "ranked_2v2_wins": 17000,
    "ranked_2v2_losses": 18000,
    "ranked_3v3_wins": 19000,
    "ranked_3v3_losses": 20000,
    "unranked_2v2_wins": 21000,
    "unranked_2v2_losses": 22000,
    "unranked_3v3_wins": 23000,
    "unranked_3v3_losses": 24000,
    "brawl_wins": 25000,
    "brawl_losses": 26000,
    "battlegrounds_wins": 27000,
    "battlegrounds_losses": 28000,
    "levels": 40000,
}

# Player field -> numeric stat key on the wire.
_PLAYER_STAT_KEYS: dict[str, str] = {
    "picture": "picture",
    "wins": "2",
    "losses": "3",
    "grade_score": "4",
    "time_played": "8",
    "ranked_2v2_wins": "10",
    "ranked_2v2_losses": "11",
    "ranked_3v3_wins": "12",
    "ranked_3v3_losses": "13",
    "unranked_2v2_wins": "14",
    "unranked_2v2_losses": "15",
    "unranked_3v3_wins": "16",
    "unranked_3v3_losses": "17",
    "brawl_wins": "18",
    "brawl_losses": "19",
    "battlegrounds_wins": "22",
    "battlegrounds_losses": "23",
    "account_xp": "25",
    "account_level": "26",
    "twitch_account_linked": "27",
    "vs_ai_played": "56",
    "rating_mean": "70",
    "rating_dev": "71",
}

_PARTICIPANT_STATS: tuple[str, ...] = (
    "damageDone",
    "damageReceived",
    "deaths",
    "energyGained",
    "energyUsed",
    "kills",
    "score",
    "timeAlive",
    "abilityUses",
    "disablesDone",
    "disablesReceived",
    "emote",
    "mount",
    "outfit",
    "attachment",
    "healingDone",
    "healingReceived",
    "side",
)


def _snake(name: str) -> str:
    """Convert a camelCase wire name to snake_case."""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


def character_stats(stats: FieldReader, offset: int) -> dict[str, int]:
    """Collect one per-champion statistic from a player's stats block.

    Args:
        stats: Reader over the player's ``attributes.stats`` object.
        offset: Base key of the statistic (see
            :data:`CHARACTER_STAT_OFFSETS`).

    Returns:
        Mapping of champion name to value, ``0`` where the service sent
        nothing.
    """
    return {
        champion: stats.optional_int(str(offset + index))
        for champion, (index, _internal) in CHAMPIONS.items()
    }


def decode_status(data: Any, path: str = "data") -> Status:
    """Decode the service status resource."""
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    return Status(
        type=res.string("type"),
        id=res.string("id"),
        released_at=attributes.string("releasedAt"),
        version=attributes.string("version"),
    )


def decode_player(data: Any, path: str = "data") -> Player:
    """Decode a player resource from the players endpoint.

    Statistics are keyed by numeric strings on the wire and are often
    missing for accounts that never played a mode, so every stat falls
    back to ``0``.

    Args:
        data: The player resource object.
        path: Location of *data* inside the response, used in errors.

    Returns:
        The decoded :class:`Player`.

    Raises:
        DecodeError: If a required field is missing or malformed.
    """
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    stats = attributes.obj("stats")
    scalar_stats = {
        field: stats.optional_int(key) for field, key in _PLAYER_STAT_KEYS.items()
    }
    return Player(
        type=res.string("type"),
        id=res.int_string("id"),
        link_self=res.obj("links").string("self"),
        title_id=attributes.string("titleId"),
        name=attributes.string("name"),
        character_stats={
            name: character_stats(stats, offset)
            for name, offset in CHARACTER_STAT_OFFSETS.items()
        },
        **scalar_stats,
    )


def decode_players(data: Any, path: str = "data") -> tuple[Player, ...]:
    """Decode an array of player resources."""
    items = expect_array(data, path)
    return tuple(decode_player(item, f"{path}[{i}]") for i, item in enumerate(items))


def decode_team(data: Any, path: str = "data") -> Team:
    """Decode a team resource from the teams endpoint.

    Args:
        data: The team resource object.
        path: Location of *data* inside the response, used in errors.

    Returns:
        The decoded :class:`Team`.
    """
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    stats = attributes.obj("stats")
    relationships = res.obj("relationships")
    return Team(
        type=res.string("type"),
        id=res.int_string("id"),
        name=attributes.string("name"),
        shard_id=attributes.string("shardId"),
        title_id=attributes.string("titleId"),
        placement_games_left=stats.integer("placementGamesLeft"),
        avatar=stats.integer("avatar"),
        wins=stats.integer("wins"),
        losses=stats.integer("losses"),
        members=stats.integers("members"),
        division=stats.integer("division"),
        division_rating=stats.integer("divisionRating"),
        top_division=stats.integer("topDivision"),
        top_division_rating=stats.integer("topDivisionRating"),
        league=stats.integer("league"),
        top_league=stats.integer("topLeague"),
        assets=relationships.refs("assets"),
    )


def decode_teams(data: Any, path: str = "data") -> tuple[Team, ...]:
    """Decode an array of team resources."""
    items = expect_array(data, path)
    return tuple(decode_team(item, f"{path}[{i}]") for i, item in enumerate(items))


def decode_asset(data: Any, path: str = "") -> Asset:
    """Decode an asset resource (usually the telemetry link)."""
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    return Asset(
        type=res.string("type"),
        id=res.string("id"),
        url=attributes.string("URL"),
        created_at=attributes.string("createdAt"),
        description=attributes.optional_string("description"),
        name=attributes.string("name"),
    )


def decode_round(data: Any, path: str = "") -> Round:
    """Decode a round resource."""
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    return Round(
        type=res.string("type"),
        id=res.string("id"),
        winning_team=attributes.obj("stats").integer("winningTeam"),
        duration=attributes.integer("duration"),
        ordinal=attributes.integer("ordinal"),
    )


def decode_roster(data: Any, path: str = "") -> Roster:
    """Decode a roster resource.

    The ids in the ``participants`` relationship are kept on the record
    because participant membership in a match is defined through them.
    """
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    relationships = res.obj("relationships")
    team = relationships.ref("team") if relationships.has("team") else None
    return Roster(
        type=res.string("type"),
        id=res.string("id"),
        shard_id=attributes.string("shardId"),
        won=attributes.flag("won"),
        score=attributes.obj("stats").integer("score"),
        participant_ids=tuple(ref.id for ref in relationships.refs("participants")),
        team_id=team.id if team is not None else None,
    )


def decode_participant(data: Any, path: str = "") -> Participant:
    """Decode a participant resource.

    ``actor`` and ``stats.userID`` arrive as decimal strings; the
    remaining stats are JSON numbers.
    """
    res = FieldReader.wrap(data, path)
    attributes = res.obj("attributes")
    stats = attributes.obj("stats")
    player = res.obj("relationships").ref("player")
    counters = {_snake(name): stats.integer(name) for name in _PARTICIPANT_STATS}
    return Participant(
        type=res.string("type"),
        id=res.string("id"),
        actor=attributes.int_string("actor"),
        shard_id=attributes.string("shardId"),
        user_id=stats.int_string("userID"),
        player_id=player.id if player is not None else None,
        **counters,
    )


def decode_match_player(data: Any, path: str = "") -> MatchPlayer:
    """Decode a player resource embedded in a match response."""
    res = FieldReader.wrap(data, path)
    return MatchPlayer(
        type=res.string("type"),
        id=res.string("id"),
        link_self=res.obj("links").string("self"),
        attributes=res.obj("attributes").to_dict(),
        assets=res.obj("relationships").refs("assets"),
    )
