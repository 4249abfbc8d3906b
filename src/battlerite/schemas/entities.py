"""Record types for JSON:API resources served by the Gamelocker API.

Every record is a frozen, slotted dataclass built once per response.
Relationships that the wire format expresses as ``(type, id)``
references are kept as :class:`ResourceRef` tuples on the owning record
and are joined into nested structures by
:mod:`battlerite.decoding.matches`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ResourceRef:
    """A JSON:API resource identifier.

    Attributes:
        type: Resource type (e.g. ``"roster"``, ``"participant"``).
        id: Resource identifier, unique within its type.
    """

    type: str
    id: str


@dataclass(frozen=True, slots=True)
class Status:
    """State of the Gamelocker API.

    Attributes:
        type: Resource type, always ``"status"``.
        id: Resource identifier.
        released_at: Release timestamp of the running service build.
        version: Version string of the running service build.
    """

    type: str
    id: str
    released_at: str
    version: str


@dataclass(frozen=True, slots=True)
class Player:
    """Account-level statistics for a single Battlerite user.

    Scalar statistics are mapped from the numeric stat keys used on the
    wire; stats the service omits or sends as ``null`` are ``0``.

    Attributes:
        type: Resource type, always ``"player"``.
        id: Numeric account identifier.
        link_self: Canonical URL of this resource.
        title_id: Game title identifier.
        name: Display name.
        character_stats: Per-champion statistics keyed first by stat
            name (see :data:`battlerite.decoding.records.CHARACTER_STAT_OFFSETS`)
            and then by champion name.
    """

    type: str
    id: int
    link_self: str
    title_id: str
    name: str
    picture: int
    wins: int
    losses: int
    grade_score: int
    time_played: int
    ranked_2v2_wins: int
    ranked_2v2_losses: int
    ranked_3v3_wins: int
    ranked_3v3_losses: int
    unranked_2v2_wins: int
    unranked_2v2_losses: int
    unranked_3v3_wins: int
    unranked_3v3_losses: int
    brawl_wins: int
    brawl_losses: int
    battlegrounds_wins: int
    battlegrounds_losses: int
    account_xp: int
    account_level: int
    twitch_account_linked: int
    vs_ai_played: int
    rating_mean: int
    rating_dev: int
    character_stats: dict[str, dict[str, int]]


@dataclass(frozen=True, slots=True)
class Team:
    """A ranked team for one season.

    Attributes:
        type: Resource type, always ``"team"``.
        id: Numeric team identifier.
        name: Team display name.
        shard_id: Shard the team belongs to.
        title_id: Game title identifier.
        members: Account identifiers of the team members.
        assets: References to the team's asset resources.
    """

    type: str
    id: int
    name: str
    shard_id: str
    title_id: str
    placement_games_left: int
    avatar: int
    wins: int
    losses: int
    members: tuple[int, ...]
    division: int
    division_rating: int
    top_division: int
    top_division_rating: int
    league: int
    top_league: int
    assets: tuple[ResourceRef, ...]


@dataclass(frozen=True, slots=True)
class Asset:
    """A downloadable match asset, mainly the telemetry file.

    Attributes:
        type: Resource type, always ``"asset"``.
        id: Resource identifier.
        url: Absolute download URL of the asset.
        created_at: ISO 8601 creation timestamp.
        description: Free-form description supplied by the service.
        name: Asset name (``"telemetry"`` for telemetry files).
    """

    type: str
    id: str
    url: str
    created_at: str
    description: str
    name: str


@dataclass(frozen=True, slots=True)
class Round:
    """One round of a match.

    Attributes:
        type: Resource type, always ``"round"``.
        id: Resource identifier.
        winning_team: Side (1 or 2) that won the round.
        duration: Round length in seconds.
        ordinal: Zero-based position of the round in the match.
    """

    type: str
    id: str
    winning_team: int
    duration: int
    ordinal: int


@dataclass(frozen=True, slots=True)
class Roster:
    """A team's presence in a single match.

    Attributes:
        type: Resource type, always ``"roster"``.
        id: Resource identifier.
        shard_id: Shard the match was played on.
        won: Whether this roster won the match.
        score: Rounds won by this roster.
        participant_ids: Ids of the participants listed in the roster's
            ``participants`` relationship, in wire order.
        team_id: Id of the related team resource, or ``None`` when the
            roster is not tied to a ranked team.
    """

    type: str
    id: str
    shard_id: str
    won: bool
    score: int
    participant_ids: tuple[str, ...]
    team_id: str | None


@dataclass(frozen=True, slots=True)
class Participant:
    """A player's performance record within one match.

    Attributes:
        type: Resource type, always ``"participant"``.
        id: Resource identifier.
        actor: Character index the participant played.
        shard_id: Shard the match was played on.
        user_id: Numeric account identifier of the player.
        side: Team side (1 or 2).
        player_id: Id of the related player resource, or ``None`` when
            the relationship carries no data.
    """

    type: str
    id: str
    actor: int
    shard_id: str
    user_id: int
    damage_done: int
    damage_received: int
    deaths: int
    energy_gained: int
    energy_used: int
    kills: int
    score: int
    time_alive: int
    ability_uses: int
    disables_done: int
    disables_received: int
    emote: int
    mount: int
    outfit: int
    attachment: int
    healing_done: int
    healing_received: int
    side: int
    player_id: str | None


@dataclass(frozen=True, slots=True)
class MatchPlayer:
    """A player resource embedded in a match response.

    Attributes:
        type: Resource type, always ``"player"``.
        id: Resource identifier.
        link_self: Canonical URL of the player resource.
        attributes: The resource's attributes as sent by the service.
        assets: References listed in the ``assets`` relationship.
    """

    type: str
    id: str
    link_self: str
    attributes: dict[str, Any]
    assets: tuple[ResourceRef, ...]


@dataclass(frozen=True, slots=True)
class Match:
    """A fully resolved match.

    Attributes:
        type: Resource type, always ``"match"``.
        id: Match identifier.
        link_self: Canonical URL of the match resource.
        created_at: ISO 8601 timestamp of the match.
        duration: Match length in seconds.
        game_mode: Game mode identifier.
        patch_version: Game patch the match was played on.
        shard_id: Shard the match was played on.
        title_id: Game title identifier (empty when not sent).
        map_type: Map type from the match stats block.
        map_id: Map identifier from the match stats block.
        asset: Telemetry asset, or ``None`` when not included.
        participants: Participants of the match's rosters.
        rosters: Rosters referenced by the match.
        match_players: Players referenced by the participants.
        rounds: Rounds referenced by the match.
        spectators: References listed in the ``spectators``
            relationship.
    """

    type: str
    id: str
    link_self: str
    created_at: str
    duration: int
    game_mode: str
    patch_version: str
    shard_id: str
    title_id: str
    map_type: str
    map_id: str
    asset: Asset | None
    participants: tuple[Participant, ...]
    rosters: tuple[Roster, ...]
    match_players: tuple[MatchPlayer, ...]
    rounds: tuple[Round, ...]
    spectators: tuple[ResourceRef, ...]

    def roster_participants(self, roster: Roster) -> tuple[Participant, ...]:
        """Return the resolved participants that belong to *roster*."""
        wanted = set(roster.participant_ids)
        return tuple(p for p in self.participants if p.id in wanted)

    def player_for(self, participant: Participant) -> MatchPlayer | None:
        """Return the resolved player behind *participant*, if included."""
        for player in self.match_players:
            if player.id == participant.player_id:
                return player
        return None
