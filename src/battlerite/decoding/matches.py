"""Match graph resolver.

The matches endpoint returns each match as a JSON:API resource whose
rosters, rounds and asset are only ``(type, id)`` references; the
referenced resources, together with their participants and players,
arrive denormalized in the response's flat ``included`` table.

:func:`resolve_match` rebuilds one match in three stages, each
depending on the output of the one before:

1. rosters, rounds and the asset referenced by the match itself;
2. participants referenced by any resolved roster;
3. players referenced by any resolved participant.

Every stage looks resources up in an index over ``included`` built
once per call, and returns them in ``included`` wire order. References
to resources the service did not include are omitted without error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from battlerite.decoding.fields import FieldReader, expect_array
from battlerite.decoding.records import (
    decode_asset,
    decode_match_player,
    decode_participant,
    decode_roster,
    decode_round,
)
from battlerite.schemas.entities import Asset, Match

if TYPE_CHECKING:
    from battlerite.api.envelope import Document

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _Entry:
    position: int
    resource: Mapping[str, Any]


def _resource_key(raw: object) -> tuple[str, str] | None:
    """Return ``(type, id)`` of a resource object, or ``None`` if unkeyed."""
    if not isinstance(raw, dict):
        return None
    type_, id_ = raw.get("type"), raw.get("id")
    if not isinstance(type_, str) or not isinstance(id_, str):
        return None
    return type_, id_


class IncludedIndex:
    """Lookup table from ``(type, id)`` to an ``included`` resource.

    When the table holds the same key twice, the first occurrence is
    indexed and later ones are ignored. Elements that cannot be keyed
    (not an object, or without string ``type`` and ``id``) can never be
    referenced and are skipped; only referenced resources are decoded,
    so only they can fail a resolve.

    Attributes:
        _entries: Indexed resources with their wire positions.
    """

    __slots__ = ("_entries",)

    def __init__(self, included: Sequence[Any]) -> None:
        """Index every keyable resource object in *included*.

        Args:
            included: The response's ``included`` array.
        """
        self._entries: dict[tuple[str, str], _Entry] = {}
        for position, raw in enumerate(included):
            key = _resource_key(raw)
            if key is None:
                logger.debug("Skipping unkeyed included element at %d", position)
                continue
            if key in self._entries:
                logger.debug("Ignoring duplicate included resource %s/%s", *key)
                continue
            self._entries[key] = _Entry(position, raw)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def resolve(
        self,
        type_: str,
        ids: Iterable[str],
        decode: Callable[[Any, str], T],
    ) -> tuple[T, ...]:
        """Decode the included resources of *type_* whose id is in *ids*.

        Args:
            type_: Resource type to look up.
            ids: Referenced ids; unknown ids are skipped.
            decode: Flat decoder applied to each found resource.

        Returns:
            Decoded records in ``included`` wire order, one per distinct
            resource.
        """
        found: dict[int, Mapping[str, Any]] = {}
        for id_ in ids:
            entry = self._entries.get((type_, id_))
            if entry is not None:
                found[entry.position] = entry.resource
        return tuple(
            decode(found[pos], f"included[{pos}]") for pos in sorted(found)
        )


def _resolve_asset(index: IncludedIndex, ids: Iterable[str]) -> Asset | None:
    """Return the last referenced asset in wire order, if any is included."""
    assets = index.resolve("asset", ids, decode_asset)
    return assets[-1] if assets else None


def resolve_match(
    primary: Any,
    included: Sequence[Any],
    *,
    path: str = "data",
) -> Match:
    """Reassemble a single match from its resource and the ``included`` table.

    Args:
        primary: The match resource object.
        included: The response's ``included`` array (may be empty).
        path: Location of *primary* inside the response, used in errors.

    Returns:
        The fully resolved :class:`Match`.

    Raises:
        DecodeError: If the match, or any resource it reaches, lacks a
            required field or has a malformed one.
    """
    res = FieldReader.wrap(primary, path)
    attributes = res.obj("attributes")
    stats = attributes.obj("stats")
    relationships = res.obj("relationships")

    asset_ids = [ref.id for ref in relationships.refs("assets")]
    roster_ids = [ref.id for ref in relationships.refs("rosters")]
    round_ids = [ref.id for ref in relationships.refs("rounds")]
    spectators = (
        relationships.refs("spectators") if relationships.has("spectators") else ()
    )

    index = IncludedIndex(included)

    rosters = index.resolve("roster", roster_ids, decode_roster)
    rounds = index.resolve("round", round_ids, decode_round)
    asset = _resolve_asset(index, asset_ids)

    participants = index.resolve(
        "participant",
        (pid for roster in rosters for pid in roster.participant_ids),
        decode_participant,
    )

    match_players = index.resolve(
        "player",
        (p.player_id for p in participants if p.player_id is not None),
        decode_match_player,
    )

    match = Match(
        type=res.string("type"),
        id=res.string("id"),
        link_self=res.obj("links").string("self"),
        created_at=attributes.string("createdAt"),
        duration=attributes.integer("duration"),
        game_mode=attributes.string("gameMode"),
        patch_version=attributes.string("patchVersion"),
        shard_id=attributes.string("shardId"),
        title_id=attributes.optional_string("titleId"),
        map_type=stats.string("type"),
        map_id=stats.string("mapID"),
        asset=asset,
        participants=participants,
        rosters=rosters,
        match_players=match_players,
        rounds=rounds,
        spectators=spectators,
    )
    logger.debug(
        "Resolved match %s: %d rosters, %d participants, %d players, %d rounds",
        match.id,
        len(rosters),
        len(participants),
        len(match_players),
        len(rounds),
    )
    return match


def resolve_matches(
    primaries: Sequence[Any],
    included: Sequence[Any],
) -> tuple[Match, ...]:
    """Resolve every match of a list response against one shared table.

    Each match only picks up the resources its own references reach,
    so resources belonging to other matches in the same table are
    never assigned to it.

    Args:
        primaries: The response's ``data`` array of match resources.
        included: The response's shared ``included`` array.

    Returns:
        One :class:`Match` per primary, in input order.
    """
    return tuple(
        resolve_match(primary, included, path=f"data[{i}]")
        for i, primary in enumerate(primaries)
    )


def match_from_document(document: Document) -> Match:
    """Resolve the single match carried by a ``matches/{id}`` response."""
    return resolve_match(document.data, document.included)


def matches_from_document(document: Document) -> tuple[Match, ...]:
    """Resolve every match carried by a ``matches`` collection response."""
    return resolve_matches(expect_array(document.data, "data"), document.included)
