"""Tabular export of decoded records.

Turns a :class:`~battlerite.schemas.telemetry.Telemetry` or a resolved
:class:`~battlerite.schemas.entities.Match` into tidy
:class:`polars.DataFrame` objects, one row per record, for analysis.

Public API
----------
.. function:: telemetry_frames

    One DataFrame per multi-occurrence event kind plus a per-player
    round statistics frame.

.. function:: participants_frame

    One row per participant of a match, joined to its roster and player.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

import polars as pl

if TYPE_CHECKING:
    from collections.abc import Sequence

    from battlerite.schemas.entities import Match
    from battlerite.schemas.telemetry import Telemetry

# Telemetry fields exported as one frame each.
_SEQUENCE_SLOTS: tuple[str, ...] = (
    "round_events",
    "user_round_spells",
    "death_events",
    "match_reserved_users",
    "queue_events",
    "team_update_events",
    "round_finished_events",
)

# Nested fields that do not fit a flat column and are left out.
_NESTED_FIELDS: frozenset[str] = frozenset(
    {"player_stats", "region_samples", "queue_types", "team_members", "user_ids"}
)


def _flat_row(record: Any) -> dict[str, Any]:
    """Return the scalar fields of a dataclass record as a dict."""
    return {
        f.name: getattr(record, f.name)
        for f in dataclasses.fields(record)
        if f.name not in _NESTED_FIELDS
    }


def records_frame(records: Sequence[Any]) -> pl.DataFrame:
    """Build a DataFrame from homogeneous dataclass records.

    Args:
        records: Records of a single dataclass type.

    Returns:
        A DataFrame with one row per record and one column per scalar
        field; empty (no columns) when *records* is empty.
    """
    return pl.DataFrame([_flat_row(r) for r in records])


def telemetry_frames(telemetry: Telemetry) -> dict[str, pl.DataFrame]:
    """Export every multi-occurrence event kind as a DataFrame.

    Args:
        telemetry: Classified telemetry of one match.

    Returns:
        Mapping of telemetry slot name (e.g. ``"round_events"``) to its
        DataFrame, plus ``"round_player_stats"`` with one row per
        player per finished round.
    """
    frames = {
        slot: records_frame(getattr(telemetry, slot)) for slot in _SEQUENCE_SLOTS
    }

    stats_rows: list[dict[str, Any]] = []
    for finished in telemetry.round_finished_events:
        for stats in finished.player_stats:
            row: dict[str, Any] = {
                "match_id": finished.match_id,
                "round": finished.round,
                "winning_team": finished.winning_team,
            }
            row.update(dataclasses.asdict(stats))
            stats_rows.append(row)
    frames["round_player_stats"] = pl.DataFrame(stats_rows)
    return frames


def participants_frame(match: Match) -> pl.DataFrame:
    """Export a match's participants joined to their roster and player.

    Args:
        match: A resolved match.

    Returns:
        A DataFrame with match and roster columns (``match_id``,
        ``roster_id``, ``won``, ``player_name``) followed by the
        participant's scalar fields.
    """
    rows: list[dict[str, Any]] = []
    for roster in match.rosters:
        for participant in match.roster_participants(roster):
            player = match.player_for(participant)
            row: dict[str, Any] = {
                "match_id": match.id,
                "roster_id": roster.id,
                "won": roster.won,
                "player_name": player.attributes.get("name") if player else None,
            }
            row.update(_flat_row(participant))
            rows.append(row)
    return pl.DataFrame(rows)
