"""Decoders from Gamelocker JSON payloads to typed records.

Re-exports the telemetry classifier, the match graph resolver and the
flat record decoders so that downstream code can import everything
from :mod:`battlerite.decoding`.
"""

from battlerite.decoding.fields import FieldReader
from battlerite.decoding.matches import (
    IncludedIndex,
    match_from_document,
    matches_from_document,
    resolve_match,
    resolve_matches,
)
from battlerite.decoding.records import (
    CHAMPIONS,
    CHARACTER_STAT_OFFSETS,
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
from battlerite.decoding.telemetry import (
    EventKind,
    classify_events,
    decode_event,
    decode_telemetry,
)

__all__ = [
    "CHAMPIONS",
    "CHARACTER_STAT_OFFSETS",
    "EventKind",
    "FieldReader",
    "IncludedIndex",
    "classify_events",
    "decode_asset",
    "decode_event",
    "decode_match_player",
    "decode_participant",
    "decode_player",
    "decode_players",
    "decode_roster",
    "decode_round",
    "decode_status",
    "decode_team",
    "decode_teams",
    "decode_telemetry",
    "match_from_document",
    "matches_from_document",
    "resolve_match",
    "resolve_matches",
]
