"""Battlerite game-statistics client.

Fetches players, teams, matches and match telemetry from the Gamelocker
API and decodes the JSON:API payloads into immutable, typed records.
"""

from battlerite.api.client import BattleriteClient
from battlerite.config import ClientConfig
from battlerite.decoding.matches import resolve_match, resolve_matches
from battlerite.decoding.telemetry import classify_events, decode_telemetry
from battlerite.exceptions import BattleriteError

__version__ = "0.1.0"

__all__ = [
    "BattleriteClient",
    "BattleriteError",
    "ClientConfig",
    "__version__",
    "classify_events",
    "decode_telemetry",
    "resolve_match",
    "resolve_matches",
]
