"""Service access layer for the Battlerite client.

Re-exports the transport protocol, the requests-based transport, the
JSON:API document parser, the search filters and the client so that
downstream code can import everything from :mod:`battlerite.api`.
"""

from battlerite.api.base import Transport
from battlerite.api.client import BattleriteClient
from battlerite.api.envelope import Document, parse_document
from battlerite.api.filters import MatchFilter, PlayerFilter, TeamFilter
from battlerite.api.http import RequestsTransport

__all__ = [
    "BattleriteClient",
    "Document",
    "MatchFilter",
    "PlayerFilter",
    "RequestsTransport",
    "TeamFilter",
    "Transport",
    "parse_document",
]
