"""Download recent match telemetry for a set of players.

Fetches the most recent matches of every configured player, downloads
each match's telemetry, writes per-match round statistics as Parquet
and prints a summary log.

Requires ``BATTLERITE_API_KEY`` in the environment.

Usage::

    python scripts/download_telemetry.py
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import orjson
from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from battlerite.api import BattleriteClient, MatchFilter  # noqa: E402
from battlerite.config import ClientConfig  # noqa: E402
from battlerite.exceptions import BattleriteError, RateLimitError  # noqa: E402
from battlerite.frames import telemetry_frames  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

OUTPUT_DIR = _PROJECT_ROOT / "data" / "telemetry"

PLAYER_IDS: tuple[str, ...] = (
    "776425336524472320",
    "934791968557563904",
)

MATCHES_PER_PLAYER = 5


# ------------------------------------------------------------------
# Per-match statistics
# ------------------------------------------------------------------


@dataclass(slots=True)
class MatchSummary:
    """Counts gathered for one downloaded match.

    Attributes:
        match_id: Identifier of the match.
        rounds: Finished rounds in the telemetry.
        round_events: Round events in the telemetry.
        deaths: Death events in the telemetry.
        has_finish: Whether a match-finished event was present.
    """

    match_id: str
    rounds: int = 0
    round_events: int = 0
    deaths: int = 0
    has_finish: bool = False


# ------------------------------------------------------------------
# Download helpers
# ------------------------------------------------------------------


def _download_match(client: BattleriteClient, match_id: str, url: str) -> MatchSummary:
    """Download one match's telemetry and write its round stats.

    Args:
        client: Configured API client.
        match_id: Identifier of the match.
        url: Telemetry asset URL.

    Returns:
        Summary counts for the match.
    """
    telemetry = client.get_telemetry(url)
    frames = telemetry_frames(telemetry)
    stats = frames["round_player_stats"]
    if stats.height:
        stats.write_parquet(OUTPUT_DIR / f"round_stats_{match_id}.parquet")

    return MatchSummary(
        match_id=match_id,
        rounds=len(telemetry.round_finished_events),
        round_events=len(telemetry.round_events),
        deaths=len(telemetry.death_events),
        has_finish=telemetry.match_finished_event is not None,
    )


def _print_summary(summaries: list[MatchSummary]) -> None:
    """Log a formatted table of per-match counts.

    Args:
        summaries: One entry per downloaded match.
    """
    header = f"{'Match':<34} {'Rounds':>7} {'Events':>8} {'Deaths':>7} {'Finished':>9}"
    logger.info("=" * len(header))
    logger.info(header)
    logger.info("-" * len(header))
    for s in summaries:
        logger.info(
            "%-34s %7d %8d %7d %9s",
            s.match_id,
            s.rounds,
            s.round_events,
            s.deaths,
            "yes" if s.has_finish else "no",
        )
    logger.info("=" * len(header))
    logger.info("Output directory: %s", OUTPUT_DIR)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main() -> None:
    """Download telemetry for the recent matches of every configured player."""
    client = BattleriteClient(ClientConfig.from_env())
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    matches = client.get_matches(
        MatchFilter(
            page_limit=MATCHES_PER_PLAYER * len(PLAYER_IDS),
            sort="-createdAt",
            player_ids=PLAYER_IDS,
        )
    )
    logger.info("Found %d matches", len(matches))

    summaries: list[MatchSummary] = []
    for match in tqdm(matches, desc="Telemetry", unit="match"):
        if match.asset is None:
            logger.warning("Match %s has no telemetry asset -- skipping", match.id)
            continue
        try:
            summaries.append(_download_match(client, match.id, match.asset.url))
        except RateLimitError:
            logger.error("Rate limit reached; stopping after %d matches", len(summaries))
            break
        except BattleriteError as exc:
            logger.warning("Could not decode telemetry for %s: %s", match.id, exc)

    (OUTPUT_DIR / "summary.json").write_bytes(
        orjson.dumps(summaries, option=orjson.OPT_INDENT_2)
    )
    _print_summary(summaries)


if __name__ == "__main__":
    main()
