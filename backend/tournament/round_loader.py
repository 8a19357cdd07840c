"""
Assembles Round records from configured round files.

A round source is any object with ``fetch(filename) -> Optional[str]``
returning the PGN text of a round file, or None when it is unavailable.
"""
import logging
import os
import re
from typing import List, Optional

from .config import TournamentConfig, require_repo
from .game_data import Game, Round
from .github_client import GitHubClient
from .pgn_parser import current_timestamp, parse_games

logger = logging.getLogger(__name__)

ROUND_NUMBER_PATTERN = re.compile(r'round(\d+)', re.IGNORECASE)


class GitHubRoundSource:
    """Reads round files from the tournament repository's data branch."""

    def __init__(self, config: TournamentConfig, client: Optional[GitHubClient] = None):
        self.repo = require_repo(config)
        self.branch = config.dataBranch
        self.path = config.dataPath
        self.client = client or GitHubClient()

    def fetch(self, filename: str) -> Optional[str]:
        return self.client.fetch_round(self.repo, filename, branch=self.branch, path=self.path)


class LocalRoundSource:
    """Reads round files from a local directory."""

    def __init__(self, directory: str):
        self.directory = directory

    def fetch(self, filename: str) -> Optional[str]:
        path = os.path.join(self.directory, filename)
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            logger.warning(f"Round file not found: {path}")
            return None


def resolve_round_number(filename: str, position: int) -> int:
    """Round number from a "round<N>" filename, else the 1-based position."""
    match = ROUND_NUMBER_PATTERN.search(filename)
    if match:
        return int(match.group(1))
    return position


def build_round(pgn_text: Optional[str], round_number: int, loaded_at: Optional[int] = None) -> Round:
    """Build a Round; unavailable text (None) gives a round without games."""
    if pgn_text is None:
        return Round(number=round_number, games=[])
    return Round(number=round_number, games=parse_games(pgn_text, round_number, loaded_at=loaded_at))


def load_rounds(filenames: List[str], source, loaded_at: Optional[int] = None) -> List[Round]:
    """
    Load every configured round file, in configuration order.

    A round that cannot be fetched is kept with zero games so one missing
    file never aborts the whole load.
    """
    if loaded_at is None:
        loaded_at = current_timestamp()

    rounds = []
    for position, filename in enumerate(filenames, start=1):
        round_number = resolve_round_number(filename, position)
        try:
            pgn_text = source.fetch(filename)
        except Exception as e:
            logger.warning(f"Error fetching round {filename}: {e}")
            pgn_text = None

        if pgn_text is None:
            logger.warning(f"Could not load round {round_number} ({filename})")

        rounds.append(build_round(pgn_text, round_number, loaded_at=loaded_at))

    logger.info(f"Loaded {len(rounds)} rounds with {sum(len(r.games) for r in rounds)} games")
    return rounds


def flatten_games(rounds: List[Round]) -> List[Game]:
    """All games of all rounds, in round order."""
    return [game for r in rounds for game in r.games]
