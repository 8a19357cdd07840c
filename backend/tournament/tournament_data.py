"""
One loaded snapshot of a tournament: config, rounds and standings.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import TournamentConfig
from .game_data import Game, PlayerStanding, Round
from .round_loader import GitHubRoundSource, LocalRoundSource, flatten_games, load_rounds
from .standings import calculate_standings

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "TOURNAMENT_DATA_DIR"


@dataclass
class TournamentData:
    config: TournamentConfig
    rounds: List[Round]
    standings: List[PlayerStanding]
    games_by_id: Dict[str, Game] = field(default_factory=dict)

    @property
    def game_count(self) -> int:
        return len(self.games_by_id)


def make_source(config: TournamentConfig, data_dir: Optional[str] = None):
    """Local directory source when a data dir is given (or set in env), else GitHub."""
    data_dir = data_dir or os.getenv(DATA_DIR_ENV)
    if data_dir:
        return LocalRoundSource(data_dir)
    return GitHubRoundSource(config)


def load_tournament(config: TournamentConfig, source, loaded_at: Optional[int] = None) -> TournamentData:
    """Run the whole pipeline: fetch, split, parse, aggregate."""
    rounds = load_rounds(config.rounds, source, loaded_at=loaded_at)
    games = flatten_games(rounds)
    standings = calculate_standings(games)

    # Ids embed the load time, so they are only unique within this snapshot
    games_by_id = {game.id: game for game in games}
    if len(games_by_id) != len(games):
        logger.warning(f"{len(games) - len(games_by_id)} games share an id with another game")

    return TournamentData(config=config, rounds=rounds, standings=standings, games_by_id=games_by_id)
