"""
Data models for tournament games, rounds and standings.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


UNKNOWN_PLAYER = "Unknown"
UNFINISHED = "*"

WHITE_WIN = "1-0"
BLACK_WIN = "0-1"
DRAW = "1/2-1/2"
WHITE_BYE = "1-0 (Bye)"
BLACK_BYE = "0-1 (Bye)"


@dataclass(frozen=True)
class Game:
    """One played or scheduled game of a round."""
    id: str
    white: str
    black: str
    result: str  # Result tag as written, "*" when unknown
    pgn: str  # Original game block
    round: int
    moves: Tuple[str, ...] = ()  # SAN, one entry per ply
    date: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return "Bye" in self.result

    @property
    def moves_text(self) -> str:
        """Moves joined for display."""
        return " ".join(self.moves)


@dataclass
class Round:
    """Games sharing one round number, in source order."""
    number: int
    games: List[Game] = field(default_factory=list)


@dataclass
class PlayerStanding:
    """Aggregated record of one player. Byes add to wins but not to played."""
    name: str
    points: float = 0.0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
