"""
PGN parsing utilities for tournament round files.

A round file holds several games exported back to back. Splitting is a
textual heuristic: a blank line followed by a tag line starts a new game.
Exporters that put a blank line inside movetext right before a line starting
with "[" will produce a false split.
"""
import io
import logging
import re
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import chess
import chess.pgn

from .game_data import Game, UNKNOWN_PLAYER, UNFINISHED

logger = logging.getLogger(__name__)

GAME_BOUNDARY = re.compile(r'\n\s*\n(?=\[)')

# Seven Tag Roster placeholders python-chess fills in for missing tags
PLACEHOLDER_VALUES = {"", "?"}
PLACEHOLDER_DATE = "????.??.??"


@dataclass
class ParseOutcome:
    """A parsed game plus the diagnostic of a failed parse, if any."""
    game: Game
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def current_timestamp() -> int:
    """Load time in epoch milliseconds, used to build game ids."""
    return int(time.time() * 1000)


def split_pgn_games(pgn_text: str) -> List[str]:
    """Split a multi-game PGN string into trimmed game blocks."""
    blocks = GAME_BOUNDARY.split(pgn_text)
    return [block.strip() for block in blocks if block.strip()]


def _header_value(headers: Dict[str, str], tag: str) -> Optional[str]:
    value = headers.get(tag)
    if value is None or value.strip() in PLACEHOLDER_VALUES:
        return None
    return value


class MainlineBuilder(chess.pgn.GameBuilder):
    """Game builder that skips side variations.

    Only the mainline is replayed, so an illegal move inside a variation
    does not spoil an otherwise readable game.
    """

    def begin_variation(self):
        return chess.pgn.SKIP

    def end_variation(self):
        # Skipped variations never pushed onto the variation stack
        pass


def read_mainline_game(pgn_text: str) -> Optional[chess.pgn.Game]:
    """Read the first game of a PGN string, ignoring side variations."""
    return chess.pgn.read_game(io.StringIO(pgn_text), Visitor=MainlineBuilder)


def _replay_san(game: chess.pgn.Game) -> Tuple[str, ...]:
    """Replay the mainline and record the SAN of every ply."""
    board = game.board()
    moves = []
    for move in game.mainline_moves():
        moves.append(board.san(move))
        board.push(move)
    return tuple(moves)


def parse_game_block(pgn_block: str, round_number: int, loaded_at: Optional[int] = None,
                     index: int = 0) -> ParseOutcome:
    """
    Parse one game block into a Game record.

    Never raises. When the block cannot be read, or its mainline contains an
    illegal or ambiguous move, the Game is still built from whatever headers
    were read: moves are empty, missing names become "Unknown" and a missing
    result becomes "*". The reason is carried in ``ParseOutcome.error``.

    Game ids embed ``loaded_at`` (epoch ms, defaults to now), so reloading
    the same data produces different ids. ``index`` is the block's position
    within its round and keeps ids of repeated pairings apart.
    """
    if loaded_at is None:
        loaded_at = current_timestamp()

    headers: Dict[str, str] = {}
    moves: Tuple[str, ...] = ()
    error = None

    try:
        game = read_mainline_game(pgn_block)
        if game is None:
            error = "no game found"
        else:
            headers = dict(game.headers)
            if game.errors:
                error = str(game.errors[0])
            else:
                moves = _replay_san(game)
    except Exception as e:
        error = str(e) or e.__class__.__name__
        moves = ()

    if error is not None:
        logger.warning(f"Error parsing PGN in round {round_number}: {error}")

    white = _header_value(headers, "White") or UNKNOWN_PLAYER
    black = _header_value(headers, "Black") or UNKNOWN_PLAYER
    result = _header_value(headers, "Result") or UNFINISHED
    date = _header_value(headers, "Date")
    if date == PLACEHOLDER_DATE:
        date = None

    game_record = Game(
        id=f"{round_number}-{white}-{black}-{loaded_at}-{index}",
        white=white,
        black=black,
        result=result,
        pgn=pgn_block,
        round=round_number,
        moves=moves,
        date=date,
    )
    return ParseOutcome(game=game_record, error=error)


def parse_single_game(pgn_block: str, round_number: int, loaded_at: Optional[int] = None,
                      index: int = 0) -> Game:
    """Parse one game block, always returning a Game."""
    return parse_game_block(pgn_block, round_number, loaded_at=loaded_at, index=index).game


def parse_games(pgn_text: str, round_number: int, loaded_at: Optional[int] = None) -> List[Game]:
    """Split a round file and parse every game in it."""
    if loaded_at is None:
        loaded_at = current_timestamp()

    games = []
    failed = 0
    for index, block in enumerate(split_pgn_games(pgn_text)):
        outcome = parse_game_block(block, round_number, loaded_at=loaded_at, index=index)
        if not outcome.ok:
            failed += 1
        games.append(outcome.game)

    if failed > 0:
        logger.info(f"Round {round_number}: {failed} of {len(games)} games had unreadable movetext")
    return games
