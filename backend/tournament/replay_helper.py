"""
Helper functions for building game replay data for the frontend.
"""
import chess
from typing import Dict, Any, Optional
from .game_data import Game
from .pgn_parser import read_mainline_game


def build_replay_data(game: Game, ply: int) -> Dict[str, Any]:
    """
    Build the replay structure for one position of a game.

    Args:
        game: Parsed game
        ply: Number of half-moves played before the shown position

    Returns:
        Dictionary with all moves, the clamped ply and the position FEN
    """
    ply = min(max(0, ply), len(game.moves))

    # Games set up from a FEN tag start from their own position
    fen = fen_at_ply(game.pgn, ply)
    if not fen:
        fen = chess.STARTING_FEN

    return {
        "all_moves": list(game.moves),
        "ply": ply,
        "fen": fen,
    }


def fen_at_ply(pgn: str, ply: int) -> Optional[str]:
    """
    Get FEN after a number of half-moves.
    """
    try:
        game = read_mainline_game(pgn)
        if not game or game.errors:
            return None

        board = game.board()

        for i, move in enumerate(game.mainline_moves()):
            if i >= ply:
                break
            board.push(move)

        return board.fen()
    except Exception:
        return None
