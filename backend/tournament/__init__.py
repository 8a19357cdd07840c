"""PGN round parsing and standings for chess tournaments."""

from .pgn_parser import split_pgn_games, parse_game_block, parse_single_game, parse_games
from .standings import calculate_standings, merge_standings

__all__ = [
    'split_pgn_games',
    'parse_game_block',
    'parse_single_game',
    'parse_games',
    'calculate_standings',
    'merge_standings',
]
