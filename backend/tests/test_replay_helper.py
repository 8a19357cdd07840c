import chess

from tournament.pgn_parser import parse_single_game
from tournament.replay_helper import build_replay_data, fen_at_ply

SCHOLARS_MATE = """[White "Alice"]
[Black "Bob"]
[Result "1-0"]

1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0"""


def board_after(*sans):
    board = chess.Board()
    for san in sans:
        board.push_san(san)
    return board.fen()


def test_start_position():
    game = parse_single_game(SCHOLARS_MATE, 1)
    replay = build_replay_data(game, 0)
    assert chess.STARTING_FEN == replay["fen"]
    assert 0 == replay["ply"]
    assert 7 == len(replay["all_moves"])


def test_position_after_first_move():
    game = parse_single_game(SCHOLARS_MATE, 1)
    assert board_after("e4") == build_replay_data(game, 1)["fen"]


def test_ply_is_clamped():
    game = parse_single_game(SCHOLARS_MATE, 1)
    replay = build_replay_data(game, 100)
    assert 7 == replay["ply"]
    assert board_after(*game.moves) == replay["fen"]
    assert 0 == build_replay_data(game, -3)["ply"]


def test_game_without_moves():
    game = parse_single_game('[White "Erin"]\n[Black "BYE"]\n[Result "1-0 (Bye)"]\n\n1-0', 1)
    replay = build_replay_data(game, 5)
    assert 0 == replay["ply"]
    assert chess.STARTING_FEN == replay["fen"]


def test_fen_at_ply_bad_pgn():
    assert fen_at_ply('[White "A"]\n\n1. e4 e5 2. Qxf7 *', 2) is None


def test_setup_position_without_moves():
    fen = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"
    game = parse_single_game(f'[White "Alice"]\n[Black "Bob"]\n[SetUp "1"]\n[FEN "{fen}"]\n\n*', 1)
    assert () == game.moves
    assert chess.Board(fen).fen() == build_replay_data(game, 0)["fen"]


def test_setup_position_with_moves():
    fen = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"
    game = parse_single_game(f'[White "Alice"]\n[Black "Bob"]\n[SetUp "1"]\n[FEN "{fen}"]\n\n1. e4 Kd7 *', 1)
    board = chess.Board(fen)
    board.push_san("e4")
    assert board.fen() == build_replay_data(game, 1)["fen"]


def test_variation_does_not_affect_replay():
    game = parse_single_game('[White "A"]\n[Black "B"]\n\n1. e4 (1. Ke5) e5 *', 1)
    assert board_after("e4", "e5") == build_replay_data(game, 2)["fen"]
