import pytest

from tournament.config import ConfigError, TournamentConfig
from tournament.round_loader import (
    GitHubRoundSource,
    LocalRoundSource,
    build_round,
    flatten_games,
    load_rounds,
    resolve_round_number,
)
from tournament.standings import calculate_standings

ROUND_TEXT = """[White "Alice"]
[Black "Bob"]
[Result "1-0"]

1. e4 e5 1-0

[White "Carol"]
[Black "Dave"]
[Result "0-1"]

1. d4 d5 0-1"""


class DictSource:
    def __init__(self, files):
        self.files = files
        self.requested = []

    def fetch(self, filename):
        self.requested.append(filename)
        return self.files.get(filename)


class BrokenSource:
    def fetch(self, filename):
        raise OSError("network down")


@pytest.mark.parametrize(
    "filename, position, expected",
    [
        ("round1.pgn", 5, 1),
        ("Round12.pgn", 1, 12),
        ("ROUND3_final.pgn", 1, 3),
        ("spring-round07.pgn", 2, 7),
        ("playoff.pgn", 4, 4),
    ],
)
def test_resolve_round_number(filename, position, expected):
    assert expected == resolve_round_number(filename, position)


def test_build_round_unavailable():
    round_ = build_round(None, 3)
    assert 3 == round_.number
    assert [] == round_.games


def test_load_rounds_keeps_config_order(loaded_at):
    source = DictSource({"round2.pgn": ROUND_TEXT, "playoff.pgn": ROUND_TEXT})
    filenames = ["round2.pgn", "round1.pgn", "playoff.pgn"]
    rounds = load_rounds(filenames, source, loaded_at=loaded_at)

    assert filenames == source.requested
    assert [2, 1, 3] == [r.number for r in rounds]
    assert [2, 0, 2] == [len(r.games) for r in rounds]
    assert all(g.round == 3 for g in rounds[2].games)


def test_load_rounds_survives_source_errors(caplog):
    with caplog.at_level("WARNING", logger="tournament.round_loader"):
        rounds = load_rounds(["round1.pgn", "round2.pgn"], BrokenSource())
    assert [1, 2] == [r.number for r in rounds]
    assert all(r.games == [] for r in rounds)
    assert "network down" in caplog.text


def test_flatten_games():
    rounds = load_rounds(["round1.pgn", "round2.pgn"], DictSource({"round1.pgn": ROUND_TEXT, "round2.pgn": ROUND_TEXT}))
    games = flatten_games(rounds)
    assert [1, 1, 2, 2] == [g.round for g in games]


def test_local_source(tmp_path):
    (tmp_path / "round1.pgn").write_text(ROUND_TEXT, encoding="utf-8")
    source = LocalRoundSource(str(tmp_path))
    assert ROUND_TEXT == source.fetch("round1.pgn")
    assert source.fetch("round2.pgn") is None


def test_github_source_requires_repo():
    config = TournamentConfig(name="Open", primaryColor="#000", rounds=["round1.pgn"])
    with pytest.raises(ConfigError):
        GitHubRoundSource(config)


def test_github_source_uses_config():
    class FakeClient:
        def fetch_round(self, repo, filename, branch="data", path="data"):
            return f"{repo}|{filename}|{branch}|{path}"

    config = TournamentConfig(name="Open", primaryColor="#000", tournamentRepo="club/open", dataBranch="pgn")
    source = GitHubRoundSource(config, client=FakeClient())
    assert "club/open|round1.pgn|pgn|data" == source.fetch("round1.pgn")


def test_sample_tournament(data_dir):
    rounds = load_rounds(["round1.pgn", "round2.pgn"], LocalRoundSource(data_dir))
    assert [3, 2] == [len(r.games) for r in rounds]

    standings = calculate_standings(flatten_games(rounds))
    assert ["Alice", "Erin", "Carol", "Dave", "Bob", "BYE"] == [s.name for s in standings]

    by_name = {s.name: s for s in standings}
    assert (2, 2, 2) == (by_name["Alice"].points, by_name["Alice"].played, by_name["Alice"].wins)
    # bye win plus an unfinished game
    assert (1, 1, 1) == (by_name["Erin"].points, by_name["Erin"].played, by_name["Erin"].wins)
    assert (0.5, 2, 1, 1) == (by_name["Dave"].points, by_name["Dave"].played, by_name["Dave"].draws, by_name["Dave"].losses)
    assert 0 == by_name["BYE"].played
