"""
Standings aggregation over all games of a tournament.
"""
from typing import Dict, Iterable, List

from .game_data import (
    Game,
    PlayerStanding,
    WHITE_WIN,
    BLACK_WIN,
    DRAW,
    WHITE_BYE,
    BLACK_BYE,
)


def rank_standings(standings: Iterable[PlayerStanding]) -> List[PlayerStanding]:
    """Sort by points then wins, both descending.

    The sort is stable: players level on points and wins keep the order in
    which they first appeared.
    """
    return sorted(standings, key=lambda s: (-s.points, -s.wins))


def calculate_standings(games: Iterable[Game]) -> List[PlayerStanding]:
    """Fold games into ranked per-player standings.

    Byes score as wins without counting as played games. Unfinished ("*")
    and unrecognized results count as played but score nothing.
    """
    standings: Dict[str, PlayerStanding] = {}

    def get_or_init(name: str) -> PlayerStanding:
        if name not in standings:
            standings[name] = PlayerStanding(name=name)
        return standings[name]

    for game in games:
        white = get_or_init(game.white)
        black = get_or_init(game.black)

        if not game.is_bye:
            white.played += 1
            black.played += 1

        if game.result in (WHITE_WIN, WHITE_BYE):
            white.points += 1
            white.wins += 1
            black.losses += 1
        elif game.result in (BLACK_WIN, BLACK_BYE):
            black.points += 1
            black.wins += 1
            white.losses += 1
        elif game.result == DRAW:
            white.points += 0.5
            black.points += 0.5
            white.draws += 1
            black.draws += 1

    return rank_standings(standings.values())


def merge_standings(partials: Iterable[Iterable[PlayerStanding]]) -> List[PlayerStanding]:
    """Merge standings computed over separate slices of the game list.

    Counters are summed per name and the result is ranked once at the end.
    Inputs are not modified.
    """
    merged: Dict[str, PlayerStanding] = {}

    for partial in partials:
        for standing in partial:
            total = merged.get(standing.name)
            if total is None:
                total = merged[standing.name] = PlayerStanding(name=standing.name)
            total.points += standing.points
            total.played += standing.played
            total.wins += standing.wins
            total.draws += standing.draws
            total.losses += standing.losses

    return rank_standings(merged.values())
