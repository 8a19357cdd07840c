"""
Print tournament standings from the configured round files.

Usage:
  chess-standings --config config/tournament-config.json
  chess-standings --local-dir ./data --json
"""
import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from .config import ConfigError, load_config
from .game_data import PlayerStanding
from .tournament_data import load_tournament, make_source


def format_points(points: float) -> str:
    return f"{points:.1f}"


def format_table(standings: List[PlayerStanding]) -> str:
    """Plain-text standings table."""
    name_width = max([len("Player")] + [len(s.name) for s in standings])
    header = f"{'#':>3}  {'Player':<{name_width}}  {'Pts':>5}  {'P':>3}  {'W':>3}  {'D':>3}  {'L':>3}"
    lines = [header, "-" * len(header)]
    for rank, s in enumerate(standings, start=1):
        lines.append(
            f"{rank:>3}  {s.name:<{name_width}}  {format_points(s.points):>5}  "
            f"{s.played:>3}  {s.wins:>3}  {s.draws:>3}  {s.losses:>3}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute chess tournament standings from PGN round files")
    parser.add_argument("--config",
                        help="Path to tournament-config.json (default: $TOURNAMENT_CONFIG_PATH or backend/config)")
    parser.add_argument("--local-dir",
                        help="Read round files from this directory instead of the GitHub data branch")
    parser.add_argument("--json", action="store_true",
                        help="Print standings as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        data = load_tournament(config, make_source(config, data_dir=args.local_dir))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([asdict(s) for s in data.standings], indent=2))
    else:
        print(f"{config.name}: {len(data.rounds)} rounds, {sum(len(r.games) for r in data.rounds)} games")
        print()
        print(format_table(data.standings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
