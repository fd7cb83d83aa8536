#!/usr/bin/env python3
"""
Skirmish Minimax - Command Line Interface

Run the alpha-beta agent on a scenario file.

Usage:
    python cli.py search scenarios/two_vs_two.json --depth 4
    python cli.py play scenarios/two_vs_two.json --opponent rush
    python cli.py play scenarios/obstacles.json --opponent minimax --max-turns 80
    python cli.py render scenarios/duel.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from skirmish.adapters import load_scenario, state_from_snapshot
from skirmish.actions import describe
from skirmish.engine import SkirmishEngine, run_game
from skirmish.errors import ConfigurationError, ScenarioError
from skirmish.opponents import OPPONENTS
from skirmish.renderer import BoardRenderer
from skirmish.units import Faction
from minimax_ai.agent import MinimaxAgent
from minimax_ai.alphabeta import AlphaBetaSearch
from minimax_ai.config import SearchConfig


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='skirmish',
        description='Alpha-beta minimax agent for a grid combat skirmish'
    )
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    def add_search_args(p):
        p.add_argument('scenario', type=str, help='Scenario file (JSON)')
        p.add_argument('--depth', '-d', type=int, default=None,
                       help='Plies to search (default: SKIRMISH_DEPTH or 3)')
        p.add_argument('--max-nodes', type=int, default=None,
                       help='Node budget per decision')
        p.add_argument('--time-limit', '-t', type=float, default=None,
                       help='Seconds per decision')

    # Search command
    search_parser = subparsers.add_parser('search', help='Pick one joint action')
    add_search_args(search_parser)
    search_parser.add_argument('--faction', '-f', choices=['good', 'bad'],
                               default='good', help='Side to move')

    # Play command
    play_parser = subparsers.add_parser('play', help='Play a full game')
    add_search_args(play_parser)
    play_parser.add_argument('--opponent', '-o',
                             choices=sorted(OPPONENTS) + ['minimax'],
                             default='rush', help='BAD side controller')
    play_parser.add_argument('--seed', '-s', type=int, default=None,
                             help='Seed for the random opponent')
    play_parser.add_argument('--max-turns', type=int, default=200,
                             help='Turn limit before a draw')
    play_parser.add_argument('--quiet', '-q', action='store_true',
                             help='Only print the result')

    # Render command
    render_parser = subparsers.add_parser('render', help='Print the scenario board')
    render_parser.add_argument('scenario', type=str, help='Scenario file (JSON)')

    return parser


def build_config(args) -> SearchConfig:
    """Environment settings, overridden by command-line flags."""
    config = SearchConfig.from_env()
    if args.depth is not None:
        config.depth = args.depth
    if args.max_nodes is not None:
        config.max_nodes = args.max_nodes
    if args.time_limit is not None:
        config.time_limit = args.time_limit
    if args.verbose:
        config.log_level = 'DEBUG'
    return config.validate()


def cmd_search(args):
    """Search one decision and print it"""
    config = build_config(args)
    faction = Faction(args.faction)
    state = state_from_snapshot(load_scenario(args.scenario), to_move=faction,
                                weights=config.weights)

    result = AlphaBetaSearch(config).search(state)
    stats = result.stats
    print(BoardRenderer.render(state.board, to_move=faction))
    print()
    print(f"Best joint action: {describe(result.action) if result.action else '(none)'}")
    print(f"  Value: {result.value:.3f}")
    print(f"  Depth: {stats.depth_reached}/{config.depth}")
    print(f"  Nodes: {stats.nodes}  Cutoffs: {stats.cutoffs}  "
          f"Time: {stats.elapsed:.3f}s")
    return 0


def cmd_play(args):
    """Play the scenario to completion"""
    config = build_config(args)
    snapshot = load_scenario(args.scenario)

    engine = SkirmishEngine(max_turns=args.max_turns)
    engine.reset(snapshot)

    if args.opponent == 'minimax':
        opponent = MinimaxAgent(Faction.BAD, config)
    elif args.opponent == 'random':
        opponent = OPPONENTS['random'](seed=args.seed)
    else:
        opponent = OPPONENTS[args.opponent]()
    controllers = {
        Faction.GOOD: MinimaxAgent(Faction.GOOD, config),
        Faction.BAD: opponent,
    }

    if not args.quiet:
        print("=" * 60)
        print(f"PLAY: Minimax (depth {config.depth}) vs {args.opponent}")
        print("=" * 60)
        print(BoardRenderer.render(engine.board, to_move=engine.to_move))

    def on_turn(faction, commands, info):
        if args.quiet:
            return
        orders = ", ".join(json.dumps(c.to_dict()) for c in commands) or "(none)"
        print(f"\n--- Turn {info['turn']} ({faction.name}) ---")
        print(f"Commands: {orders}")
        print(BoardRenderer.render(engine.board, show_info=False))

    info = run_game(engine, controllers, on_turn=on_turn)

    print(f"\n{'=' * 60}")
    print(f"GAME OVER after {info['turn']} turns")
    print(BoardRenderer.render_compact(engine.board, engine.turn))
    if engine.winner is Faction.GOOD:
        print("Minimax (GOOD) wins!")
    elif engine.winner is Faction.BAD:
        print(f"{args.opponent.title()} (BAD) wins!")
    else:
        print("Draw!")
    return 0


def cmd_render(args):
    """Print the scenario board"""
    state = state_from_snapshot(load_scenario(args.scenario))
    print(BoardRenderer.render(state.board))
    print()
    print(BoardRenderer.render_unit_details(state.board, Faction.GOOD))
    print(BoardRenderer.render_unit_details(state.board, Faction.BAD))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Map commands to functions
    commands = {
        'search': cmd_search,
        'play': cmd_play,
        'render': cmd_render,
    }

    try:
        level = logging.DEBUG if args.verbose else SearchConfig.from_env().level
        logging.basicConfig(
            level=level,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
        return commands[args.command](args)
    except (ConfigurationError, ScenarioError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"error: cannot read scenario: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main() or 0)
