"""
Wacky Wacky West CLI - Command-line interface for the engine.

Usage:
    wackywest serve [--host H] [--port P]     Run the HTTP API
    wackywest simulate [--players N] [--seed S] [--games G]
                                              Self-play games with random bots
"""

import argparse
import logging
import os
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Wacky Wacky West - tile placement game engine",
        prog="wackywest",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("WACKYWEST_LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Self-play with random bots")
    simulate_parser.add_argument("--players", type=int, default=2, help="Number of players (2-4)")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of games")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run("wackywest.api.app:create_app", factory=True, host=args.host, port=args.port)


def cmd_simulate(args):
    """Play complete games with random bots and print the rankings."""
    from .bots import RandomPolicy, play_out
    from .engine_core import Action, GamePhase, apply_action, new_game, score_players

    if not 2 <= args.players <= 4:
        print("Error: --players must be between 2 and 4")
        sys.exit(1)

    for game_number in range(args.games):
        seed = None if args.seed is None else args.seed + game_number
        state = new_game(f"SIM{game_number:03d}", "p1", "Player 1", random_seed=seed)
        for i in range(2, args.players + 1):
            state = apply_action(state, Action.join(f"p{i}", f"Player {i}")).new_state
        state = apply_action(state, Action.start("p1")).new_state

        result = play_out(state, RandomPolicy(seed=seed))
        final = result.final_state

        print(f"Game {game_number + 1}: {result.actions_applied} actions, {final.turn_number} turns")
        if final.phase != GamePhase.ENDED:
            print(f"  Stalled in phase {final.phase.value}: no legal move for {final.current_player.name}")
            continue

        for rank, score in enumerate(score_players(final), start=1):
            building = score.secret_building.display_name if score.secret_building else "-"
            print(f"  {rank}. {score.name:<10} {building:<14} {score.score}")


if __name__ == "__main__":
    main()
