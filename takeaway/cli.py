"""
Takeaway CLI - Command-line interface for the engine.

Usage:
    takeaway play [--agent-first]     Play a game in the terminal
    takeaway plan [tokens]            Show the AI's move for a pool size
    takeaway serve [--host] [--port]  Run the HTTP API
"""

import argparse
import sys

from .logging_config import setup_logging


PLAY_HELP = "Commands: [t]ake a token, let the [a]i play, [r]estart, [q]uit"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Takeaway - take turns removing tokens; whoever takes the last one wins",
        prog="takeaway",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--agent-first", action="store_true", help="Let the AI make the opening move"
    )

    # Plan command
    plan_parser = subparsers.add_parser("plan", help="Show the AI's move for a pool size")
    plan_parser.add_argument(
        "tokens", type=int, nargs="?", help="Tokens left (default: every pool size)"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)
    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "plan":
        return cmd_plan(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, input_fn=input, output=print):
    """Play one or more games against the AI."""
    from .session import SessionManager, GameLoop, LoopState

    manager = SessionManager()
    session = manager.create_session(agent_first=args.agent_first)
    loop = GameLoop(session)

    output(PLAY_HELP)
    output(session.game_state.feedback)

    while True:
        if loop.state == LoopState.AGENT_TURN:
            while loop.state == LoopState.AGENT_TURN:
                result = loop.agent_step()
                output(f"Tokens left: {result.tokens_left}")
                output(result.feedback)
            continue

        if loop.state == LoopState.GAME_OVER:
            output("Play again? [r]estart or [q]uit")

        try:
            command = input_fn("> ").strip().lower()
        except EOFError:
            command = "q"

        if command in ("q", "quit"):
            manager.end_session(session.session_id, reason="user_quit")
            return 0
        elif command in ("t", "take"):
            result = loop.take_token()
        elif command in ("a", "ai"):
            result = loop.hand_to_agent()
        elif command in ("r", "restart"):
            result = loop.restart()
        else:
            output(PLAY_HELP)
            continue

        if not result.success:
            output(f"Error: {result.errors[0]}")
            continue

        output(f"Tokens left: {result.tokens_left}")
        output(result.feedback)


def cmd_plan(args, output=print):
    """Print the optimal take for one pool size or for all of them."""
    from .engine_core import GameRules, optimal_take, is_losing_position

    rules = GameRules()
    if args.tokens is not None:
        if not 1 <= args.tokens <= rules.starting_total:
            output(f"Error: tokens must be between 1 and {rules.starting_total}")
            return 1
        sizes = [args.tokens]
    else:
        sizes = range(rules.starting_total, 0, -1)

    for tokens in sizes:
        take = optimal_take(tokens, rules.max_taken)
        note = "  (losing position)" if is_losing_position(tokens, rules.max_taken) else ""
        output(f"{tokens:>3} tokens left: take {take}, leaving {tokens - take}{note}")
    return 0


def cmd_serve(args):
    """Run the HTTP API under uvicorn."""
    import uvicorn

    uvicorn.run("takeaway.api.app:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
