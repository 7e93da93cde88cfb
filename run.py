"""Cavern level server CLI entry point.

Provides subcommands for running the Socket.IO server, rendering a generated
level to the terminal and checking seeds for structural problems. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import just_fix_windows_console
from dotenv import load_dotenv

just_fix_windows_console()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Cavern Level Server

    Run the real-time Flask-SocketIO server, render a generated cave level in
    the terminal, or check seeds for structural problems. Configuration can be
    provided via CLI flags or environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                     Bind address for the web server (default: 0.0.0.0)
          PORT                     Port for the web server (default: 5000)
          CAVERN_LEVEL_WIDTH       Level width in cells (default: 50)
          CAVERN_LEVEL_HEIGHT      Level height in cells (default: 50)
          CAVERN_LEVEL_ITERATIONS  Cave automaton generations (default: 5)
          CAVERN_LEVEL_DEBUG_SEED  Use the fixed debug seed when none is given

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Render the level built from the debug seed without colors
          python run.py render --debug-seed --no-color

          # Check a few seeds (exit status 1 if any fails)
          python run.py diagnose debug 1234 my-seed
        """
    )

    parser = argparse.ArgumentParser(
        prog="Cavern",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Cavern Level Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the real-time Flask/Socket.IO server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    render_parser = subparsers.add_parser(
        "render",
        help="Generate a level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate a level session and print its layout.

            Legend:
              #  wall      .  floor     S  enemy spawner
              B  beacon    @  player
            """
        ),
    )
    seed_group = render_parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", default=None, help="Seed as 64 hex chars, an integer or any text")
    seed_group.add_argument("--debug-seed", action="store_true", help="Use the fixed debug seed")
    render_parser.add_argument("--no-color", action="store_true", help="Plain output even on a terminal")
    render_parser.set_defaults(command="render")

    diag_parser = subparsers.add_parser(
        "diagnose",
        help="Check seeds for structural problems",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Print a JSON report per seed; 'debug' names the fixed debug seed.",
    )
    diag_parser.add_argument("seeds", nargs="*", help="Seeds to check (default: a small built-in list)")
    diag_parser.add_argument(
        "--strict", action="store_true", help="Also fail seeds whose border sealing cut off floor pockets"
    )
    diag_parser.set_defaults(command="diagnose")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


_GLYPHS = {"F": ".", "W": "#", "S": "S"}


def render_session(session, color: bool = False) -> str:
    """Return the session layout as text, one line per row."""
    marks = {tuple(session.beacon): "B", tuple(session.player): "@"}
    tint = {
        "#": Fore.WHITE + Style.DIM,
        ".": Fore.GREEN,
        "S": Fore.RED + Style.BRIGHT,
        "B": Fore.CYAN + Style.BRIGHT,
        "@": Fore.YELLOW + Style.BRIGHT,
    }
    lines = []
    for y, row in enumerate(session.level.to_rows()):
        out = []
        for x, cell in enumerate(row):
            ch = marks.get((x, y)) or _GLYPHS.get(cell, "?")
            out.append(f"{tint[ch]}{ch}{Style.RESET_ALL}" if color and ch in tint else ch)
        lines.append("".join(out))
    return "\n".join(lines)


def _seed_arg(text: str) -> bytes:
    from cavern.level import DEBUG_SEED, coerce_seed

    if text == "debug":
        return DEBUG_SEED
    return coerce_seed(text)


def _run_render(args) -> int:
    from cavern.level import LevelConfig, LevelGenerationError, build_session, coerce_seed

    config = LevelConfig.from_env()
    try:
        seed = coerce_seed(args.seed) if args.seed is not None else None
    except ValueError as exc:
        print(f"[ERROR] Invalid seed: {exc}")
        return 2
    try:
        session = build_session(seed, config, debug=args.debug_seed)
    except LevelGenerationError as exc:
        print(f"[ERROR] {exc}")
        return 1
    color = _COLOR_ENABLED and not args.no_color
    print(render_session(session, color=color))
    print(f"seed={session.seed.hex()} attempts={session.attempts} beacon={tuple(session.beacon)} player={tuple(session.player)}")
    return 0


def _run_diagnose(args) -> int:
    from cavern.level import LevelConfig
    from cavern.level.checks import DEFAULT_SEEDS, diagnose_seed

    config = LevelConfig.from_env()
    results = []
    for text in args.seeds or DEFAULT_SEEDS:
        try:
            seed = _seed_arg(text)
        except ValueError as exc:
            print(f"[ERROR] Invalid seed {text!r}: {exc}")
            return 2
        results.append(diagnose_seed(seed, config, strict=args.strict))
    print(json.dumps({"results": results}, indent=2))
    return 0 if all(r["ok"] for r in results) else 1


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "render":
        return _run_render(args)
    if mode == "diagnose":
        return _run_diagnose(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from cavern.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Cavern Level Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Cavern Level Server Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Level:'):12} {value(os.getenv('CAVERN_LEVEL_WIDTH', '50') + 'x' + os.getenv('CAVERN_LEVEL_HEIGHT', '50'))}",
        f"  {label('WebSockets:'):12} {value('enabled')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    from cavern.logging_utils import log

    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=debug)
    return 0


def _console_main():  # pragma: no cover - console_scripts entry
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
