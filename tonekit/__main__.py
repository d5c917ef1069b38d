"""tonekit: perceptual color engine and image palette extraction.

Usage: tonekit [--env-file PATH] [-v] <command> [options]

Commands live in tonekit/commands/, one module each.
Each command module's docstring is its documentation.
Run `tonekit help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, tonekit looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from tonekit.commands import COMMANDS
from tonekit.core.env import Settings, load_env
from tonekit.core.report import format_json, format_text
from tonekit.core.types import Report, TonekitError

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def _module_doc(name: str) -> str:
    """A command module's docstring, which is its full documentation."""
    return (importlib.import_module(f'tonekit.commands.{name}').__doc__ or '').strip()


def _short_help(name: str, fallback: str) -> str:
    doc = _module_doc(name)
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  tonekit extract photo.jpg -n 6\n'
        '  tonekit extract photo.jpg -q high --fix-disliked -j\n'
        '  tonekit theme screenshot.png -t 10 40 90\n'
        "  tonekit dislike '#6b6b00' --fix\n"
        "  tonekit convert 'hsl(210, 60%, 50%)'\n"
        "  tonekit distance '#ff0000' '#fe0101' -m deltaE94\n"
        "  tonekit contrast '#767676' '#ffffff'\n"
        '  tonekit help extract\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        '  TONEKIT_QUALITY       low | medium | high\n'
        '  TONEKIT_MAX_COLORS    default palette size\n'
        '  TONEKIT_FIX_DISLIKED  1/true to fix disliked colors by default\n'
        '  TONEKIT_LOG_LEVEL     DEBUG | INFO | WARNING | ERROR\n'
    )
    parser = argparse.ArgumentParser(
        prog='tonekit',
        description='Perceptual color engine and image palette extraction.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging to stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # One subparser per command, short help from the module docstring
    for name, cmd in sorted(COMMANDS.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        cmd.configure(p)
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    # `help` subcommand prints the full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(COMMANDS.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: tonekit help <command> for full docs.')
        return 0

    if topic not in COMMANDS:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(COMMANDS))}', file=sys.stderr)
        return 1

    doc = _module_doc(topic)
    print(doc if doc else f'(No module docs for {topic!r})')
    return 0


def _configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ValueError(f'TONEKIT_LOG_LEVEL must be a logging level name, got {level_name!r}')
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def run(argv: list[str] | None = None) -> int:
    """Parse argv, run one command and print its report. Returns the exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'tonekit: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    try:
        args.settings = Settings.from_env()
        _configure_logging(args.verbose, args.settings.log_level)

        report = Report(command=args.command, source=getattr(args, 'image', None))
        COMMANDS[args.command].execute(args, report)
    except (TonekitError, ValueError, OSError) as e:
        print(f'tonekit: error: {e}', file=sys.stderr)
        return 1

    print(format_json(report) if args.json else format_text(report))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == '__main__':
    main()
