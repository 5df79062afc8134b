"""splash-theme — build-time splash image manifest with brand-safe colour themes.

Usage: splash-theme [global options] <command> [options]

Commands are auto-discovered from splash_theme/commands/.
Each command module's docstring is its documentation.
Run `splash-theme help <command>` for full module docs.

Configuration:
  Defaults are overridden by SPLASH_* environment variables, which are in
  turn overridden by the global options below. If a variable is not set in
  the OS environment, splash-theme looks for a .env file starting from the
  current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to point at a .env explicitly.
"""

import argparse
import importlib
import sys

from loguru import logger

from splash_theme import registry
from splash_theme.core.config import ThemeConfig, parse_palette
from splash_theme.core.env import load_env
from splash_theme.core.errors import ConfigurationError, SplashThemeError
from splash_theme.core.log import configure_logging


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'splash_theme.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  splash-theme build splash-images -o image_data.json\n'
        '  splash-theme build splash-images --json\n'
        "  splash-theme --brand '#6a22d9,#71baed' --background '#ffffff' build\n"
        '  splash-theme analyze splash-images/1/hero.jpg\n'
        '  splash-theme palette splash-images/1/hero.jpg\n'
        "  splash-theme refine '#ff3300'\n"
        '  splash-theme gallery DJ-images\n'
        '  splash-theme help build\n'
        '\n'
        'Environment (set in .env or environment):\n'
        '  SPLASH_BRAND_PALETTE  SPLASH_BACKGROUND  SPLASH_CONTRAST_THRESHOLD\n'
        '  SPLASH_SATURATION_THRESHOLD  SPLASH_MIN_POPULATION\n'
        '  SPLASH_WORKERS  SPLASH_IO_TIMEOUT  SPLASH_LOG_LEVEL\n'
    )
    parser = argparse.ArgumentParser(
        prog='splash-theme',
        description='Build a splash image manifest with brand-safe colour themes.',
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
    parser.add_argument('--log-level', metavar='LEVEL', default=None, help='DEBUG, INFO, WARNING, ERROR')
    parser.add_argument('--brand', metavar='HEX[,HEX...]', default=None, help='Brand palette override')
    parser.add_argument('--background', metavar='HEX', default=None, help='Background colour (default #000000)')
    parser.add_argument('--workers', type=int, metavar='N', default=None, help='Analysis worker threads')
    parser.add_argument('--timeout', type=float, metavar='SECONDS', default=None, help='Per-image timeout')

    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        cmd.configure(p)

    # `help` subcommand prints the full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: splash-theme help <command> for full docs.')
        return 0

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        return 1

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')
    return 0


def resolve_config(args: argparse.Namespace) -> ThemeConfig:
    """SPLASH_* environment first, then command-line overrides."""
    config = ThemeConfig.from_env()
    return config.with_overrides(
        brand_palette=parse_palette(args.brand) if args.brand is not None else None,
        background=args.background,
        workers=args.workers,
        io_timeout=args.timeout,
        log_level=args.log_level.upper() if args.log_level else None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    try:
        config = resolve_config(args)
    except ConfigurationError as exc:
        print(f'Error: invalid configuration: {exc}', file=sys.stderr)
        return 2

    configure_logging(config.log_level)
    if env_path:
        logger.debug(f'Loaded {env_path}')

    try:
        return registry.get(args.command).execute(config, args)
    except ConfigurationError as exc:
        print(f'Error: invalid configuration: {exc}', file=sys.stderr)
        return 2
    except SplashThemeError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
