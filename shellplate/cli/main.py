"""Main CLI entry point for shellplate."""

import argparse
import sys
from typing import Optional

from .commands import handle_request, list_placeholders, render_script, run_script


def _add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error'],
        default='warning',
        help='Set log level'
    )


def _add_binding_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--var',
        action='append',
        metavar='NAME=VALUE',
        help='Placeholder value (can be specified multiple times)'
    )
    parser.add_argument(
        '--vars-file',
        type=str,
        help='Path to JSON file containing placeholder values'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the shellplate CLI."""
    parser = argparse.ArgumentParser(
        prog='shellplate',
        description='Parameterized shell script runner'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Placeholders command
    placeholders_parser = subparsers.add_parser('placeholders', help='List the placeholders of a script')
    placeholders_parser.add_argument(
        'script',
        type=str,
        help='Path to script template'
    )
    placeholders_parser.add_argument(
        '--json',
        action='store_true',
        help='Print a JSON array instead of one name per line'
    )
    _add_logging_args(placeholders_parser)

    # Render command
    render_parser = subparsers.add_parser('render', help='Print a script with values substituted')
    render_parser.add_argument(
        'script',
        type=str,
        help='Path to script template'
    )
    _add_binding_args(render_parser)
    _add_logging_args(render_parser)

    # Run command
    run_parser = subparsers.add_parser('run', help='Render and run a script')
    run_parser.add_argument(
        'script',
        type=str,
        help='Path to script template'
    )
    _add_binding_args(run_parser)
    run_parser.add_argument(
        '--config',
        type=str,
        help='Path to runner config YAML'
    )
    run_parser.add_argument(
        '--interpreter',
        type=str,
        metavar='COMMAND',
        help='Interpreter command line, overriding the config (e.g. --interpreter "pwsh -Command")'
    )
    run_parser.add_argument(
        '--cancel-after',
        type=float,
        metavar='SECONDS',
        help='Kill the script after this many seconds'
    )
    run_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )
    run_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the rendered command without running it'
    )
    _add_logging_args(run_parser)

    # Request command
    request_parser = subparsers.add_parser('request', help='Execute a JSON request body')
    request_parser.add_argument(
        'request',
        type=str,
        help="Path to request JSON, or '-' for stdin"
    )
    request_parser.add_argument(
        '--config',
        type=str,
        help='Path to runner config YAML'
    )
    request_parser.add_argument(
        '--cancel-after',
        type=float,
        metavar='SECONDS',
        help='Kill the script after this many seconds'
    )
    _add_logging_args(request_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'placeholders':
        return list_placeholders(parsed_args)
    elif parsed_args.command == 'render':
        return render_script(parsed_args)
    elif parsed_args.command == 'run':
        return run_script(parsed_args)
    elif parsed_args.command == 'request':
        return handle_request(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
