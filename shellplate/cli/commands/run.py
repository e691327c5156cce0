"""Run command implementation."""

import json
import logging
import shlex
import sys
from argparse import Namespace
from pathlib import Path

from shellplate.config import ConfigLoader
from shellplate.exceptions import ConfigValidationError, ExecutionError, ExecutionErrorKind
from shellplate.exec.output_capture import format_output
from shellplate.exec.script_executor import ScriptExecutor
from shellplate.variables.substitution import PlaceholderSubstitutor
from .common import parse_bindings, read_script, setup_logging


logger = logging.getLogger(__name__)

EXIT_VALIDATION = 2
EXIT_SPAWN_FAILURE = 3
EXIT_CANCELLED = 124


def exit_code_for(code: int) -> int:
    """Map a process return code to a shell exit status (signals -> 128+N)."""
    if code < 0:
        return 128 - code
    return code


def run_script(args: Namespace) -> int:
    """
    Render a script with the given values and run it.

    Returns the script's own exit code, or EXIT_SPAWN_FAILURE /
    EXIT_CANCELLED when no result was produced.
    """
    setup_logging(args)

    try:
        config = ConfigLoader().load(Path(args.config) if args.config else None)
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    if args.interpreter:
        interpreter = shlex.split(args.interpreter)
        if not interpreter:
            logger.error("Interpreter command line is empty")
            return EXIT_VALIDATION
        config.interpreter = interpreter

    try:
        template = read_script(args.script)
        bindings = parse_bindings(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return EXIT_VALIDATION

    substitutor = PlaceholderSubstitutor()
    unbound = substitutor.unbound(template, bindings)
    if unbound:
        logger.warning(f"Placeholders left unbound: {unbound}")

    command = substitutor.render(template, bindings)

    if args.dry_run:
        logger.info("[DRY RUN] Rendered command:")
        sys.stdout.write(command)
        return 0

    try:
        result = ScriptExecutor(config).execute(command, cancel_after=args.cancel_after)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_VALIDATION
    except ExecutionError as e:
        if args.json:
            sys.stdout.write(json.dumps(e.to_dict()) + "\n")
        logger.error(e.detail)
        if e.kind == ExecutionErrorKind.CANCELLED:
            return EXIT_CANCELLED
        return EXIT_SPAWN_FAILURE

    if args.json:
        sys.stdout.write(json.dumps(result.to_dict()) + "\n")
    else:
        sys.stdout.write(format_output(result) + "\n")

    logger.info(f"Script finished with exit code {result.exit_code} in {result.duration_ms} ms")
    return exit_code_for(result.exit_code)
