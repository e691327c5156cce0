"""Placeholder listing and rendering commands."""

import json
import logging
import sys
from argparse import Namespace

from shellplate.variables.substitution import PlaceholderSubstitutor
from .common import parse_bindings, read_script, setup_logging


logger = logging.getLogger(__name__)


def list_placeholders(args: Namespace) -> int:
    """Print the placeholders of a script, one per line or as a JSON array."""
    setup_logging(args)

    try:
        template = read_script(args.script)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(str(e))
        return 1

    names = PlaceholderSubstitutor().extract(template)

    if args.json:
        sys.stdout.write(json.dumps(names) + "\n")
    else:
        for name in names:
            sys.stdout.write(f"{name}\n")
    return 0


def render_script(args: Namespace) -> int:
    """Print a script with the given values substituted."""
    setup_logging(args)

    try:
        template = read_script(args.script)
        bindings = parse_bindings(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 2

    substitutor = PlaceholderSubstitutor()
    unbound = substitutor.unbound(template, bindings)
    if unbound:
        logger.warning(f"Placeholders left unbound: {unbound}")

    sys.stdout.write(substitutor.render(template, bindings))
    return 0
