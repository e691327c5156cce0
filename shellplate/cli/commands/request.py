"""Handle a JSON execution request from a file or stdin."""

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from shellplate.config import ConfigLoader
from shellplate.exceptions import ConfigValidationError
from shellplate.exec.script_executor import ScriptExecutor
from shellplate.service import ExecutionService
from .common import setup_logging


logger = logging.getLogger(__name__)


def handle_request(args: Namespace) -> int:
    """Read a request body, execute it and print the JSON response."""
    setup_logging(args)

    try:
        config = ConfigLoader().load(Path(args.config) if args.config else None)
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    try:
        if args.request == '-':
            payload = json.load(sys.stdin)
        else:
            with open(args.request, 'r') as f:
                payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read request: {e}")
        return 2

    service = ExecutionService(ScriptExecutor(config))
    status, body = service.handle(payload, cancel_after=args.cancel_after)

    sys.stdout.write(json.dumps(body) + "\n")
    return 0 if status == 200 else 1
