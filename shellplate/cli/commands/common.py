"""Helpers shared by CLI command handlers."""

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import Dict


def setup_logging(args: Namespace) -> None:
    """Configure root logging from --log-level/--debug/--quiet."""
    log_level = getattr(logging, getattr(args, 'log_level', 'warning').upper())
    if getattr(args, 'debug', False):
        log_level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def read_script(path: str) -> str:
    """Read a script template from disk."""
    script_path = Path(path)
    if not script_path.exists():
        raise FileNotFoundError(f"Script file not found: {script_path}")
    return script_path.read_text(encoding='utf-8')


def parse_bindings(args: Namespace) -> Dict[str, str]:
    """Parse placeholder values from --var and --vars-file arguments."""
    bindings: Dict[str, str] = {}

    # JSON file first so --var can override it
    if getattr(args, 'vars_file', None):
        vars_file = Path(args.vars_file)
        if not vars_file.exists():
            raise FileNotFoundError(f"Vars file not found: {vars_file}")

        with open(vars_file, 'r') as f:
            file_vars = json.load(f)
            if not isinstance(file_vars, dict):
                raise ValueError(f"Vars file must contain a JSON object, got {type(file_vars).__name__}")

            for key, value in file_vars.items():
                bindings[str(key)] = str(value)

    if getattr(args, 'var', None):
        for item in args.var:
            if '=' not in item:
                raise ValueError(f"Invalid variable format: {item}. Expected NAME=VALUE")
            # Empty NAME is allowed: it binds the $() placeholder
            name, value = item.split('=', 1)
            bindings[name] = value

    return bindings
