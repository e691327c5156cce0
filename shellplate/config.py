"""Runner configuration loading and validation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from shellplate.exceptions import ValidationError, ConfigValidationError


DEFAULT_INTERPRETER = ["sh", "-c"]


@dataclass
class RunnerConfig:
    """
    Settings for the execution adapter.

    Attributes:
        interpreter: Interpreter argv; the rendered command is appended as the last argument
        cancel_after_sec: Default cancellation deadline (None means wait forever)
        env: Environment variables added on top of the current environment
        cwd: Working directory for the interpreter process
    """
    interpreter: List[str] = field(default_factory=lambda: list(DEFAULT_INTERPRETER))
    cancel_after_sec: Optional[float] = None
    env: Dict[str, str] = field(default_factory=dict)
    cwd: Optional[str] = None


class ConfigLoader:
    """Loads and validates runner config YAML."""

    KNOWN_KEYS = {"interpreter", "cancel_after_sec", "env", "cwd"}

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []

    def load(self, config_path: Optional[Path] = None) -> RunnerConfig:
        """
        Load a runner config file.

        Args:
            config_path: YAML file to read; None yields the defaults

        Returns:
            Validated RunnerConfig

        Raises:
            ConfigValidationError: If the file is unreadable or invalid
        """
        self.errors = []

        if config_path is None:
            return RunnerConfig()

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load config: {e}")
            self._raise_validation_errors()

        # An empty file means defaults
        if data is None:
            return RunnerConfig()

        return self.parse(data)

    def parse(self, data: Any) -> RunnerConfig:
        """Validate an already-decoded config mapping."""
        self.errors = []

        if not isinstance(data, dict):
            self._add_error("Config must be a YAML object/dictionary")
            self._raise_validation_errors()

        for key in data:
            if key not in self.KNOWN_KEYS:
                self._add_error(f"Unknown config key: {key}", str(key))

        config = RunnerConfig()

        if 'interpreter' in data:
            interpreter = data['interpreter']
            if (not isinstance(interpreter, list) or not interpreter
                    or not all(isinstance(part, str) for part in interpreter)):
                self._add_error("interpreter must be a non-empty list of strings", "interpreter")
            else:
                config.interpreter = list(interpreter)

        if 'cancel_after_sec' in data:
            cancel_after = data['cancel_after_sec']
            # bool is an int subclass; reject it explicitly
            if cancel_after is not None and (
                isinstance(cancel_after, bool)
                or not isinstance(cancel_after, (int, float))
                or cancel_after <= 0
            ):
                self._add_error("cancel_after_sec must be a positive number or null", "cancel_after_sec")
            else:
                config.cancel_after_sec = cancel_after

        if 'env' in data:
            env = data['env']
            if not isinstance(env, dict):
                self._add_error("env must be a mapping of strings", "env")
            else:
                for key, value in env.items():
                    if not isinstance(key, str) or not isinstance(value, str):
                        self._add_error(f"env entry must map string to string: {key!r}", f"env.{key}")
                config.env = {str(k): v for k, v in env.items() if isinstance(v, str)}

        if 'cwd' in data:
            cwd = data['cwd']
            if cwd is not None and not isinstance(cwd, str):
                self._add_error("cwd must be a string", "cwd")
            else:
                config.cwd = cwd

        if self.errors:
            self._raise_validation_errors()

        return config

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        raise ConfigValidationError(self.errors)
