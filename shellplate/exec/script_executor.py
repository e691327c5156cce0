"""
Script executor module for running rendered commands and capturing output.
Hands the command to an interpreter process and normalizes the outcome.
"""

import logging
import os
import signal
import subprocess
import time
from enum import Enum
from typing import Optional

from .output_capture import ExecutionResult
from ..config import RunnerConfig
from ..exceptions import ExecutionError, ExecutionErrorKind


logger = logging.getLogger(__name__)


class ExecutionState(str, Enum):
    """Lifecycle of a single run."""
    IDLE = "idle"
    SPAWNING = "spawning"
    RUNNING = "running"
    COMPLETED = "completed"
    SPAWN_FAILED = "spawn_failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = {ExecutionState.COMPLETED, ExecutionState.SPAWN_FAILED, ExecutionState.CANCELLED}

_ALLOWED_TRANSITIONS = {
    ExecutionState.IDLE: {ExecutionState.SPAWNING},
    ExecutionState.SPAWNING: {ExecutionState.RUNNING, ExecutionState.SPAWN_FAILED},
    ExecutionState.RUNNING: {ExecutionState.COMPLETED, ExecutionState.CANCELLED},
}


class RunTracker:
    """Tracks the state of one run; terminal states are final."""

    def __init__(self):
        self.state = ExecutionState.IDLE

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, new_state: ExecutionState) -> None:
        if new_state not in _ALLOWED_TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"Invalid run state transition: {self.state.value} -> {new_state.value}")
        logger.debug(f"Run state: {self.state.value} -> {new_state.value}")
        self.state = new_state


class ScriptExecutor:
    """
    Executes rendered scripts through an interpreter process.

    Each call spawns its own process and keeps no state between calls,
    so one executor can be shared across threads.
    """

    # Seconds to drain pipes after a kill before giving up on them
    DRAIN_TIMEOUT_SEC = 5

    def __init__(self, config: Optional[RunnerConfig] = None):
        """
        Initialize script executor.

        Args:
            config: Runner settings (default: sh -c, no deadline)
        """
        self.config = config or RunnerConfig()

    def execute(
        self,
        command: str,
        cancel_after: Optional[float] = None,
        tracker: Optional[RunTracker] = None,
    ) -> ExecutionResult:
        """
        Run a command and wait for it to finish.

        Args:
            command: Rendered script text, passed as one argument to the interpreter
            cancel_after: Seconds before the process is killed (default: config value)
            tracker: Optional state tracker to observe the run lifecycle

        Returns:
            ExecutionResult with full stdout, stderr and exit code

        Raises:
            ExecutionError: SPAWN_FAILURE if the interpreter cannot start,
                CANCELLED if the deadline expired
            ValueError: If cancel_after is not positive or the interpreter is empty
        """
        if not self.config.interpreter:
            raise ValueError("interpreter must name at least the interpreter binary")
        tracker = tracker or RunTracker()
        if cancel_after is None:
            cancel_after = self.config.cancel_after_sec
        if cancel_after is not None and cancel_after <= 0:
            raise ValueError(f"cancel_after must be positive, got {cancel_after}")

        argv = list(self.config.interpreter) + [command]

        process_env = os.environ.copy()
        if self.config.env:
            process_env.update(self.config.env)

        logger.debug(f"Executing script: {command}")

        start_time = time.time()
        tracker.transition(ExecutionState.SPAWNING)

        try:
            process = subprocess.Popen(
                argv,
                cwd=self.config.cwd,
                env=process_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                # Own process group so cancellation reaches grandchildren
                start_new_session=(os.name == 'posix'),
            )
        except (OSError, ValueError) as e:
            tracker.transition(ExecutionState.SPAWN_FAILED)
            logger.warning(f"Failed to start interpreter {argv[0]!r}: {e}")
            raise ExecutionError(
                ExecutionErrorKind.SPAWN_FAILURE,
                f"Could not start interpreter {argv[0]!r}: {e}",
            ) from e

        tracker.transition(ExecutionState.RUNNING)

        try:
            stdout, stderr = process.communicate(timeout=cancel_after)
        except subprocess.TimeoutExpired:
            self._terminate(process)
            tracker.transition(ExecutionState.CANCELLED)
            logger.warning(f"Script cancelled after {cancel_after} seconds (pid {process.pid})")
            raise ExecutionError(
                ExecutionErrorKind.CANCELLED,
                f"Script cancelled after {cancel_after} seconds",
                pid=process.pid,
                cancel_after=cancel_after,
            )
        except BaseException:
            # Never leave the child running behind an interrupted caller
            self._terminate(process)
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        tracker.transition(ExecutionState.COMPLETED)
        logger.debug(f"Script exited with code {process.returncode} in {duration_ms} ms")

        return ExecutionResult.from_streams(
            stdout=stdout,
            stderr=stderr,
            exit_code=process.returncode,
            duration_ms=duration_ms,
        )

    def _terminate(self, process: subprocess.Popen) -> None:
        """Kill the process (and its group on POSIX) and reap it."""
        if os.name == 'posix':
            try:
                os.killpg(process.pid, signal.SIGKILL)
            except ProcessLookupError:
                # Group already gone
                pass
        else:
            process.kill()
        try:
            process.communicate(timeout=self.DRAIN_TIMEOUT_SEC)
        except subprocess.TimeoutExpired:
            # A process outside the group still holds the pipes
            for stream in (process.stdout, process.stderr):
                if stream:
                    stream.close()
            process.wait()


def execute(
    command: str,
    cancel_after: Optional[float] = None,
    config: Optional[RunnerConfig] = None,
) -> ExecutionResult:
    """Run a rendered command once with a fresh executor."""
    return ScriptExecutor(config).execute(command, cancel_after=cancel_after)
