"""Shellplate exceptions."""

from enum import Enum
from typing import List, Optional
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""


class ConfigValidationError(Exception):
    """Raised when a runner config file fails validation.

    The loader collects every problem first and raises them together so the
    CLI can report all of them and map to the validation exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at '{error.path}': {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))


class RequestValidationError(Exception):
    """Raised when an execution request payload is malformed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ExecutionErrorKind(str, Enum):
    """Ways a script run can fail without producing a result."""
    SPAWN_FAILURE = "spawn_failure"
    CANCELLED = "cancelled"


class ExecutionError(Exception):
    """
    Raised when a run ends without an ExecutionResult.

    A script that starts and exits non-zero is not an error; it is a normal
    result with succeeded=False.

    Attributes:
        kind: SPAWN_FAILURE or CANCELLED
        detail: Human readable description
        pid: Process id of the killed process (cancellation only)
        cancel_after: Deadline in seconds that expired (cancellation only)
    """

    def __init__(
        self,
        kind: ExecutionErrorKind,
        detail: str,
        pid: Optional[int] = None,
        cancel_after: Optional[float] = None,
    ):
        self.kind = kind
        self.detail = detail
        self.pid = pid
        self.cancel_after = cancel_after
        super().__init__(f"{kind.value}: {detail}")

    def to_dict(self):
        """Convert to the error body returned to callers."""
        return {
            "error": f"Failed to execute script: {self.detail}",
            "success": False,
            "kind": self.kind.value,
        }
