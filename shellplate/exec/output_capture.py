"""
Output capture module for normalizing process output into results.

Streams are captured in full; nothing is truncated or spilled to disk.
"""

from dataclasses import dataclass
from typing import Any, Dict


NO_OUTPUT_MESSAGE = "Command executed successfully (no output)"


def decode_stream(data: bytes) -> str:
    """Decode captured bytes as UTF-8, replacing undecodable sequences."""
    if not data:
        return ""
    return data.decode('utf-8', errors='replace')


@dataclass(frozen=True)
class ExecutionResult:
    """Result of one script run."""
    raw_output: str
    raw_error: str
    exit_code: int
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @classmethod
    def from_streams(cls, stdout: bytes, stderr: bytes, exit_code: int, duration_ms: int = 0) -> "ExecutionResult":
        """Build a result from raw process streams."""
        return cls(
            raw_output=decode_stream(stdout),
            raw_error=decode_stream(stderr),
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire format handed back to callers."""
        result: Dict[str, Any] = {
            "output": self.raw_output,
            "exitCode": self.exit_code,
            "success": self.succeeded,
        }
        if self.raw_error:
            result["error"] = self.raw_error
        return result


def format_output(result: ExecutionResult) -> str:
    """
    Combine a result's streams for display.

    Standard output comes first, then standard error behind an "Error:"
    label. When both are empty a short success notice is shown instead.
    """
    text = ""
    if result.raw_output:
        text += result.raw_output
    if result.raw_error:
        text += f"\nError: {result.raw_error}"
    if not result.raw_output and not result.raw_error:
        text = NO_OUTPUT_MESSAGE
    return text
