"""
Execution module for shellplate.
Handles process execution, output capture, and result normalization.
"""

from .output_capture import ExecutionResult, decode_stream, format_output
from .script_executor import ScriptExecutor, ExecutionState, RunTracker, execute

__all__ = [
    "ExecutionResult",
    "decode_stream",
    "format_output",
    "ScriptExecutor",
    "ExecutionState",
    "RunTracker",
    "execute",
]
