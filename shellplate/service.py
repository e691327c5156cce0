"""
Execution request handling.

Accepts a request shaped like {"scriptContent": ..., "variables": [{"name", "value"}]},
renders the script, runs it and answers with a status code and a JSON-ready body.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from shellplate.exceptions import ExecutionError, RequestValidationError
from shellplate.exec.script_executor import ScriptExecutor
from shellplate.variables.substitution import PlaceholderSubstitutor


logger = logging.getLogger(__name__)


class ExecutionService:
    """Renders and runs scripts on behalf of an external caller."""

    def __init__(self, executor: Optional[ScriptExecutor] = None):
        self.executor = executor or ScriptExecutor()
        self.substitutor = PlaceholderSubstitutor()

    def parse_request(self, payload: Any) -> Tuple[str, Dict[str, str]]:
        """
        Validate a request payload.

        Returns:
            Tuple of (script_content, bindings)

        Raises:
            RequestValidationError: If the payload is malformed
        """
        if not isinstance(payload, dict):
            raise RequestValidationError("Request body must be a JSON object")

        script_content = payload.get('scriptContent')
        if not script_content:
            raise RequestValidationError("Script content is required")
        if not isinstance(script_content, str):
            raise RequestValidationError("scriptContent must be a string")

        variables = payload.get('variables')
        if variables is None:
            variables = []
        if not isinstance(variables, list):
            raise RequestValidationError("variables must be a list")

        try:
            bindings = self.substitutor.build_bindings(variables)
        except ValueError as e:
            raise RequestValidationError(str(e)) from e

        return script_content, bindings

    def handle(self, payload: Any, cancel_after: Optional[float] = None) -> Tuple[int, Dict[str, Any]]:
        """
        Handle one execution request.

        Args:
            payload: Decoded request body
            cancel_after: Optional deadline in seconds

        Returns:
            Tuple of (status_code, response_body)
        """
        try:
            script_content, bindings = self.parse_request(payload)
        except RequestValidationError as e:
            return 400, {"error": e.message}

        unbound = self.substitutor.unbound(script_content, bindings)
        if unbound:
            logger.info(f"Placeholders left unbound: {unbound}")

        command = self.substitutor.render(script_content, bindings)

        try:
            result = self.executor.execute(command, cancel_after=cancel_after)
        except ExecutionError as e:
            logger.error(f"Error executing script: {e.detail}")
            return 500, e.to_dict()

        return 200, result.to_dict()
