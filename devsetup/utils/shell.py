"""Command transcript used by step actions to gather diagnostics."""

import logging
from typing import Any, Dict, List, Optional

from devsetup.engine.runner import ActionRunner
from devsetup.engine.schema import ActionOutcome

logger = logging.getLogger(__name__)


class CommandLog:
    """
    Runs commands through an ActionRunner and keeps their stderr.

    Exit codes are ignored unless ``check=True``; the collected stderr is
    what the executor classifies. A checked command that fails adds an
    ``ERROR:`` line so the step is reported as failed.
    """

    def __init__(self, runner: ActionRunner):
        self.runner = runner
        self.diagnostics: List[str] = []
        self.ok = True

    def run(self, command: List[str], cwd: Optional[str] = None, env: Optional[Dict[str, str]] = None,
            input_text: Optional[str] = None, check: bool = False, keep_stderr: bool = True) -> Dict[str, Any]:
        """Run ``command`` and record its stderr.

        Args:
            command: Argument vector
            cwd: Working directory
            env: Extra environment variables
            input_text: Text for stdin
            check: Record an ERROR line when the command exits non-zero
            keep_stderr: False drops stderr (for commands allowed to complain)

        Returns:
            The runner's result dict
        """
        result = self.runner.run_shell(command, cwd=cwd, env=env, input_text=input_text)
        stderr = result.get('stderr') or ''
        if keep_stderr and stderr.strip():
            self.diagnostics.append(stderr.rstrip('\n'))
        if check and result.get('returncode') != 0:
            self.error(f"{' '.join(command)} exited with {result.get('returncode')}")
        return result

    def succeeded(self, result: Dict[str, Any]) -> bool:
        return result.get('returncode') == 0

    def error(self, message: str) -> None:
        """Record an explicit failure."""
        logger.warning(message)
        self.diagnostics.append(f"ERROR: {message}")

    def fail(self, message: str) -> None:
        """Record a failure that the action itself detected."""
        self.error(message)
        self.ok = False

    def outcome(self) -> ActionOutcome:
        return ActionOutcome(self.ok, '\n'.join(self.diagnostics))
