"""Diagnostic utilities for failed provisioning steps.

Collects the failures of a run, renders a short console summary, and saves a
detailed timestamped log next to the run log.
"""

import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from devsetup.engine.schema import ExecutionResult


class DiagnosticCollector:
    """Collects and manages diagnostic information for step failures."""

    def __init__(self):
        self.failures: List[Dict[str, Any]] = []
        self.start_time = datetime.now()

    def record_failure(self, step_id: str, label: str, message: str,
                       error_lines: Optional[List[str]] = None,
                       context: Optional[Dict[str, Any]] = None) -> None:
        """Record a step failure with context.

        Args:
            step_id: Id of the step that failed (docker, kubectl, ...)
            label: Human-facing step label
            message: Failure description
            error_lines: Matching error lines from the action's diagnostics
            context: Additional context (target user, catalog, ...)
        """
        self.failures.append({
            'step_id': step_id,
            'label': label,
            'message': message,
            'error_lines': list(error_lines or []),
            'context': context or {},
            'timestamp': datetime.now().isoformat()
        })

    def record_result(self, result: ExecutionResult, label: str,
                      context: Optional[Dict[str, Any]] = None) -> None:
        """Record ``result`` if it is a failure."""
        if not result.succeeded:
            self.record_failure(result.step_id, label, result.message,
                                list(result.error_lines), context)

    def has_failures(self) -> bool:
        return bool(self.failures)

    def get_summary(self) -> str:
        """Generate human-readable summary of failures."""
        if not self.failures:
            return "No failures recorded"

        lines = [f"{len(self.failures)} step failures detected:"]
        lines.append("")

        for failure in self.failures:
            lines.append(f"• {failure['label']} ({failure['step_id']})")
            lines.append(f"  Error: {failure['message']}")

        return "\n".join(lines)

    def save_log(self, directory: str = ".") -> str:
        """Save detailed diagnostics to timestamped log file.

        Returns:
            Path to the saved log file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = os.path.join(directory, f"diagnostic_{timestamp}.log")

        with open(log_path, 'w') as f:
            f.write("Provisioning Diagnostics\n")
            f.write(f"Started: {self.start_time}\n")
            f.write(f"Generated: {datetime.now()}\n")
            f.write("=" * 70 + "\n\n")

            for i, failure in enumerate(self.failures, 1):
                f.write(f"FAILURE {i}: {failure['step_id'].upper()}\n")
                f.write("-" * 40 + "\n")
                f.write(f"Step: {failure['label']}\n")
                f.write(f"Error: {failure['message']}\n")
                f.write(f"Timestamp: {failure['timestamp']}\n")

                if failure['error_lines']:
                    f.write("\nOutput:\n")
                    for line in failure['error_lines']:
                        f.write(f"  {line}\n")

                if failure['context']:
                    f.write("\nContext:\n")
                    for key, value in failure['context'].items():
                        f.write(f"  {key}: {value}\n")

                f.write("\n")

        return log_path
