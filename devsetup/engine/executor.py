"""Execution runner - runs one step with failure isolation."""

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .classifier import Classifier, default_classifier, error_lines
from .errors import StepFailure, UnclassifiedDiagnostic
from .progress import NullProgressReporter
from .runner import ActionRunner
from .schema import ExecutionResult, Step

logger = logging.getLogger(__name__)

# Lines of context kept when a custom classifier rejects output without an error marker
TAIL_LINES = 5


class StepExecutor:
    """
    Runs a step's action once and turns whatever happens into an ExecutionResult.

    The action runs on a worker thread while the progress reporter draws in
    the calling thread. Nothing the action does (return a failure, raise) and
    nothing the reporter does (raise) escapes this method.
    """

    def __init__(self, runner: ActionRunner, reporter=None,
                 classifier: Classifier = default_classifier):
        self.runner = runner
        self.reporter = reporter or NullProgressReporter()
        self.classifier = classifier

    def run(self, step: Step) -> ExecutionResult:
        logger.info("Step %s: running", step.id)

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"step-{step.id}") as pool:
            future = pool.submit(step.action)
            try:
                self.reporter.report(future, step.label)
            except Exception:
                # The bar is cosmetic; keep waiting on the action regardless
                logger.exception("Step %s: progress reporter failed", step.id)

            failure: Optional[StepFailure] = None
            ok, diagnostics = False, ''
            try:
                ok, diagnostics = future.result()
            except StepFailure as e:
                failure = e
            except Exception as e:
                logger.exception("Step %s: action raised", step.id)
                failure = StepFailure(step.id, f"{type(e).__name__}: {e}")

        if failure is None:
            diagnostics = '' if diagnostics is None else str(diagnostics)
            failure = self._classify(step, ok, diagnostics)

        if failure is not None:
            return self._failed(step, failure)

        if diagnostics.strip():
            warnings.warn(UnclassifiedDiagnostic(step.id, diagnostics))
        logger.info("Step %s: succeeded", step.id)
        return ExecutionResult(step_id=step.id, succeeded=True, message=f"{step.label} completed")

    def _classify(self, step: Step, ok: bool, diagnostics: str) -> Optional[StepFailure]:
        """Return a StepFailure when the outcome counts as failed, else None."""
        try:
            accepted = bool(ok) and self.classifier(diagnostics)
        except Exception as e:
            logger.exception("Step %s: classifier raised", step.id)
            return StepFailure(step.id, f"classifier raised {type(e).__name__}: {e}",
                               diagnostics.strip().splitlines()[-TAIL_LINES:])
        if accepted:
            return None
        lines = error_lines(diagnostics) or diagnostics.strip().splitlines()[-TAIL_LINES:]
        return StepFailure(step.id, f"Error during {step.label}", lines)

    def _failed(self, step: Step, failure: StepFailure) -> ExecutionResult:
        logger.error("Step %s: failed: %s %s", step.id, failure.message, failure.error_lines)
        self.runner.display("")
        self.runner.display(f"Error during {step.label}:")
        if failure.message and failure.message != f"Error during {step.label}":
            self.runner.display(f"  {failure.message}")
        for line in failure.error_lines:
            self.runner.display(f"  {line}")
        return ExecutionResult(
            step_id=step.id,
            succeeded=False,
            message=failure.message,
            error_lines=tuple(failure.error_lines),
        )
