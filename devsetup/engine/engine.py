"""Core provisioning engine - decide, plan, then execute."""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .classifier import Classifier, default_classifier
from .collector import ConfirmationCollector
from .context import SetupContext
from .errors import UserDeclined
from .executor import StepExecutor
from .gate import SummaryGate
from .loader import CatalogLoader
from .plan import derive_plan
from .registry import StepRegistry
from .runner import ActionRunner
from .schema import Catalog, ExecutionResult, RunPlan, Step

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DECLINED = 1


class ProvisioningEngine:
    """
    Runs a provisioning catalog with dependency injection.

    Key responsibilities:
    - Load the catalog and bind its steps to actions
    - Collect every decision before any side effect (decide)
    - Freeze the selected steps into a RunPlan after the final gate (plan)
    - Execute automatic steps, then the plan, one step at a time (execute)
    """

    def __init__(self, runner: ActionRunner, context: SetupContext,
                 catalog: Optional[Catalog] = None, loader: Optional[CatalogLoader] = None,
                 actions: Optional[Dict[str, Callable]] = None, reporter=None,
                 classifier: Classifier = default_classifier):
        """
        Initialize the engine.

        Args:
            runner: ActionRunner implementation for side effects
            context: Immutable run context handed to every action
            catalog: Pre-loaded catalog (default: load context.catalog_path)
            loader: CatalogLoader to use (default: bundled catalogs)
            actions: Extra/overriding action functions by name
            reporter: Progress reporter (default: none)
            classifier: Diagnostic classifier used for every step
        """
        self.runner = runner
        self.context = context
        self.loader = loader or CatalogLoader()
        self.catalog = catalog or self.loader.load_catalog(context.catalog_path)
        self.actions: Dict[str, Callable] = dict(actions or {})
        self.reporter = reporter
        self.classifier = classifier
        self.results: List[ExecutionResult] = []
        self.plan: Optional[RunPlan] = None

        self._auto_register_actions()
        self.automatic, self.registry = self.loader.build(
            self.catalog, self.context, self.runner, self.actions
        )

    def _auto_register_actions(self) -> None:
        """Register the bundled step actions without overriding injected ones."""
        from devsetup.steps import ACTIONS

        for name, action in ACTIONS.items():
            self.actions.setdefault(name, action)

    def decide(self, answers: Optional[Dict[str, bool]] = None, assume_yes: bool = False) -> RunPlan:
        """
        Ask about every step, show the summary, and freeze the plan.

        Args:
            answers: Pre-supplied {step_id: bool} decisions (headless mode)
            assume_yes: Answer yes to every unanswered question and to the gate

        Returns:
            The frozen RunPlan

        Raises:
            UserDeclined: If the operator declines the final gate
        """
        steps = self.registry.all()
        selection = ConfirmationCollector(self.runner, answers=answers, assume_yes=assume_yes).collect(steps)

        gate = SummaryGate(
            self.runner,
            prompt=self.catalog.gate_prompt,
            automatic_summary=self.catalog.automatic_summary if self.automatic else None,
            assume_yes=assume_yes,
        )
        if not gate.present(selection, steps):
            raise UserDeclined()

        return derive_plan(steps, selection)

    def execute(self, plan: RunPlan) -> List[ExecutionResult]:
        """Run the automatic steps, then every step of ``plan``, in order."""
        executor = StepExecutor(self.runner, reporter=self.reporter, classifier=self.classifier)
        results: List[ExecutionResult] = []
        for step in list(self.automatic) + list(plan.steps):
            results.append(executor.run(step))
        return results

    def run(self, answers: Optional[Dict[str, bool]] = None, assume_yes: bool = False) -> int:
        """
        Full interactive (or headless) run.

        Returns:
            Process exit code: 0 when the run completed (even with failed steps),
            1 when the operator declined the final gate
        """
        self.results = []
        self._welcome()

        try:
            self.plan = self.decide(answers=answers, assume_yes=assume_yes)
        except UserDeclined as e:
            logger.info("Operator declined the installation plan")
            self.runner.display(str(e))
            return EXIT_DECLINED

        logger.info("Run plan: %s", self.plan.step_ids)
        self.runner.display("")
        self.runner.display("Starting installation process...")
        self.runner.display("")

        self.results = self.execute(self.plan)
        self._final_report()
        return EXIT_OK

    def _welcome(self) -> None:
        self.runner.display(f"Welcome to the {self.catalog.description}!")
        self.runner.display("First, you'll choose what to install, then we'll begin the installation process.")
        if self.automatic:
            self.runner.display("Note: System updates and common packages will be installed automatically.")
        self.runner.display("")

    def _labels(self) -> Dict[str, str]:
        steps: List[Step] = list(self.automatic) + list(self.registry.all())
        return {step.id: step.label for step in steps}

    def _final_report(self) -> None:
        from devsetup.utils.diagnostics import DiagnosticCollector

        labels = self._labels()
        collector = DiagnosticCollector()
        for result in self.results:
            collector.record_result(result, labels.get(result.step_id, result.step_id), {
                'target_user': self.context.target_user,
                'catalog': self.catalog.name,
            })

        succeeded = sum(1 for r in self.results if r.succeeded)
        self.runner.display("")
        self.runner.display(f"Installation Report: {succeeded} succeeded, {len(collector.failures)} failed")
        # Failed steps are listed once, in the diagnostic summary below
        for result in self.results:
            if result.succeeded:
                self.runner.display(f"  ✓ {labels.get(result.step_id, result.step_id)}")

        if collector.has_failures():
            self.runner.display("")
            self.runner.display(collector.get_summary())
            log_dir = Path(self.context.log_file).parent
            try:
                log_path = collector.save_log(str(log_dir))
                self.runner.display(f"Detailed diagnostics saved to {log_path}")
            except OSError as e:
                logger.warning("Could not save diagnostic log in %s: %s", log_dir, e)
            self.runner.display("Re-run devsetup to retry failed steps; completed steps are safe to repeat.")

        self.runner.display("")
        self.runner.display(self.catalog.completion_message)
