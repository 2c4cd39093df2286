"""Error taxonomy for the provisioning engine."""

from typing import List, Optional


class DevSetupError(Exception):
    """Base class for all devsetup errors."""


class CatalogError(DevSetupError):
    """Catalog file is missing, malformed, or references an unknown action."""


class DuplicateIdError(DevSetupError):
    """A step id was registered twice."""

    def __init__(self, step_id: str):
        super().__init__(f"Step '{step_id}' is already registered")
        self.step_id = step_id


class StepFailure(DevSetupError):
    """A step's action signalled failure.

    Actions may raise this directly; the executor also builds one when the
    diagnostic classifier rejects an action's output. It is always caught and
    recorded, never allowed to abort the run.
    """

    def __init__(self, step_id: str, message: str, error_lines: Optional[List[str]] = None):
        super().__init__(message)
        self.step_id = step_id
        self.message = message
        self.error_lines = list(error_lines or [])


class UserDeclined(DevSetupError):
    """Operator answered "no" at the final confirmation gate."""

    def __init__(self):
        super().__init__('Installation cancelled.')


class UnclassifiedDiagnostic(UserWarning):
    """Diagnostic text that did not match any failure signature.

    Emitted through :mod:`warnings` and treated as success.
    """

    def __init__(self, step_id: str, text: str):
        super().__init__(f"{step_id}: ignored diagnostic output: {text.strip()[:500]}")
        self.step_id = step_id
        self.text = text
