"""CatalogLoader - loads and validates YAML provisioning catalogs."""

import functools
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from .context import SetupContext
from .errors import CatalogError, DuplicateIdError
from .registry import StepRegistry
from .runner import ActionRunner
from .schema import Catalog, Step, StepSpec

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = 'ubuntu-22.04'
CATALOG_DIR = Path(__file__).resolve().parent.parent / 'catalog'


class CatalogLoader:
    """
    Loads provisioning catalogs from YAML files.

    Validates structure using Pydantic models, then binds each step to the
    Python action it names.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory holding catalog files (default: the bundled catalogs)
        """
        self.base_path = Path(base_path) if base_path is not None else CATALOG_DIR

    def resolve(self, name_or_path: Union[str, Path, None] = None) -> Path:
        """Turn a catalog name ('ubuntu-22.04') or explicit path into a file path."""
        if name_or_path is None:
            name_or_path = DEFAULT_CATALOG
        candidate = Path(name_or_path)
        if candidate.suffix in ('.yaml', '.yml'):
            return candidate
        return self.base_path / f"{name_or_path}.yaml"

    def load_catalog(self, name_or_path: Union[str, Path, None] = None) -> Catalog:
        """
        Load a catalog from YAML.

        Args:
            name_or_path: Bundled catalog name or path to a YAML file

        Returns:
            Validated Catalog instance

        Raises:
            CatalogError: If the file is missing, not YAML, or fails validation
        """
        catalog_path = self.resolve(name_or_path)

        if not catalog_path.exists():
            raise CatalogError(f"Catalog not found: {catalog_path}")

        try:
            with open(catalog_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Catalog {catalog_path} is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise CatalogError(f"Catalog {catalog_path} must be a mapping")

        try:
            catalog = Catalog(**data)
        except ValidationError as e:
            raise CatalogError(f"Catalog {catalog_path} failed validation:\n{e}") from e

        for spec in catalog.steps:
            if not spec.prompt:
                raise CatalogError(f"Step '{spec.id}' needs a prompt")

        logger.info("Loaded catalog %s v%s from %s", catalog.name, catalog.version, catalog_path)
        return catalog

    def bind(self, spec: StepSpec, context: SetupContext, runner: ActionRunner,
             actions: Dict[str, Callable]) -> Step:
        """Bind a StepSpec to its action with params and the run context.

        Raises:
            CatalogError: If the named action is not registered
        """
        if spec.action not in actions:
            raise CatalogError(f"Step '{spec.id}' uses unknown action '{spec.action}'")

        params = dict(spec.params)
        params.update(context.step_overrides.get(spec.id, {}))
        action = functools.partial(actions[spec.action], context, runner, **params)

        return Step(id=spec.id, prompt=spec.prompt or '', label=spec.display_label, action=action)

    def build(self, catalog: Catalog, context: SetupContext, runner: ActionRunner,
              actions: Dict[str, Callable]) -> Tuple[List[Step], StepRegistry]:
        """Bind every step of a catalog.

        Returns:
            (automatic steps, registry of operator-selectable steps)

        Raises:
            CatalogError: If an action name is unknown
            DuplicateIdError: If two steps, automatic or selectable, share an id
        """
        # Automatic steps stay out of the registry but share its id space
        automatic = StepRegistry([self.bind(spec, context, runner, actions) for spec in catalog.automatic])
        registry = StepRegistry()
        for spec in catalog.steps:
            if spec.id in automatic:
                raise DuplicateIdError(spec.id)
            registry.register(self.bind(spec, context, runner, actions))
        return list(automatic.all()), registry
