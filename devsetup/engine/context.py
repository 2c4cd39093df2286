"""SetupContext - immutable run configuration handed to every action."""

import getpass
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CatalogError

DEFAULT_CONFIG_NAME = '.config/devsetup.yaml'


class StepOverride(BaseModel):
    """Per-step catalog overrides from the user's config file."""

    model_config = ConfigDict(extra="forbid")

    params: Dict[str, Any] = Field(default_factory=dict)


class FileConfig(BaseModel):
    """Shape of the optional YAML config file."""

    model_config = ConfigDict(extra="forbid")

    target_user: Optional[str] = None
    home: Optional[str] = None
    work_dir: Optional[str] = None
    catalog: Optional[str] = None
    log_file: Optional[str] = None
    steps: Dict[str, StepOverride] = Field(default_factory=dict)


class SetupContext(BaseModel):
    """
    Who and where we are provisioning for.

    Built once at startup and never mutated; actions receive it instead of
    reading process-wide globals.
    """

    model_config = ConfigDict(frozen=True)

    target_user: str = Field(..., description="Account that owns the shell profile and tools")
    home: Path = Field(..., description="Target user's home directory")
    work_dir: Path = Field(..., description="Scratch directory for downloads")
    is_root: bool = Field(False, description="Whether the process runs with euid 0")
    verbose: bool = False
    catalog_path: Optional[Path] = None
    log_file: Path = Path('devsetup.log')
    step_overrides: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def zshrc(self) -> Path:
        return self.home / '.zshrc'

    @property
    def oh_my_zsh_dir(self) -> Path:
        return self.home / '.oh-my-zsh'

    @property
    def kube_dir(self) -> Path:
        return self.home / '.kube'

    def as_user(self, command: List[str]) -> List[str]:
        """Prefix ``command`` so it runs as the target user when we are root."""
        if self.is_root and self.target_user != 'root':
            return ['sudo', '-u', self.target_user, '-H'] + command
        return command

    def as_root(self, command: List[str]) -> List[str]:
        """Prefix ``command`` with sudo unless we already are root."""
        if self.is_root:
            return command
        return ['sudo'] + command

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SetupContext':
        """Build the context from environment variables and the config file.

        Environment variables win over the config file.
        """
        env = os.environ if environ is None else environ

        target_user = (
            env.get('DEVSETUP_TARGET_USER')
            or env.get('SUDO_USER')
            or env.get('USER')
            or getpass.getuser()
        )
        default_home = '/root' if target_user == 'root' else f"/home/{target_user}"
        config_path = env.get('DEVSETUP_CONFIG') or os.path.join(
            env.get('DEVSETUP_HOME') or default_home, DEFAULT_CONFIG_NAME
        )
        file_config = load_file_config(config_path)

        if file_config.target_user and not env.get('DEVSETUP_TARGET_USER'):
            target_user = file_config.target_user
            default_home = '/root' if target_user == 'root' else f"/home/{target_user}"

        catalog = env.get('DEVSETUP_CATALOG') or file_config.catalog

        return cls(
            target_user=target_user,
            home=Path(env.get('DEVSETUP_HOME') or file_config.home or default_home),
            work_dir=Path(
                env.get('DEVSETUP_WORK_DIR')
                or file_config.work_dir
                or os.path.join(tempfile.gettempdir(), 'devsetup')
            ),
            is_root=hasattr(os, 'geteuid') and os.geteuid() == 0,
            verbose=bool(env.get('DEVSETUP_VERBOSE')),
            catalog_path=Path(catalog) if catalog else None,
            log_file=Path(env.get('DEVSETUP_LOG_FILE') or file_config.log_file or 'devsetup.log'),
            step_overrides={
                step_id: override.params for step_id, override in file_config.steps.items()
            },
        )


def load_file_config(path: str) -> FileConfig:
    """Load the optional YAML config file; a missing file yields defaults.

    Raises:
        CatalogError: If the file exists but is not valid YAML or has unknown keys
    """
    config_file = Path(path)
    if not config_file.is_file():
        return FileConfig()

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        return FileConfig(**data)
    except (yaml.YAMLError, TypeError, ValidationError) as e:
        raise CatalogError(f"Invalid config file {config_file}: {e}") from e
