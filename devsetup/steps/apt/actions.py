# APT actions

import logging
from typing import List, Optional

from devsetup.engine.classifier import error_lines
from devsetup.engine.context import SetupContext
from devsetup.engine.schema import ActionOutcome
from devsetup.utils.shell import CommandLog

logger = logging.getLogger(__name__)

KEYRINGS_DIR = '/etc/apt/keyrings'
SOURCES_DIR = '/etc/apt/sources.list.d'


def apt_get(ctx: SetupContext, *args: str) -> List[str]:
    """Build a non-interactive apt-get command (sudo resets the environment)."""
    return ctx.as_root(['env', 'DEBIAN_FRONTEND=noninteractive', 'apt-get'] + list(args))


def ensure_keyrings_dir(ctx: SetupContext, runner, path: str = KEYRINGS_DIR) -> ActionOutcome:
    """Create the apt keyrings directory owned by root with mode 0755."""
    log = CommandLog(runner)
    log.run(ctx.as_root(['install', '-d', '-m', '0755', '-o', 'root', '-g', 'root', path]), check=True)
    return log.outcome()


def update(ctx: SetupContext, runner, upgrade: bool = False) -> ActionOutcome:
    """Refresh the package index, optionally upgrading installed packages."""
    log = CommandLog(runner)
    log.run(apt_get(ctx, 'update', '-y'))
    if upgrade:
        log.run(apt_get(ctx, 'upgrade', '-y'))
    return log.outcome()


def install_packages(ctx: SetupContext, runner, packages: Optional[List[str]] = None) -> ActionOutcome:
    """Install packages one at a time so one failure doesn't stop the rest."""
    log = CommandLog(runner)
    install_each(ctx, log, packages or [])
    return log.outcome()


def add_repository(ctx: SetupContext, runner, name: str, key_url: str, source: str,
                   keyring: Optional[str] = None, dearmor: bool = True,
                   arch: Optional[str] = None) -> ActionOutcome:
    """Register a signed third-party apt repository."""
    log = CommandLog(runner)
    configure_repository(ctx, log, name, key_url, source, keyring, dearmor, arch)
    return log.outcome()


def install_from_repository(ctx: SetupContext, runner, name: str, key_url: str, source: str,
                            packages: List[str], prerequisites: Optional[List[str]] = None,
                            keyring: Optional[str] = None, dearmor: bool = True,
                            arch: Optional[str] = None) -> ActionOutcome:
    """Install prerequisites, add a repository, refresh the index, install packages."""
    log = CommandLog(runner)
    if prerequisites:
        install_each(ctx, log, prerequisites)
    if not configure_repository(ctx, log, name, key_url, source, keyring, dearmor, arch):
        return log.outcome()
    log.run(apt_get(ctx, 'update', '-y'))
    install_each(ctx, log, packages)
    return log.outcome()


def install_each(ctx: SetupContext, log: CommandLog, packages: List[str]) -> None:
    for package in packages:
        result = log.run(apt_get(ctx, 'install', '-y', package))
        if error_lines(result.get('stderr') or ''):
            logger.warning("Failed to install %s, continuing with remaining packages...", package)


def configure_repository(ctx: SetupContext, log: CommandLog, name: str, key_url: str, source: str,
                         keyring: Optional[str], dearmor: bool, arch: Optional[str]) -> bool:
    """Fetch the signing key and write the sources list. Returns False if the key fetch failed."""
    if keyring is None:
        keyring = f"{KEYRINGS_DIR}/{name}.{'gpg' if dearmor else 'asc'}"

    key = log.run(['curl', '-fsSL', key_url], check=True)
    if not log.succeeded(key):
        return False

    if dearmor:
        log.run(ctx.as_root(['gpg', '--dearmor', '--yes', '-o', keyring]), input_text=key['stdout'], check=True)
    else:
        log.run(ctx.as_root(['tee', keyring]), input_text=key['stdout'], check=True)
    log.run(ctx.as_root(['chmod', 'a+r', keyring]))

    values = {'keyring': keyring, 'arch': arch or '', 'codename': ''}
    if '{arch}' in source and not arch:
        values['arch'] = log.run(['dpkg', '--print-architecture']).get('stdout', '').strip()
    if '{codename}' in source:
        values['codename'] = log.run(['lsb_release', '-cs']).get('stdout', '').strip()

    line = source.format(**values)
    log.run(ctx.as_root(['tee', f"{SOURCES_DIR}/{name}.list"]), input_text=line + '\n', check=True)
    logger.info("Configured apt repository %s: %s", name, line)
    return True
