# Oh My Zsh actions

import logging
from typing import Dict, List, Optional

from devsetup.engine.context import SetupContext
from devsetup.engine.schema import ActionOutcome
from devsetup.utils.profile import ShellProfile
from devsetup.utils.shell import CommandLog

logger = logging.getLogger(__name__)

DEFAULT_MARKER = 'export KUBECONFIG='


def _profile(ctx: SetupContext, runner) -> ShellProfile:
    return ShellProfile(ctx.zshrc, runner, owner=ctx.target_user if ctx.is_root else None)


def install_oh_my_zsh(ctx: SetupContext, runner, installer_url: str, theme: str,
                      plugins: List[str], themes: Optional[Dict[str, str]] = None,
                      plugin_repos: Optional[Dict[str, str]] = None,
                      custom_config: str = '', marker: str = DEFAULT_MARKER) -> ActionOutcome:
    """Install Oh My Zsh for the target user and configure .zshrc.

    Every part is skipped when already done, so re-running is safe:
    the framework installs only if ~/.oh-my-zsh is missing, repositories are
    cloned only if their directory is missing, and the custom block is
    appended only if its marker is absent.
    """
    log = CommandLog(runner)
    if custom_config and marker not in custom_config:
        log.fail(f"custom_config must contain the marker {marker!r}")
        return log.outcome()

    profile = _profile(ctx, runner)
    if profile.ensure_exists():
        logger.info("Created .zshrc file for %s", ctx.target_user)

    if not runner.file_exists(str(ctx.oh_my_zsh_dir)):
        logger.info("Installing Oh My Zsh for %s", ctx.target_user)
        script = log.run(['curl', '-fsSL', installer_url], check=True)
        if not log.succeeded(script):
            return log.outcome()
        log.run(
            ctx.as_user(['env', f"ZSH={ctx.oh_my_zsh_dir}", 'RUNZSH=no', 'CHSH=no',
                         'sh', '-s', '--', '--unattended']),
            input_text=script['stdout'],
            check=True,
        )

    custom_dir = ctx.oh_my_zsh_dir / 'custom'
    repos = [(custom_dir / 'themes' / name, url) for name, url in (themes or {}).items()]
    repos += [(custom_dir / 'plugins' / name, url) for name, url in (plugin_repos or {}).items()]
    for destination, url in repos:
        if runner.file_exists(str(destination)):
            logger.info("%s already present", destination)
            continue
        log.run(ctx.as_user(['git', 'clone', '--depth=1', url, str(destination)]), check=True)

    configure_zsh(ctx, runner, theme, plugins)
    if custom_config:
        append_custom_config(ctx, runner, custom_config, marker)

    return log.outcome()


def configure_zsh(ctx: SetupContext, runner, theme: str, plugins: List[str]) -> None:
    """Set ZSH_THEME and plugins=(...) in .zshrc, replacing existing lines."""
    profile = _profile(ctx, runner)
    profile.set_assignment('ZSH_THEME', f'"{theme}"')
    profile.set_assignment('plugins', f"({' '.join(plugins)})")


def append_custom_config(ctx: SetupContext, runner, custom_config: str, marker: str = DEFAULT_MARKER) -> bool:
    """Append the custom block once. ``{home}`` in the block expands to the target home."""
    block = custom_config.replace('{home}', str(ctx.home))
    return _profile(ctx, runner).append_block_once(block, marker)
