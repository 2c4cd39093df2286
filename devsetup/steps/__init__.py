"""Step actions - exports the action table for engine registration.

Every action takes ``(ctx, runner, **params)`` and returns an ActionOutcome.
"""

from . import apt, binaries, desktop, docker, zsh

ACTIONS = {
    'apt.ensure_keyrings_dir': apt.ensure_keyrings_dir,
    'apt.update': apt.update,
    'apt.install_packages': apt.install_packages,
    'apt.add_repository': apt.add_repository,
    'apt.install_from_repository': apt.install_from_repository,
    'docker.install': docker.install,
    'zsh.install_oh_my_zsh': zsh.install_oh_my_zsh,
    'binaries.install_kubectl': binaries.install_kubectl,
    'binaries.install_helm': binaries.install_helm,
    'binaries.install_lazygit': binaries.install_lazygit,
    'binaries.install_aws_cli': binaries.install_aws_cli,
    'binaries.install_eksctl': binaries.install_eksctl,
    'desktop.set_gsetting': desktop.set_gsetting,
}

__all__ = ['ACTIONS', 'apt', 'binaries', 'desktop', 'docker', 'zsh']
