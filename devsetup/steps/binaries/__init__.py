"""Download-and-install steps for standalone CLIs."""

from .actions import install_kubectl, install_helm, install_lazygit, install_aws_cli, install_eksctl

__all__ = [
    'install_kubectl',
    'install_helm',
    'install_lazygit',
    'install_aws_cli',
    'install_eksctl',
]
