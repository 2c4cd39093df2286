"""APT steps: keyrings, package index, packages and third-party repositories."""

from .actions import ensure_keyrings_dir, update, install_packages, add_repository, install_from_repository

__all__ = [
    'ensure_keyrings_dir',
    'update',
    'install_packages',
    'add_repository',
    'install_from_repository',
]
