"""Docker Engine step."""

from .actions import install

__all__ = ['install']
