"""Desktop settings steps."""

from .actions import set_gsetting

__all__ = ['set_gsetting']
