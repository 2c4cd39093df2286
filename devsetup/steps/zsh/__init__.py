"""Oh My Zsh step: framework, theme, plugins and profile configuration."""

from .actions import install_oh_my_zsh, configure_zsh, append_custom_config

__all__ = ['install_oh_my_zsh', 'configure_zsh', 'append_custom_config']
