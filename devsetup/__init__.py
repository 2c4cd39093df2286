"""devsetup - interactive developer workstation provisioning for Ubuntu."""

__version__ = '1.0.0'
