"""
Configuration module for Translation Hub.
"""
from .constants import *
from .logging_config import setup_logger, get_logger
from .settings import (
    Settings,
    CredentialStatus,
    ConfigurationError,
    check_credential,
    load_settings,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Settings
    'Settings',
    'CredentialStatus',
    'ConfigurationError',
    'check_credential',
    'load_settings',
    # Constants (all exported via *)
]
