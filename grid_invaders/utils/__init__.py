"""
Configuration and logging utilities.
"""

from .config_loader import Config, LoggingConfig, load_config, save_config
from .logging_setup import setup_logging

__all__ = [
    'Config',
    'LoggingConfig',
    'load_config',
    'save_config',
    'setup_logging',
]
