"""
Configuration module for the HR portal client.
"""
from .settings import (
    HrPortalConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'HrPortalConfig',
    'get_config',
    'load_config',
    'reload_config'
]
