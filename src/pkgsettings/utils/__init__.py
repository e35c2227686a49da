"""
Utility modules for pkgsettings.

This package contains logging setup and platform detection used throughout
pkgsettings.
"""

from .logger import get_logger, setup_logging, set_log_level
from .platform import platform_detector, get_os_type, get_config_dir, is_windows

__all__ = [
    'get_logger',
    'setup_logging',
    'set_log_level',
    'platform_detector',
    'get_os_type',
    'get_config_dir',
    'is_windows',
]
