#!/usr/bin/env python3
"""
Platform detection and OS-specific locations for pkgsettings.

This module detects the operating system and works out where the settings
document, the secret key file and the log files live by default.
"""

import os
import platform
from pathlib import Path
from typing import Dict
from enum import Enum


APP_NAME = 'pkgsettings'
SETTINGS_FILE_NAME = 'config.xml'
KEY_FILE_NAME = 'secret.key'

CONFIG_FILE_ENV = 'PKGSETTINGS_CONFIG_FILE'
KEY_FILE_ENV = 'PKGSETTINGS_KEY_FILE'


class OSType(Enum):
    """Supported operating system types."""
    LINUX = "linux"
    MACOS = "darwin"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class PlatformDetector:
    """Handles platform detection and OS-specific locations."""

    def __init__(self):
        self._os_type = self._detect_os()
        self._home_dir = Path.home()
        self._config_dir = self._get_config_dir()

    @staticmethod
    def _detect_os() -> OSType:
        """Detect the current operating system."""
        system = platform.system().lower()

        if system == "linux":
            return OSType.LINUX
        elif system == "darwin":
            return OSType.MACOS
        elif system == "windows":
            return OSType.WINDOWS
        else:
            return OSType.UNKNOWN

    @property
    def os_type(self) -> OSType:
        """Get the detected OS type."""
        return self._os_type

    @property
    def is_windows(self) -> bool:
        """Check if running on Windows."""
        return self._os_type == OSType.WINDOWS

    @property
    def home_dir(self) -> Path:
        """Get the user's home directory."""
        return self._home_dir

    def _get_config_dir(self) -> Path:
        """Get the OS-specific per-user configuration directory."""
        if self.is_windows:
            return Path(os.environ.get('APPDATA', str(self.home_dir / 'AppData' / 'Roaming')))
        return self.home_dir / '.config'

    def get_config_dir(self) -> Path:
        """Get the per-user configuration directory."""
        return self._config_dir

    def get_app_dir(self) -> Path:
        """Directory holding the settings document and the key file."""
        return self.get_config_dir() / APP_NAME

    def get_log_dir(self) -> Path:
        return self.get_app_dir() / 'logs'

    def default_settings_file(self) -> Path:
        """Settings document location, honouring PKGSETTINGS_CONFIG_FILE."""
        override = os.environ.get(CONFIG_FILE_ENV)
        if override:
            return Path(override).expanduser()
        return self.get_app_dir() / SETTINGS_FILE_NAME

    def default_key_file(self) -> Path:
        """Secret key location, honouring PKGSETTINGS_KEY_FILE."""
        override = os.environ.get(KEY_FILE_ENV)
        if override:
            return Path(override).expanduser()
        return self.get_app_dir() / KEY_FILE_NAME

    def get_system_info(self) -> Dict[str, str]:
        """Get system information along with the resolved file locations."""
        return {
            'os_type': self.os_type.value,
            'platform': platform.platform(),
            'python_version': platform.python_version(),
            'home_directory': str(self.home_dir),
            'config_directory': str(self.get_config_dir()),
            'settings_file': str(self.default_settings_file()),
            'key_file': str(self.default_key_file()),
            'log_directory': str(self.get_log_dir()),
        }


# Global instance for convenience
platform_detector = PlatformDetector()

# Convenience functions
def get_os_type() -> OSType:
    """Get the current OS type."""
    return platform_detector.os_type

def is_windows() -> bool:
    """Check if running on Windows."""
    return platform_detector.is_windows

def get_config_dir() -> Path:
    """Get the per-user configuration directory."""
    return platform_detector.get_config_dir()
