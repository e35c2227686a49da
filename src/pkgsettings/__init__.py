"""
pkgsettings - Settings management for a package manager

This package reads, changes and persists a package manager's configuration
document: package sources, feature flags and API keys, with secrets encrypted
at rest.
"""

__version__ = "1.0.0"
__author__ = "pkgsettings Team"
__email__ = "admin@pkgsettings.dev"
__description__ = "Settings management for a package manager's sources, features and API keys"

from .core.service import SettingsService
from .core.store import SettingsStore
from .core.secret_codec import SecretCodec
from .utils.logger import get_logger
from .utils.platform import PlatformDetector, platform_detector

# Version info
VERSION = __version__
VERSION_INFO = tuple(map(int, __version__.split('.')))

__all__ = [
    'SettingsService',
    'SettingsStore',
    'SecretCodec',
    'PlatformDetector',
    'get_logger',
    'create_service',
    'VERSION',
    'VERSION_INFO',
]


def create_service(config_file=None, key_file=None) -> SettingsService:
    """Build a settings service over the given (or default) file locations."""
    store = SettingsStore(config_file or platform_detector.default_settings_file())
    codec = SecretCodec(key_file or platform_detector.default_key_file())
    return SettingsService(store, codec)
