"""
Core modules for pkgsettings.

This package contains the settings document model, its on-disk codecs, the
secret codec and the settings service that ties them together.
"""

from .errors import (
    PkgSettingsError,
    PersistenceError,
    DocumentFormatError,
    SecretCodecError,
    RequestError,
)
from .settings import (
    SettingsDocument,
    SourceEntry,
    FeatureEntry,
    FeatureState,
    ApiKeyEntry,
    SourceView,
    ApiKeyView,
)
from .document import DocumentCodec
from .secret_codec import SecretCodec
from .store import SettingsStore
from .requests import SettingsRequest, CommandType, Action
from .service import SettingsService

__all__ = [
    'PkgSettingsError',
    'PersistenceError',
    'DocumentFormatError',
    'SecretCodecError',
    'RequestError',
    'SettingsDocument',
    'SourceEntry',
    'FeatureEntry',
    'FeatureState',
    'ApiKeyEntry',
    'SourceView',
    'ApiKeyView',
    'DocumentCodec',
    'SecretCodec',
    'SettingsStore',
    'SettingsRequest',
    'CommandType',
    'Action',
    'SettingsService',
]
