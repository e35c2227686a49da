#!/usr/bin/env python3
"""
Settings document model for pkgsettings.

The document holds three ordered collections: package sources, feature flags
and API keys. Entries are plain dataclasses that know how to turn themselves
into dictionaries and back, which is what the document codecs work with.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def is_equal_to(left: Optional[str], right: Optional[str]) -> bool:
    """Case-insensitive string comparison that treats None as empty."""
    return (left or '').lower() == (right or '').lower()


def normalize_source(source: Optional[str]) -> str:
    """Strip trailing path separators from an API key source."""
    return (source or '').rstrip('/')


class FeatureState(Enum):
    """Effective value of a feature and whether a user chose it."""
    DEFAULT_ENABLED = "default_enabled"
    DEFAULT_DISABLED = "default_disabled"
    EXPLICIT_ENABLED = "explicit_enabled"
    EXPLICIT_DISABLED = "explicit_disabled"

    @property
    def enabled(self) -> bool:
        return self in (FeatureState.DEFAULT_ENABLED, FeatureState.EXPLICIT_ENABLED)

    @property
    def set_explicitly(self) -> bool:
        return self in (FeatureState.EXPLICIT_ENABLED, FeatureState.EXPLICIT_DISABLED)

    @classmethod
    def from_flags(cls, enabled: bool, set_explicitly: bool) -> 'FeatureState':
        if set_explicitly:
            return cls.EXPLICIT_ENABLED if enabled else cls.EXPLICIT_DISABLED
        return cls.DEFAULT_ENABLED if enabled else cls.DEFAULT_DISABLED

    @classmethod
    def explicit(cls, enabled: bool) -> 'FeatureState':
        return cls.from_flags(enabled, True)


@dataclass
class SourceEntry:
    """A package source. ``password`` holds ciphertext, never plaintext."""

    id: str
    value: str
    disabled: bool = False
    username: Optional[str] = None
    password: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {'id': self.id, 'value': self.value, 'disabled': self.disabled}
        if self.username:
            data['user'] = self.username
        if self.password:
            data['password'] = self.password
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SourceEntry':
        """Create instance from dictionary."""
        return cls(
            id=data['id'],
            value=data.get('value', ''),
            disabled=parse_bool(data.get('disabled', False)),
            username=data.get('user') or None,
            password=data.get('password') or None,
        )


@dataclass
class FeatureEntry:
    """A named feature flag."""

    name: str
    state: FeatureState

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    @property
    def set_explicitly(self) -> bool:
        return self.state.set_explicitly

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'enabled': self.enabled,
            'setExplicitly': self.set_explicitly,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureEntry':
        """Create instance from dictionary."""
        return cls(
            name=data['name'],
            state=FeatureState.from_flags(
                parse_bool(data.get('enabled', False)),
                parse_bool(data.get('setExplicitly', False)),
            ),
        )


@dataclass
class ApiKeyEntry:
    """An API key bound to a source. ``key`` holds ciphertext."""

    source: str
    key: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {'source': self.source, 'key': self.key}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApiKeyEntry':
        """Create instance from dictionary."""
        return cls(source=data['source'], key=data.get('key', ''))


@dataclass(frozen=True)
class SourceView:
    """Read-only projection of a source handed to listing callers.

    ``authenticated`` reports that no password is stored for the source; it
    says nothing about whether credentials are valid.
    """

    id: str
    value: str
    disabled: bool
    authenticated: bool

    @classmethod
    def from_entry(cls, entry: SourceEntry) -> 'SourceView':
        return cls(
            id=entry.id,
            value=entry.value,
            disabled=entry.disabled,
            authenticated=not (entry.password or '').strip(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'value': self.value,
            'disabled': self.disabled,
            'authenticated': self.authenticated,
        }


@dataclass(frozen=True)
class ApiKeyView:
    """A decrypted API key, passed to ``get_api_key`` callbacks."""

    source: str
    key: str


# Features every new settings document starts with, as (name, enabled by default)
DEFAULT_FEATURES: Tuple[Tuple[str, bool], ...] = (
    ('checksumFiles', True),
    ('autoUninstaller', False),
    ('allowGlobalConfirmation', False),
    ('failOnAutoUninstaller', False),
    ('allowEmptyChecksums', False),
)


@dataclass
class SettingsDocument:
    """The whole persisted settings document."""

    sources: List[SourceEntry] = field(default_factory=list)
    features: List[FeatureEntry] = field(default_factory=list)
    api_keys: Optional[List[ApiKeyEntry]] = field(default_factory=list)

    @classmethod
    def create_default(cls) -> 'SettingsDocument':
        """A fresh document carrying the built-in feature catalog."""
        return cls(features=[
            FeatureEntry(name, FeatureState.from_flags(enabled, False))
            for name, enabled in DEFAULT_FEATURES
        ])

    def find_source(self, name: str) -> Optional[SourceEntry]:
        return next((s for s in self.sources if is_equal_to(s.id, name)), None)

    def find_feature(self, name: str) -> Optional[FeatureEntry]:
        return next((f for f in self.features if is_equal_to(f.name, name)), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'sources': [source.to_dict() for source in self.sources],
            'features': [feature.to_dict() for feature in self.features],
            'api_keys': [api_key.to_dict() for api_key in self.api_keys or []],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SettingsDocument':
        """Create instance from dictionary."""
        data = data or {}
        return cls(
            sources=[SourceEntry.from_dict(s) for s in data.get('sources') or []],
            features=[FeatureEntry.from_dict(f) for f in data.get('features') or []],
            api_keys=[ApiKeyEntry.from_dict(k) for k in data.get('api_keys') or []],
        )


def parse_bool(value: Any) -> bool:
    """Read a boolean that may have come back from a document as text."""
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)
