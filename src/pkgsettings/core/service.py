#!/usr/bin/env python3
"""
Settings service for pkgsettings.

All reads and changes of package sources, feature flags and API keys go
through :class:`SettingsService`. Each mutating operation changes the
in-memory document, saves the whole document, and only then reports success.
Requests that would not change anything are reported as warnings and never
touch the file.
"""

from typing import Callable, List, Optional

from .requests import Action, CommandType, SettingsRequest
from .secret_codec import SecretCodec
from .settings import (
    ApiKeyEntry,
    ApiKeyView,
    FeatureState,
    SourceEntry,
    SourceView,
    is_equal_to,
    normalize_source,
)
from .store import SettingsStore
from ..utils.logger import get_logger

NO_CHANGE_MESSAGE = "Nothing to change. Config already set."
REMOVE_FIRST_MESSAGE = (
    "No changes made. If you are trying to change an existing source, please remove it first."
)
NOOP_MESSAGE = "Would have made a change to the configuration."

ApiKeyCallback = Callable[[ApiKeyView], None]


class SettingsService:
    """Operations over the persisted settings document."""

    def __init__(self, store: SettingsStore, secret_codec: SecretCodec, logger=None):
        """
        Initialize the settings service.

        Args:
            store: Load-once holder of the settings document
            secret_codec: Encrypts passwords and API keys before they are stored
            logger: Where outcomes are reported; defaults to the module logger
        """
        self.store = store
        self.secret_codec = secret_codec
        self.logger = logger or get_logger(f"{__name__}.SettingsService")

    @property
    def document(self):
        return self.store.get_document()

    def _persist(self):
        self.store.save(self.document)

    def noop(self, request: Optional[SettingsRequest] = None):
        """Report what a dry run would have done without touching anything."""
        if request is not None:
            self.logger.debug(f"Dry run of {request.command.value} {request.action.value}")
        self.logger.info(NOOP_MESSAGE)

    # Sources

    def list_sources(self, emit_output: bool = True) -> List[SourceView]:
        """
        List configured sources in document order.

        Args:
            emit_output: Also log one line per source

        Returns:
            Public views of every source
        """
        views = []
        for source in self.document.sources:
            if emit_output:
                disabled = " [Disabled]" if source.disabled else ""
                self.logger.info(f"{source.id}{disabled} - {source.value}")
            views.append(SourceView.from_entry(source))
        return views

    def add_source(
        self,
        name: str,
        value: str,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> bool:
        """
        Add a source unless one with the same id already exists.

        An existing source is never overwritten; the user is told to remove it
        first.

        Returns:
            True if the source was added and saved
        """
        if self.document.find_source(name) is not None:
            self.logger.warning(REMOVE_FIRST_MESSAGE)
            return False

        entry = SourceEntry(
            id=name,
            value=value,
            username=username or None,
            password=self.secret_codec.encrypt(password or None),
        )
        self.document.sources.append(entry)
        self._persist()

        self.logger.info(f"Added {name} - {value}")
        return True

    def remove_source(self, name: str) -> bool:
        source = self.document.find_source(name)
        if source is None:
            self.logger.warning(NO_CHANGE_MESSAGE)
            return False

        self.document.sources.remove(source)
        self._persist()

        self.logger.info(f"Removed {source.id}")
        return True

    def disable_source(self, name: str) -> bool:
        return self._set_source_disabled(name, True)

    def enable_source(self, name: str) -> bool:
        return self._set_source_disabled(name, False)

    def _set_source_disabled(self, name: str, disabled: bool) -> bool:
        source = self.document.find_source(name)
        if source is None or source.disabled == disabled:
            self.logger.warning(NO_CHANGE_MESSAGE)
            return False

        source.disabled = disabled
        self._persist()

        self.logger.info(f"{'Disabled' if disabled else 'Enabled'} {source.id}")
        return True

    # Features

    def list_features(self):
        for feature in self.document.features:
            self.logger.info(f"{feature.name} - {'[Enabled]' if feature.enabled else '[Disabled]'}")

    def disable_feature(self, name: str) -> bool:
        return self._set_feature(name, False)

    def enable_feature(self, name: str) -> bool:
        return self._set_feature(name, True)

    def _set_feature(self, name: str, enabled: bool) -> bool:
        """
        Move a feature to the explicit ``enabled`` state.

        A feature already at the target value only by default is still
        written, so the user's choice survives a change of defaults.
        """
        feature = self.document.find_feature(name)
        target = FeatureState.explicit(enabled)
        if feature is None or feature.state == target:
            self.logger.warning(NO_CHANGE_MESSAGE)
            return False

        if feature.enabled == enabled:
            self.logger.warning(
                f"{feature.name} was {'enabled' if enabled else 'disabled'} by default. "
                "Explicitly setting value."
            )

        feature.state = target
        self._persist()

        self.logger.info(f"{'Enabled' if enabled else 'Disabled'} {feature.name}")
        return True

    # API keys

    def get_api_key(
        self,
        source: Optional[str] = None,
        callback: Optional[ApiKeyCallback] = None
    ) -> Optional[str]:
        """
        Look up decrypted API keys.

        With ``source`` set, the matching key (trailing slashes ignored) is
        passed to ``callback`` and returned. Without it, every key is passed
        to ``callback`` in turn and None is returned.
        """
        if source and source.strip():
            wanted = normalize_source(source)
            for api_key in self.document.api_keys or []:
                if is_equal_to(normalize_source(api_key.source), wanted):
                    key = self.secret_codec.decrypt(api_key.key)
                    if callback is not None:
                        callback(ApiKeyView(source=api_key.source, key=key))
                    return key
            return None

        for api_key in self.document.api_keys or []:
            key = self.secret_codec.decrypt(api_key.key)
            if callback is not None:
                callback(ApiKeyView(source=api_key.source, key=key))
        return None

    def set_api_key(self, source: str, key: str) -> bool:
        """
        Add or update the API key for ``source``.

        The lookup matches the source as given; unlike get_api_key it does not
        ignore trailing slashes.

        Returns:
            True if a key was added or changed and saved
        """
        document = self.document
        if document.api_keys is None:
            document.api_keys = []

        api_key = next((k for k in document.api_keys if is_equal_to(k.source, source)), None)
        if api_key is None:
            document.api_keys.append(ApiKeyEntry(source=source, key=self.secret_codec.encrypt(key)))
            self._persist()
            self.logger.info(f"Added ApiKey for {source}")
            return True

        if self.secret_codec.decrypt(api_key.key) == key:
            self.logger.warning(NO_CHANGE_MESSAGE)
            return False

        api_key.key = self.secret_codec.encrypt(key)
        self._persist()
        self.logger.info(f"Updated ApiKey for {source}")
        return True

    # Dispatch

    def execute(self, request: SettingsRequest, key_callback: Optional[ApiKeyCallback] = None):
        """
        Validate a request and run the operation it names.

        Mutating requests with ``noop`` set only report what they would do.

        Returns:
            Whatever the underlying operation returns
        """
        request.validate()

        if request.noop and request.is_mutating:
            self.noop(request)
            return False

        if request.command == CommandType.SOURCE:
            if request.action == Action.LIST:
                return self.list_sources(request.regular_output)
            if request.action == Action.ADD:
                return self.add_source(request.name, request.source, request.username, request.password)
            if request.action == Action.REMOVE:
                return self.remove_source(request.name)
            if request.action == Action.ENABLE:
                return self.enable_source(request.name)
            return self.disable_source(request.name)

        if request.command == CommandType.FEATURE:
            if request.action == Action.LIST:
                return self.list_features()
            if request.action == Action.ENABLE:
                return self.enable_feature(request.name)
            return self.disable_feature(request.name)

        if request.action == Action.SET:
            return self.set_api_key(request.source, request.key)
        return self.get_api_key(request.source, key_callback)
