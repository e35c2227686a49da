#!/usr/bin/env python3
"""
Load-once cache of the settings document.
"""

from pathlib import Path
from typing import Optional, Union

from .document import DocumentCodec
from .errors import PersistenceError
from .settings import SettingsDocument
from ..utils.logger import get_logger


class SettingsStore:
    """Owns the in-memory settings document for one service lifetime."""

    def __init__(self, path: Union[str, Path], codec: Optional[DocumentCodec] = None):
        """
        Initialize the store.

        Args:
            path: Location of the settings document
            codec: Reader/writer for the document, XML/YAML/JSON/TOML by suffix
        """
        self.logger = get_logger(f"{__name__}.SettingsStore")
        self.path = Path(path)
        self.codec = codec or DocumentCodec()
        self._document: Optional[SettingsDocument] = None

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    def get_document(self) -> SettingsDocument:
        """Load the document on first use and return the cached copy afterwards."""
        if self._document is None:
            self._document = self.codec.load(self.path)
        return self._document

    def save(self, document: Optional[SettingsDocument] = None):
        """
        Write the whole document back to disk.

        If the write fails the cached document is dropped, since it now holds
        changes that never reached the file.
        """
        document = document if document is not None else self.get_document()
        try:
            self.codec.save(document, self.path)
        except PersistenceError:
            self._document = None
            raise
        self._document = document

    def reload(self):
        """Forget the cached document so the next access re-reads the file."""
        self._document = None
