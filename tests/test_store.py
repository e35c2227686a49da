#!/usr/bin/env python3
"""
Tests for the load-once settings store.
"""

import pytest
from unittest.mock import MagicMock

from pkgsettings.core.errors import DocumentFormatError, PersistenceError
from pkgsettings.core.settings import SettingsDocument, SourceEntry
from pkgsettings.core.store import SettingsStore


@pytest.fixture
def codec():
    codec = MagicMock()
    codec.load.side_effect = lambda path: SettingsDocument.create_default()
    return codec


class TestSettingsStore:
    """Test caching and saving."""

    def test_document_is_loaded_lazily_once(self, tmp_path, codec):
        store = SettingsStore(tmp_path / "config.xml", codec)
        codec.load.assert_not_called()
        assert not store.is_loaded

        first = store.get_document()
        second = store.get_document()

        assert first is second
        codec.load.assert_called_once_with(tmp_path / "config.xml")

    def test_save_writes_whole_document(self, tmp_path, codec):
        store = SettingsStore(tmp_path / "config.xml", codec)
        document = store.get_document()
        document.sources.append(SourceEntry(id="feed", value="https://feed/"))

        store.save(document)

        codec.save.assert_called_once_with(document, tmp_path / "config.xml")
        assert store.get_document() is document

    def test_failed_save_drops_cache(self, tmp_path, codec):
        codec.save.side_effect = PersistenceError("disk full")
        store = SettingsStore(tmp_path / "config.xml", codec)
        store.get_document().sources.append(SourceEntry(id="feed", value="https://feed/"))

        with pytest.raises(PersistenceError):
            store.save()

        assert not store.is_loaded
        assert store.get_document().sources == []
        assert codec.load.call_count == 2

    def test_failed_load_is_not_cached(self, tmp_path, codec):
        codec.load.side_effect = [DocumentFormatError("bad"), SettingsDocument()]
        store = SettingsStore(tmp_path / "config.xml", codec)

        with pytest.raises(DocumentFormatError):
            store.get_document()

        assert store.get_document() == SettingsDocument()

    def test_reload(self, tmp_path, codec):
        store = SettingsStore(tmp_path / "config.xml", codec)
        store.get_document()

        store.reload()
        store.get_document()

        assert codec.load.call_count == 2

    def test_default_codec_reads_real_files(self, tmp_path):
        path = tmp_path / "config.xml"
        writer = SettingsStore(path)
        writer.get_document().sources.append(SourceEntry(id="feed", value="https://feed/"))
        writer.save()

        reader = SettingsStore(path)
        assert [s.id for s in reader.get_document().sources] == ["feed"]
