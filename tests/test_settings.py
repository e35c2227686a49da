#!/usr/bin/env python3
"""
Tests for the settings document model.
"""

import pytest

from pkgsettings.core.settings import (
    DEFAULT_FEATURES,
    ApiKeyEntry,
    FeatureEntry,
    FeatureState,
    SettingsDocument,
    SourceEntry,
    SourceView,
    is_equal_to,
    normalize_source,
    parse_bool,
)


class TestFeatureState:
    """Test the four feature states."""

    @pytest.mark.parametrize("state,enabled,explicit", [
        (FeatureState.DEFAULT_ENABLED, True, False),
        (FeatureState.DEFAULT_DISABLED, False, False),
        (FeatureState.EXPLICIT_ENABLED, True, True),
        (FeatureState.EXPLICIT_DISABLED, False, True),
    ])
    def test_flags(self, state, enabled, explicit):
        assert state.enabled is enabled
        assert state.set_explicitly is explicit
        assert FeatureState.from_flags(enabled, explicit) is state

    def test_explicit(self):
        assert FeatureState.explicit(True) is FeatureState.EXPLICIT_ENABLED
        assert FeatureState.explicit(False) is FeatureState.EXPLICIT_DISABLED


class TestSourceView:
    """Test the public source projection."""

    def test_authenticated_means_no_password(self):
        entry = SourceEntry(id="feed", value="https://feed/")
        assert SourceView.from_entry(entry).authenticated is True

    def test_blank_password_counts_as_none(self):
        entry = SourceEntry(id="feed", value="https://feed/", password="   ")
        assert SourceView.from_entry(entry).authenticated is True

    def test_password_present(self):
        entry = SourceEntry(id="feed", value="https://feed/", disabled=True, password="gAAAA")
        view = SourceView.from_entry(entry)
        assert view.authenticated is False
        assert view.to_dict() == {
            'id': 'feed',
            'value': 'https://feed/',
            'disabled': True,
            'authenticated': False,
        }


class TestSettingsDocument:
    """Test document construction, lookups and dictionary conversion."""

    def test_create_default(self):
        document = SettingsDocument.create_default()

        assert document.sources == []
        assert document.api_keys == []
        assert [(f.name, f.enabled) for f in document.features] == list(DEFAULT_FEATURES)
        assert not any(f.set_explicitly for f in document.features)

    def test_lookups_ignore_case(self):
        document = SettingsDocument.create_default()
        document.sources.append(SourceEntry(id="MyFeed", value="https://feed/"))

        assert document.find_source("myfeed").id == "MyFeed"
        assert document.find_source("other") is None
        assert document.find_feature("CHECKSUMFILES").name == "checksumFiles"

    def test_from_dict_reads_text_booleans(self):
        document = SettingsDocument.from_dict({
            'sources': [{'id': 'feed', 'value': 'https://feed/', 'disabled': 'True', 'user': 'me'}],
            'features': [{'name': 'checksumFiles', 'enabled': 'false', 'setExplicitly': 'true'}],
            'api_keys': [{'source': 'https://feed/', 'key': 'cipher'}],
        })

        assert document.sources[0] == SourceEntry(id='feed', value='https://feed/', disabled=True, username='me')
        assert document.features[0] == FeatureEntry('checksumFiles', FeatureState.EXPLICIT_DISABLED)
        assert document.api_keys[0] == ApiKeyEntry(source='https://feed/', key='cipher')

    def test_to_dict_omits_missing_credentials(self):
        document = SettingsDocument(sources=[SourceEntry(id='feed', value='https://feed/')])
        assert document.to_dict()['sources'] == [{'id': 'feed', 'value': 'https://feed/', 'disabled': False}]

    def test_to_dict_with_null_api_keys(self):
        document = SettingsDocument(api_keys=None)
        assert document.to_dict()['api_keys'] == []

    def test_from_empty_dict(self):
        document = SettingsDocument.from_dict(None)
        assert document.sources == [] and document.features == [] and document.api_keys == []


class TestHelpers:
    """Test comparison helpers."""

    def test_is_equal_to(self):
        assert is_equal_to("Feed", "fEED")
        assert is_equal_to(None, "")
        assert not is_equal_to("feed", "feeds")

    def test_normalize_source(self):
        assert normalize_source("http://example.com///") == "http://example.com"
        assert normalize_source(None) == ""

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("TRUE", True), (" True ", True), ("false", False),
        ("", False), (True, True), (False, False), (0, False),
    ])
    def test_parse_bool(self, value, expected):
        assert parse_bool(value) is expected
