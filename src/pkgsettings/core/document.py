#!/usr/bin/env python3
"""
Reading and writing the settings document.

The default format is XML. Files ending in ``.yaml``/``.yml``, ``.json`` or
``.toml`` are stored as the equivalent mapping instead. Every save rewrites the
whole file through a temporary file in the same directory, so a crash never
leaves a half-written document behind.
"""

import os
import json
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Union

import toml
import tomli
import yaml

from .errors import DocumentFormatError, PersistenceError
from .settings import SettingsDocument
from ..utils.logger import get_logger

ROOT_ELEMENT = 'pkgsettings'

# (collection key, XML container element, XML item element)
XML_COLLECTIONS = (
    ('sources', 'sources', 'source'),
    ('features', 'features', 'feature'),
    ('api_keys', 'apiKeys', 'apiKey'),
)


def _xml_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _dumps_xml(data: Dict[str, Any]) -> bytes:
    root = ET.Element(ROOT_ELEMENT)
    for key, container_tag, item_tag in XML_COLLECTIONS:
        container = ET.SubElement(root, container_tag)
        for item in data.get(key, []):
            ET.SubElement(container, item_tag, {k: _xml_value(v) for k, v in item.items() if v is not None})
    ET.indent(root)
    return ET.tostring(root, encoding='utf-8', xml_declaration=True) + b'\n'


def _loads_xml(content: bytes) -> Dict[str, Any]:
    root = ET.fromstring(content)
    data: Dict[str, List[Dict[str, str]]] = {}
    for key, container_tag, item_tag in XML_COLLECTIONS:
        container = root.find(container_tag)
        data[key] = [] if container is None else [dict(item.attrib) for item in container.iter(item_tag)]
    return data


def _dumps_yaml(data: Dict[str, Any]) -> bytes:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).encode('utf-8')


def _loads_yaml(content: bytes) -> Dict[str, Any]:
    return yaml.safe_load(content) or {}


def _dumps_json(data: Dict[str, Any]) -> bytes:
    return (json.dumps(data, indent=2, ensure_ascii=False) + '\n').encode('utf-8')


def _loads_json(content: bytes) -> Dict[str, Any]:
    return json.loads(content.decode('utf-8')) if content.strip() else {}


def _dumps_toml(data: Dict[str, Any]) -> bytes:
    return toml.dumps(data).encode('utf-8')


def _loads_toml(content: bytes) -> Dict[str, Any]:
    # toml.loads accepts some truncated documents, tomli does not
    return tomli.loads(content.decode('utf-8'))


FORMATS: Dict[str, tuple] = {
    'xml': (_dumps_xml, _loads_xml),
    'yaml': (_dumps_yaml, _loads_yaml),
    'json': (_dumps_json, _loads_json),
    'toml': (_dumps_toml, _loads_toml),
}

SUFFIX_FORMATS = {
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.json': 'json',
    '.toml': 'toml',
}

PARSE_ERRORS = (
    ET.ParseError,
    yaml.YAMLError,
    json.JSONDecodeError,
    tomli.TOMLDecodeError,
    UnicodeDecodeError,
)


def format_for(path: Union[str, Path]) -> str:
    """Pick the document format from the file suffix, XML by default."""
    return SUFFIX_FORMATS.get(Path(path).suffix.lower(), 'xml')


class DocumentCodec:
    """Loads and saves :class:`SettingsDocument` instances."""

    def __init__(self):
        self.logger = get_logger(f"{__name__}.DocumentCodec")

    def load(self, path: Union[str, Path]) -> SettingsDocument:
        """
        Read the document at ``path``.

        A missing file is not an error: a new document with the default
        feature catalog is returned instead.

        Raises:
            DocumentFormatError: the file exists but cannot be parsed
            PersistenceError: the file cannot be read
        """
        path = Path(path)
        if not path.exists():
            self.logger.debug(f"No settings document at {path}, starting from defaults")
            return SettingsDocument.create_default()

        try:
            content = path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Failed to read settings from {path}: {e}", path) from e

        _, loads = FORMATS[format_for(path)]
        try:
            data = loads(content)
        except PARSE_ERRORS as e:
            raise DocumentFormatError(f"Settings file {path} is not valid: {e}", path) from e

        if not isinstance(data, dict):
            raise DocumentFormatError(f"Settings file {path} does not hold a settings mapping", path)

        try:
            document = SettingsDocument.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise DocumentFormatError(f"Settings file {path} has a malformed entry: {e}", path) from e

        self.logger.debug(
            f"Loaded {len(document.sources)} sources, {len(document.features)} features "
            f"and {len(document.api_keys or [])} api keys from {path}"
        )
        return document

    def save(self, document: SettingsDocument, path: Union[str, Path]):
        """
        Overwrite ``path`` with the full document.

        Raises:
            PersistenceError: the file cannot be written
        """
        path = Path(path)
        dumps, _ = FORMATS[format_for(path)]
        content = dumps(document.to_dict())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(path, content)
        except OSError as e:
            raise PersistenceError(f"Failed to write settings to {path}: {e}", path) from e

        self.logger.debug(f"Saved settings document to {path}")


def _atomic_write(path: Path, content: bytes):
    tmp = tempfile.NamedTemporaryFile(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp', delete=False)
    try:
        with tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except FileNotFoundError:
            pass
        raise
