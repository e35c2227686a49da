"""
Test package for pkgsettings.

This package contains unit tests for the settings model, the document and
secret codecs, the settings store and service, and the command-line interface.
"""

import sys
from pathlib import Path

# Add src directory to path so tests can import pkgsettings modules
test_dir = Path(__file__).parent
src_dir = test_dir.parent / 'src'
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

# Test constants
DEFAULT_TEST_SOURCE_NAME = 'test_feed'
DEFAULT_TEST_SOURCE_URL = 'https://packages.example.com/api/v2/'

__all__ = [
    'DEFAULT_TEST_SOURCE_NAME',
    'DEFAULT_TEST_SOURCE_URL',
]
