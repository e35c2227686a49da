#!/usr/bin/env python3
"""
Example script demonstrating the pkgsettings service API.

Everything is written to a throwaway directory so the real settings document
is left alone.
"""

import sys
import tempfile
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from pkgsettings import create_service
from pkgsettings.core.settings import ApiKeyView
from pkgsettings.utils.logger import setup_logging


def example_sources(service):
    """Example: adding, disabling and listing sources."""
    print("=== Example: Sources ===")

    service.add_source('community', 'https://community.example.org/api/v2/')
    service.add_source('internal', 'https://nexus.example.com/repository/choco/', 'builder', 's3cret')

    # A second add with the same id is refused, whatever the case
    service.add_source('COMMUNITY', 'https://mirror.example.org/')

    service.disable_source('community')
    service.disable_source('community')

    for view in service.list_sources(emit_output=False):
        status = "❌" if view.disabled else "✅"
        password = "no password" if view.authenticated else "password stored"
        print(f"  {view.id}: {view.value} {status} ({password})")


def example_features(service):
    """Example: default versus explicit feature values."""
    print("\n=== Example: Features ===")

    # Already enabled by default, but this records the explicit choice
    service.enable_feature('checksumFiles')
    service.enable_feature('checksumFiles')
    service.disable_feature('autoUninstaller')

    for feature in service.document.features:
        print(f"  {feature.name}: {feature.state.value}")


def example_api_keys(service):
    """Example: storing and reading API keys."""
    print("\n=== Example: API keys ===")

    service.set_api_key('https://nexus.example.com/repository/choco/', 'key-1234')
    service.set_api_key('https://nexus.example.com/repository/choco/', 'key-1234')

    key = service.get_api_key('https://nexus.example.com/repository/choco')
    print(f"  lookup without trailing slash: {key}")

    def show(view: ApiKeyView):
        print(f"  {view.source} -> {view.key}")

    service.get_api_key(callback=show)


def main():
    """Run all examples."""
    setup_logging()

    with tempfile.TemporaryDirectory() as workdir:
        service = create_service(Path(workdir) / 'config.xml', Path(workdir) / 'secret.key')

        example_sources(service)
        example_features(service)
        example_api_keys(service)

        print("\n" + "=" * 50)
        print((Path(workdir) / 'config.xml').read_text(encoding='utf-8'))


if __name__ == '__main__':
    main()
