"""Pytest configuration and shared fixtures for Retroactive tests."""

import plistlib
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from retroactive.manifest.client import ManifestClient
from retroactive.utils.threading import GUIUpdateQueue


# Test constants
SUPPORT_URL = "https://example.com/SupportPath.plist"
CATALOG_URL = "https://swscan.example.com/index.sucatalog"
ITUNES_PRODUCT_ID = "061-26623"
ITUNES_EXPECTED_NAME = "InstallESDDmg.pkg"
ITUNES_PACKAGE_URL = "https://swcdn.example.com/061-26623/InstallESDDmg.pkg"

# Well-formed XML whose <date> value plistlib cannot convert
MALFORMED_DATE_PLIST = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<plist version="1.0"><dict><key>a</key><date>nonsense</date></dict></plist>\n'
)


def make_manifest_dict(**overrides) -> dict:
    """Build a support manifest dictionary with realistic values."""
    data = {
        "SupportPathURL": SUPPORT_URL,
        "LatestBuildNumber": 20,
        "NewVersionVisibleTitle": "Retroactive 1.2",
        "NewVersionChangelog": "Bug fixes.",
        "LatestZIP": "https://example.com/Retroactive.zip",
        "ReleasePage": "https://example.com/releases",
        "SourcePage": "https://example.com/source",
        "NewIssuePage": "https://example.com/issues/new",
        "IssuesPage": "https://example.com/issues",
        "WikiPage": "https://example.com/wiki",
        "ApertureDive": "https://example.com/aperture",
        "iPhotoDive": "https://example.com/iphoto",
        "iTunes129Dive": "https://example.com/itunes129",
        "iTunes126Dive": "https://example.com/itunes126",
        "iTunes107Dive": "https://example.com/itunes107",
        "iTunes129CatalogURL": CATALOG_URL,
        "iTunes129DownloadIdentifier": ITUNES_PRODUCT_ID,
        "iTunes129ExpectedName": ITUNES_EXPECTED_NAME,
        "iTunes129URL": "https://example.com/old/iTunes12.9.5.dmg",
        "iTunes126URL": "https://example.com/iTunes12.6.5.dmg",
        "iTunes107URL": "https://example.com/iTunes10.7.dmg",
    }
    data.update(overrides)
    return data


def make_catalog(*urls: str, product_id: str = ITUNES_PRODUCT_ID) -> dict:
    """Build a software catalog with one product and the given package URLs."""
    return {
        "Products": {
            product_id: {
                "Packages": [{"URL": url, "Size": 1024} for url in urls],
            },
        },
    }


@pytest.fixture
def manifest_dict() -> dict:
    """Provide a complete support manifest dictionary."""
    return make_manifest_dict()


@pytest.fixture
def bundled_manifest(tmp_path: Path, manifest_dict: dict) -> Path:
    """Write the support manifest to a temporary plist file."""
    path = tmp_path / "SupportPath.plist"
    with open(path, "wb") as f:
        plistlib.dump(manifest_dict, f)
    return path


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide a ManifestClient mock with no canned responses."""
    return MagicMock(spec=ManifestClient)


@pytest.fixture
def update_queue() -> GUIUpdateQueue:
    """Provide an empty UI update queue."""
    return GUIUpdateQueue()
