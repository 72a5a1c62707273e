"""Manifest data models for Retroactive.

Defines the typed Manifest produced from the support plist and the
helpers that read Apple's software catalog.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

logger = logging.getLogger("retroactive.manifest")


# Key patched in place after the software catalog is resolved
ITUNES_129_URL_KEY = "iTunes129URL"


def _get_str(data: dict, key: str) -> Optional[str]:
    """Read a string value, treating other types as absent."""
    value = data.get(key)
    return value if isinstance(value, str) else None


def _get_int(data: dict, key: str) -> Optional[int]:
    """Read an integer value; plist booleans are not build numbers."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True)
class Manifest:
    """Support configuration shipped with the app and refreshed remotely.

    Every field is optional: a key that is missing or has the wrong type
    in the property list is simply None.
    """

    support_path: Optional[str] = None
    latest_build_number: Optional[int] = None
    new_version_visible_title: Optional[str] = None
    new_version_changelog: Optional[str] = None
    latest_zip: Optional[str] = None

    # Project pages
    release_page: Optional[str] = None
    source_page: Optional[str] = None
    new_issue_page: Optional[str] = None
    issues_page: Optional[str] = None
    wiki_page: Optional[str] = None

    # "Behind the scenes" explanations
    aperture_dive: Optional[str] = None
    iphoto_dive: Optional[str] = None
    itunes129_dive: Optional[str] = None
    itunes126_dive: Optional[str] = None
    itunes107_dive: Optional[str] = None

    # Software catalog lookup for iTunes 12.9
    itunes_catalog_url: Optional[str] = None
    itunes_download_identifier: Optional[str] = None
    itunes_expected_name: Optional[str] = None

    # Installer downloads
    itunes129_url: Optional[str] = None
    itunes126_url: Optional[str] = None
    itunes107_url: Optional[str] = None

    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        """True if nothing was loaded."""
        return not self.raw

    def with_itunes129_url(self, url: str) -> "Manifest":
        """Return a copy with the iTunes 12.9 download URL replaced."""
        raw = dict(self.raw)
        raw[ITUNES_129_URL_KEY] = url
        return replace(self, itunes129_url=url, raw=raw)

    @classmethod
    def from_dict(cls, data: dict) -> "Manifest":
        """Create a Manifest from a parsed property list."""
        return cls(
            support_path=_get_str(data, "SupportPathURL"),
            latest_build_number=_get_int(data, "LatestBuildNumber"),
            new_version_visible_title=_get_str(data, "NewVersionVisibleTitle"),
            new_version_changelog=_get_str(data, "NewVersionChangelog"),
            latest_zip=_get_str(data, "LatestZIP"),
            release_page=_get_str(data, "ReleasePage"),
            source_page=_get_str(data, "SourcePage"),
            new_issue_page=_get_str(data, "NewIssuePage"),
            issues_page=_get_str(data, "IssuesPage"),
            wiki_page=_get_str(data, "WikiPage"),
            aperture_dive=_get_str(data, "ApertureDive"),
            iphoto_dive=_get_str(data, "iPhotoDive"),
            itunes129_dive=_get_str(data, "iTunes129Dive"),
            itunes126_dive=_get_str(data, "iTunes126Dive"),
            itunes107_dive=_get_str(data, "iTunes107Dive"),
            itunes_catalog_url=_get_str(data, "iTunes129CatalogURL"),
            itunes_download_identifier=_get_str(data, "iTunes129DownloadIdentifier"),
            itunes_expected_name=_get_str(data, "iTunes129ExpectedName"),
            itunes129_url=_get_str(data, ITUNES_129_URL_KEY),
            itunes126_url=_get_str(data, "iTunes126URL"),
            itunes107_url=_get_str(data, "iTunes107URL"),
            raw=dict(data),
        )


def find_package_url(
    catalog: dict,
    product_id: str,
    expected_name: str
) -> Optional[str]:
    """
    Find an installer package URL in a software catalog.

    Looks up Products[product_id].Packages and returns the URL of the
    first package whose URL contains expected_name (case-sensitive).

    Args:
        catalog: Parsed catalog property list
        product_id: Product identifier to look up
        expected_name: Substring the package URL must contain

    Returns:
        Matching URL, or None if the product is missing, malformed,
        or has no matching package
    """
    products = catalog.get("Products")
    if not isinstance(products, dict):
        logger.warning("Catalog has no Products dictionary")
        return None

    product = products.get(product_id)
    if not isinstance(product, dict):
        logger.warning(f"Product {product_id} not found in catalog")
        return None

    packages = product.get("Packages")
    if not isinstance(packages, list):
        logger.warning(f"Product {product_id} has no package list")
        return None

    for package in packages:
        if not isinstance(package, dict):
            continue
        url = package.get("URL")
        if isinstance(url, str) and expected_name in url:
            return url

    return None
