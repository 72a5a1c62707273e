"""Manifest module for support configuration.

This module handles the remote support configuration:
- ManifestClient: HTTP download and plist parsing
- Manifest: Typed view of the support plist
- find_package_url: Software catalog package lookup
- parse_plist / read_plist_file: Plist parsing with ManifestError reporting
"""

from .models import Manifest, ITUNES_129_URL_KEY, find_package_url
from .client import ManifestClient
from .plist import parse_plist, read_plist_file
from .exceptions import (
    ManifestError,
    ManifestConnectionError,
    ManifestHTTPError,
    ManifestParseError,
)

__all__ = [
    # Models
    "Manifest",
    "ITUNES_129_URL_KEY",
    "find_package_url",
    # Client
    "ManifestClient",
    "parse_plist",
    "read_plist_file",
    # Exceptions
    "ManifestError",
    "ManifestConnectionError",
    "ManifestHTTPError",
    "ManifestParseError",
]
