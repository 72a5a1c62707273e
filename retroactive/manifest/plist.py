"""Property-list parsing helpers for Retroactive.

Every plist the app reads (bundled manifest, remote manifest, software
catalog, Info.plist) goes through these functions, so callers only have
to handle ManifestError.
"""

import plistlib
from pathlib import Path

from retroactive.manifest.exceptions import ManifestError, ManifestParseError


def parse_plist(content: bytes, source: str) -> dict:
    """
    Parse XML or binary plist content whose root must be a dictionary.

    Args:
        content: Raw plist bytes
        source: URL or path the content came from, used in errors

    Returns:
        Top-level dictionary of the plist

    Raises:
        ManifestParseError: If the content is not a plist dictionary
    """
    try:
        data = plistlib.loads(content)
    except Exception as e:
        # plistlib surfaces malformed values as AttributeError, TypeError,
        # struct.error and others besides InvalidFileException.
        raise ManifestParseError(source, e)

    if not isinstance(data, dict):
        raise ManifestParseError(source)
    return data


def read_plist_file(path: Path) -> dict:
    """
    Read and parse a plist file from disk.

    Args:
        path: File to read

    Returns:
        Top-level dictionary of the plist

    Raises:
        ManifestError: If the file cannot be read
        ManifestParseError: If the file is not a plist dictionary
    """
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise ManifestError(f"Could not read {path}", e)
    return parse_plist(content, str(path))
