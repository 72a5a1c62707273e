"""Running application version info for Retroactive.

Reads CFBundleVersion / CFBundleShortVersionString from an app bundle's
Info.plist so the manager can compare against LatestBuildNumber.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from retroactive.manifest.exceptions import ManifestError
from retroactive.manifest.plist import read_plist_file
from retroactive.utils.validators import validate_build_number

logger = logging.getLogger("retroactive.bundle")


@dataclass(frozen=True)
class BundleInfo:
    """Version keys from an Info.plist."""
    bundle_version: Optional[str] = None
    short_version: Optional[str] = None

    @property
    def build_number(self) -> Optional[int]:
        """CFBundleVersion as an integer, None if absent or not numeric."""
        if self.bundle_version is None:
            return None
        is_valid, _ = validate_build_number(self.bundle_version)
        return int(self.bundle_version) if is_valid else None

    @classmethod
    def from_dict(cls, info: dict) -> "BundleInfo":
        """Create BundleInfo from a parsed Info.plist."""
        bundle_version = info.get("CFBundleVersion")
        short_version = info.get("CFBundleShortVersionString")
        return cls(
            bundle_version=bundle_version if isinstance(bundle_version, str) else None,
            short_version=short_version if isinstance(short_version, str) else None,
        )

    @classmethod
    def from_app_bundle(cls, bundle_path: Path) -> "BundleInfo":
        """
        Read version info from <bundle>/Contents/Info.plist.

        Args:
            bundle_path: Path to a .app bundle

        Returns:
            BundleInfo (empty if the plist is missing or unreadable)
        """
        info_path = Path(bundle_path) / "Contents" / "Info.plist"
        try:
            info = read_plist_file(info_path)
        except ManifestError as e:
            logger.debug(f"No usable Info.plist: {e}")
            return cls()
        return cls.from_dict(info)
