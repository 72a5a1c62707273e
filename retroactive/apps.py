"""Supported legacy applications for Retroactive.

Defines the AppType / ITunesVersion enums and the lookup table of
constants (names, bundle identifiers, versions, copy and artwork) for
every selection the user can make.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class AppType(Enum):
    """Legacy application the user wants to run."""
    APERTURE = "aperture"
    IPHOTO = "iphoto"
    ITUNES = "itunes"


class ITunesVersion(Enum):
    """iTunes variant offered for installation."""
    DARK_MODE = "darkMode"    # iTunes 12.9.5
    APP_STORE = "appStore"    # iTunes 12.6.5
    COVER_FLOW = "coverFlow"  # iTunes 10.7


@dataclass(frozen=True)
class AppProfile:
    """Constants describing one (app, iTunes version) selection."""
    name: str
    existing_bundle_id: str
    patched_bundle_id: str
    compatible_versions: Tuple[str, ...]
    patched_version: str
    time_estimate: str
    main_action: str
    detail_action: str
    airdrop_image: Optional[str] = None
    app_store_image: Optional[str] = None
    cartoon_icon: Optional[str] = None
    dive_field: Optional[str] = None
    download_url_field: Optional[str] = None

    @property
    def binary_name(self) -> str:
        """Executable name inside the app bundle."""
        return self.name


MODIFY_ACTION = "modifying"
MODIFY_DETAIL_ACTION = "installing support files for"
INSTALL_ACTION = "installing"
INSTALL_DETAIL_ACTION = "downloading and installing"


NO_SELECTION = AppProfile(
    name="Untitled",
    existing_bundle_id="",
    patched_bundle_id="",
    compatible_versions=(),
    patched_version="",
    time_estimate="2 minutes",
    main_action=MODIFY_ACTION,
    detail_action=MODIFY_DETAIL_ACTION,
)


def _itunes(
    patched_bundle_id: str,
    compatible_versions: Tuple[str, ...],
    patched_version: str,
    time_estimate: str,
    dive_field: Optional[str],
    download_url_field: Optional[str],
) -> AppProfile:
    return AppProfile(
        name="iTunes",
        existing_bundle_id="com.apple.iTunes",
        patched_bundle_id=patched_bundle_id,
        compatible_versions=compatible_versions,
        patched_version=patched_version,
        time_estimate=time_estimate,
        main_action=INSTALL_ACTION,
        detail_action=INSTALL_DETAIL_ACTION,
        cartoon_icon="itunes_cartoon",
        dive_field=dive_field,
        download_url_field=download_url_field,
    )


# Patched iTunes bundle identifiers are not used by the patcher yet;
# they are kept so the table stays complete.
APP_PROFILES: Dict[Tuple[Optional[AppType], Optional[ITunesVersion]], AppProfile] = {
    (None, None): NO_SELECTION,
    (AppType.APERTURE, None): AppProfile(
        name="Aperture",
        existing_bundle_id="com.apple.Aperture",
        patched_bundle_id="com.apple.Aperture3",
        compatible_versions=("3.6",),
        patched_version="99.9",
        time_estimate="2 minutes",
        main_action=MODIFY_ACTION,
        detail_action=MODIFY_DETAIL_ACTION,
        airdrop_image="airdrop_guide_aperture",
        app_store_image="appstore_guide_aperture",
        cartoon_icon="aperture_cartoon",
        dive_field="aperture_dive",
    ),
    (AppType.IPHOTO, None): AppProfile(
        name="iPhoto",
        existing_bundle_id="com.apple.iPhoto",
        patched_bundle_id="com.apple.iPhoto9",
        compatible_versions=("9.6.1", "9.6"),
        patched_version="99.9",
        time_estimate="2 minutes",
        main_action=MODIFY_ACTION,
        detail_action=MODIFY_DETAIL_ACTION,
        airdrop_image="airdrop_guide_iphoto",
        app_store_image="appstore_guide_iphoto",
        cartoon_icon="iphoto_cartoon",
        dive_field="iphoto_dive",
    ),
    (AppType.ITUNES, ITunesVersion.DARK_MODE): _itunes(
        "com.apple.iTunes129", ("12.9.5",), "13.9.5", "25 minutes",
        "itunes129_dive", "itunes129_url",
    ),
    (AppType.ITUNES, ITunesVersion.APP_STORE): _itunes(
        "com.apple.iTunes126", ("12.6.5",), "13.6.5", "10 minutes",
        "itunes126_dive", "itunes126_url",
    ),
    (AppType.ITUNES, ITunesVersion.COVER_FLOW): _itunes(
        "com.apple.iTunes10", ("10.7",), "13.7", "10 minutes",
        "itunes107_dive", "itunes107_url",
    ),
    (AppType.ITUNES, None): _itunes("", (), "", "an hour", None, None),
}


def get_profile(
    app: Optional[AppType],
    itunes_version: Optional[ITunesVersion] = None
) -> AppProfile:
    """
    Look up the constants for a selection.

    Args:
        app: Chosen application, or None
        itunes_version: Chosen iTunes variant; ignored unless app is iTunes

    Returns:
        AppProfile for the selection
    """
    if app is not AppType.ITUNES:
        itunes_version = None
    return APP_PROFILES[(app, itunes_version)]
