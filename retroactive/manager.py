"""Configuration manager for Retroactive.

AppManager tracks which legacy application the user chose, keeps the
support manifest (bundled, then refreshed from the network) and exposes
the strings and artwork the UI shows for the current selection.
"""

import logging
import os
import threading
import unicodedata
from pathlib import Path, PurePosixPath
from typing import List, Optional
from urllib.parse import unquote, urlparse

from retroactive.apps import AppProfile, AppType, ITunesVersion, get_profile
from retroactive.manifest.client import ManifestClient
from retroactive.manifest.exceptions import ManifestError
from retroactive.manifest.models import Manifest, find_package_url
from retroactive.manifest.plist import read_plist_file
from retroactive.utils.threading import (
    DOCUMENT_TITLE,
    UPDATE_AVAILABLE,
    GUIUpdateQueue,
    ThreadedTask,
)
from retroactive.utils.validators import validate_url

logger = logging.getLogger("retroactive.manager")


# Placeholders understood by replace_token_for
NAME_TOKEN = "{name}"
TIME_TOKEN = "{timeEstimate}"
DETAIL_ACTION_TOKEN = "{actionS}"
MAIN_ACTION_TOKEN = "{actionM}"

# Fallback base name when no download URL is known
DEFAULT_DOWNLOAD_NAME = "blob"


class AppManager:
    """
    Selection state and support configuration for the patcher UI.

    One instance is created at start-up (see retroactive.app) and passed
    to every consumer. Network work runs on ThreadedTask workers; UI
    notifications go through the optional GUIUpdateQueue and are applied
    when the UI thread drains it.
    """

    def __init__(
        self,
        client: ManifestClient,
        bundled_manifest_path: Optional[Path] = None,
        build_number: Optional[int] = None,
        update_queue: Optional[GUIUpdateQueue] = None,
        assets_dir: Optional[Path] = None,
        manifest_url_override: Optional[str] = None
    ):
        """
        Initialize the manager.

        Args:
            client: Client used for the manifest and catalog downloads
            bundled_manifest_path: Static manifest loaded by initialize()
            build_number: Build number of the running application
            update_queue: Channel for UI notifications
            assets_dir: Directory holding <image name>.png artwork
            manifest_url_override: Refresh from this URL instead of SupportPathURL
        """
        self._client = client
        self._bundled_manifest_path = bundled_manifest_path
        self._build_number = build_number
        self._update_queue = update_queue
        self._assets_dir = assets_dir
        self._manifest_url_override = manifest_url_override or None

        self._lock = threading.Lock()
        self._generation = 0
        self._manifest = Manifest()

        self._chosen_app: Optional[AppType] = None
        self.chosen_itunes_version: Optional[ITunesVersion] = None
        self.location_of_chosen_app: Optional[str] = None
        self.fixer_update_available: bool = False

    # ------------------------------------------------------------------
    # Manifest lifecycle
    # ------------------------------------------------------------------

    @property
    def manifest(self) -> Manifest:
        """Current support manifest snapshot."""
        return self._manifest

    @property
    def build_number(self) -> Optional[int]:
        return self._build_number

    def initialize(self) -> None:
        """Load the bundled manifest; an unreadable file leaves it empty."""
        path = self._bundled_manifest_path
        if path is None:
            logger.warning("No bundled manifest configured")
            return

        try:
            data = read_plist_file(path)
        except ManifestError as e:
            logger.warning(f"Could not load bundled manifest: {e}")
            return

        with self._lock:
            self._manifest = Manifest.from_dict(data)
        logger.info(f"Loaded bundled manifest with {len(data)} keys")
        self._refresh_update_badge()

    def refresh_configuration(self) -> Optional[ThreadedTask[bool]]:
        """
        Fetch the remote manifest in the background.

        Returns:
            The running task (its result is True if the manifest was
            replaced), or None if there is no valid support URL
        """
        url = self._manifest_url_override or self.support_path
        is_valid, error = validate_url(url)
        if not is_valid:
            logger.info(f"Skipping configuration refresh: {error}")
            return None

        with self._lock:
            self._generation += 1
            generation = self._generation

        task: ThreadedTask[bool] = ThreadedTask(
            self._refresh, args=(url, generation), name="config-refresh"
        )
        return task.start()

    def _refresh(self, url: str, generation: int) -> bool:
        """Worker body of refresh_configuration."""
        try:
            data = self._client.fetch_plist(url)
        except ManifestError as e:
            logger.error(f"Error loading support configuration: {e}")
            return False

        manifest = Manifest.from_dict(data)
        with self._lock:
            if generation != self._generation:
                logger.info(f"Discarding stale configuration from refresh #{generation}")
                return False
            self._manifest = manifest

        logger.info(f"Configuration refreshed from {url}")
        self._refresh_update_badge()
        self._resolve_itunes_url(manifest)
        return True

    def resolve_itunes_download_url(self) -> Optional[ThreadedTask[Optional[str]]]:
        """
        Look up the current iTunes 12.9 package in the software catalog.

        Returns:
            The running task (its result is the URL written into the
            manifest, or None), or None if the catalog keys are missing
        """
        manifest = self._manifest
        if not self._can_resolve_itunes(manifest):
            logger.debug("iTunes catalog lookup not configured")
            return None

        task: ThreadedTask[Optional[str]] = ThreadedTask(
            self._resolve_itunes_url, args=(manifest,), name="itunes-catalog"
        )
        return task.start()

    @staticmethod
    def _can_resolve_itunes(manifest: Manifest) -> bool:
        is_valid, _ = validate_url(manifest.itunes_catalog_url)
        return (
            is_valid
            and manifest.itunes_download_identifier is not None
            and manifest.itunes_expected_name is not None
        )

    def _resolve_itunes_url(self, manifest: Manifest) -> Optional[str]:
        """Worker body of resolve_itunes_download_url."""
        if not self._can_resolve_itunes(manifest):
            return None

        try:
            catalog = self._client.fetch_plist(manifest.itunes_catalog_url)
        except ManifestError as e:
            logger.error(f"Error loading software catalog: {e}")
            return None

        url = find_package_url(
            catalog,
            manifest.itunes_download_identifier,
            manifest.itunes_expected_name,
        )
        if url is None:
            logger.warning(
                f"No package matching {manifest.itunes_expected_name} in catalog"
            )
            return None

        with self._lock:
            # A refresh replaced the manifest while the catalog downloaded
            if self._manifest is not manifest:
                logger.info("Discarding catalog result for a replaced manifest")
                return None
            self._manifest = manifest.with_itunes129_url(url)

        logger.info(f"Found updated iTunes package: {url}")
        self._refresh_update_badge()
        return url

    @property
    def has_newer_version(self) -> bool:
        """True if LatestBuildNumber is greater than the running build."""
        latest = self.latest_build_number
        if self._build_number is None or latest is None:
            return False
        return self._build_number < latest

    def _refresh_update_badge(self) -> None:
        if not self.has_newer_version:
            return
        logger.info(
            f"Update available: build {self._build_number} < {self.latest_build_number}"
        )
        if self._update_queue is not None:
            self._update_queue.put(UPDATE_AVAILABLE, True)

    def close(self) -> None:
        """Release the HTTP session."""
        self._client.close()

    # ------------------------------------------------------------------
    # Manifest values
    # ------------------------------------------------------------------

    @property
    def support_path(self) -> Optional[str]:
        return self._manifest.support_path

    @property
    def latest_build_number(self) -> Optional[int]:
        return self._manifest.latest_build_number

    @property
    def new_version_visible_title(self) -> Optional[str]:
        return self._manifest.new_version_visible_title

    @property
    def new_version_changelog(self) -> Optional[str]:
        return self._manifest.new_version_changelog

    @property
    def latest_zip(self) -> Optional[str]:
        return self._manifest.latest_zip

    @property
    def release_page(self) -> Optional[str]:
        return self._manifest.release_page

    @property
    def source_page(self) -> Optional[str]:
        return self._manifest.source_page

    @property
    def new_issue_page(self) -> Optional[str]:
        return self._manifest.new_issue_page

    @property
    def issues_page(self) -> Optional[str]:
        return self._manifest.issues_page

    @property
    def wiki_page(self) -> Optional[str]:
        return self._manifest.wiki_page

    @property
    def itunes_catalog_url(self) -> Optional[str]:
        return self._manifest.itunes_catalog_url

    @property
    def itunes_download_identifier(self) -> Optional[str]:
        return self._manifest.itunes_download_identifier

    @property
    def itunes_expected_name(self) -> Optional[str]:
        return self._manifest.itunes_expected_name

    @property
    def aperture_dive(self) -> Optional[str]:
        return self._manifest.aperture_dive

    @property
    def iphoto_dive(self) -> Optional[str]:
        return self._manifest.iphoto_dive

    @property
    def itunes129_dive(self) -> Optional[str]:
        return self._manifest.itunes129_dive

    @property
    def itunes126_dive(self) -> Optional[str]:
        return self._manifest.itunes126_dive

    @property
    def itunes107_dive(self) -> Optional[str]:
        return self._manifest.itunes107_dive

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def chosen_app(self) -> Optional[AppType]:
        """Application the user picked; None before a choice is made."""
        return self._chosen_app

    @chosen_app.setter
    def chosen_app(self, app: Optional[AppType]) -> None:
        self._chosen_app = app
        self.location_of_chosen_app = None
        if self._update_queue is not None:
            self._update_queue.put(DOCUMENT_TITLE, self.name_of_chosen_app)

    @property
    def profile(self) -> AppProfile:
        """Lookup-table entry for the current selection."""
        return get_profile(self._chosen_app, self.chosen_itunes_version)

    @property
    def name_of_chosen_app(self) -> str:
        return self.profile.name

    @property
    def binary_name_of_chosen_app(self) -> str:
        return self.profile.binary_name

    @property
    def compatible_version_of_chosen_app(self) -> List[str]:
        return list(self.profile.compatible_versions)

    @property
    def existing_bundle_id_of_chosen_app(self) -> str:
        return self.profile.existing_bundle_id

    @property
    def patched_bundle_id_of_chosen_app(self) -> str:
        return self.profile.patched_bundle_id

    @property
    def patched_version_string_of_chosen_app(self) -> str:
        return self.profile.patched_version

    @property
    def time_estimate_string_of_chosen_app(self) -> str:
        return self.profile.time_estimate

    @property
    def main_action_of_chosen_app(self) -> str:
        return self.profile.main_action

    @property
    def detail_action_of_chosen_app(self) -> str:
        return self.profile.detail_action

    @property
    def airdrop_image(self) -> Optional[str]:
        return self.profile.airdrop_image

    @property
    def app_store_image(self) -> Optional[str]:
        return self.profile.app_store_image

    @property
    def cartoon_icon(self) -> Optional[str]:
        return self.profile.cartoon_icon

    def image_path(self, name: Optional[str]) -> Optional[Path]:
        """
        Resolve an image name to a file in the assets directory.

        Args:
            name: Image name such as "aperture_cartoon"

        Returns:
            Path to <assets_dir>/<name>.png, or None if unavailable
        """
        if name is None or self._assets_dir is None:
            return None
        path = Path(self._assets_dir) / f"{name}.png"
        return path if path.is_file() else None

    @property
    def behind_the_scenes_of_chosen_app(self) -> Optional[str]:
        field_name = self.profile.dive_field
        if field_name is None:
            return None
        return getattr(self._manifest, field_name)

    @property
    def download_url_of_chosen_app(self) -> Optional[str]:
        field_name = self.profile.download_url_field
        if field_name is None:
            return None
        return getattr(self._manifest, field_name)

    def _download_path(self) -> Optional[PurePosixPath]:
        url = self.download_url_of_chosen_app
        if not url:
            return None
        # Percent-escapes are decoded like a Finder file name
        name = unquote(PurePosixPath(urlparse(url).path).name)
        return PurePosixPath(name) if name else None

    @property
    def download_file_name_of_chosen_app(self) -> str:
        path = self._download_path()
        return path.name if path else DEFAULT_DOWNLOAD_NAME

    @property
    def mount_dir_name_of_chosen_app(self) -> str:
        path = self._download_path()
        return f"{path.stem if path else DEFAULT_DOWNLOAD_NAME}Mount"

    @property
    def extract_dir_name_of_chosen_app(self) -> str:
        path = self._download_path()
        return f"{path.stem if path else DEFAULT_DOWNLOAD_NAME}Extract"

    @property
    def app_path_fs(self) -> str:
        """
        Location of the chosen app in file-system representation.

        macOS file APIs use decomposed (NFD) UTF-8, so names typed or
        pasted in composed form are normalized before use.
        """
        if self.location_of_chosen_app is None:
            return ""
        return os.fsdecode(
            os.fsencode(unicodedata.normalize("NFD", self.location_of_chosen_app))
        )

    def replace_token_for(self, text: str) -> str:
        """
        Fill UI copy placeholders for the current selection.

        Every occurrence of {name}, {timeEstimate}, {actionM} and {actionS}
        is replaced; text without placeholders is returned unchanged.
        """
        return (
            text.replace(NAME_TOKEN, self.name_of_chosen_app)
            .replace(TIME_TOKEN, self.time_estimate_string_of_chosen_app)
            .replace(MAIN_ACTION_TOKEN, self.main_action_of_chosen_app)
            .replace(DETAIL_ACTION_TOKEN, self.detail_action_of_chosen_app)
        )
