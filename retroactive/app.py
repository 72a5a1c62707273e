"""Application start-up for Retroactive.

Wires settings, logging, the manifest client and the AppManager together.
The UI layer calls create_app_manager() once at launch and
AppManager.close() at shutdown.
"""

from pathlib import Path
from typing import Optional

from retroactive.config.bundle import BundleInfo
from retroactive.config.paths import get_bundled_manifest_path, get_log_file_path
from retroactive.config.settings import SettingsManager
from retroactive.manager import AppManager
from retroactive.manifest.client import ManifestClient
from retroactive.utils.logging import setup_logging
from retroactive.utils.threading import GUIUpdateQueue


def create_app_manager(
    settings_manager: Optional[SettingsManager] = None,
    build_number: Optional[int] = None,
    update_queue: Optional[GUIUpdateQueue] = None,
    log_file: Optional[Path] = None,
    bundled_manifest_path: Optional[Path] = None,
    app_bundle: Optional[Path] = None
) -> AppManager:
    """
    Build and start the configuration manager.

    Args:
        settings_manager: Settings source (default: platform settings file)
        build_number: Build number of the running app (see BundleInfo)
        update_queue: Channel the UI thread drains for notifications
        log_file: Log file path (default: app data log file)
        bundled_manifest_path: Override for the bundled SupportPath.plist
        app_bundle: Running .app bundle, read when build_number is not given

    Returns:
        Initialized AppManager; a remote refresh is already running if
        update checks are enabled
    """
    settings_manager = settings_manager or SettingsManager()
    settings = settings_manager.load()

    logger = setup_logging(
        level=settings.log_level,
        log_file=log_file or get_log_file_path(),
    )
    logger.info("Application starting")

    if build_number is None and app_bundle is not None:
        build_number = BundleInfo.from_app_bundle(app_bundle).build_number

    manager = AppManager(
        client=ManifestClient(timeout=settings.request_timeout),
        bundled_manifest_path=bundled_manifest_path or get_bundled_manifest_path(),
        build_number=build_number,
        update_queue=update_queue,
        assets_dir=Path(settings.assets_dir) if settings.assets_dir else None,
        manifest_url_override=settings.manifest_url_override,
    )
    manager.initialize()

    if settings.check_for_updates:
        manager.refresh_configuration()
    else:
        logger.info("Configuration refresh disabled in settings")

    return manager
