"""Configuration module for Retroactive.

This module handles local application configuration:
- SettingsManager: JSON-based settings persistence
- BundleInfo: Running build number from Info.plist
- Paths: App data directories and bundled resources
- AppSettings: Settings dataclass
"""
