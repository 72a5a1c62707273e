"""Retroactive configuration manager.

Tracks the legacy Apple application the user wants to run on modern
macOS, keeps the support manifest up to date and derives the copy and
artwork the UI shows for the current choice.
"""

__version__ = "1.0.0"
