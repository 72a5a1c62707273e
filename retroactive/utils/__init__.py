"""Utility module for Retroactive.

This module provides cross-cutting utilities:
- Logging: Configured logging with path redaction
- Validators: URL and build number validation
- Threading: Background tasks and the UI update queue
"""
