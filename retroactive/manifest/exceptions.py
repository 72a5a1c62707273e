"""Manifest-specific exceptions for Retroactive.

Custom exception hierarchy for fetching and parsing remote property
lists. None of these ever reach the user; AppManager logs them and keeps
its last-known-good configuration.
"""


class ManifestError(Exception):
    """Base exception for all manifest-related errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class ManifestConnectionError(ManifestError):
    """Failed to reach the manifest or catalog server."""

    def __init__(self, url: str, original_error: Exception = None):
        self.url = url
        message = f"Failed to fetch {url}"
        super().__init__(message, original_error)


class ManifestHTTPError(ManifestError):
    """Server answered with a non-success status code."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        message = f"Unexpected HTTP {status_code} from {url}"
        super().__init__(message)


class ManifestParseError(ManifestError):
    """Downloaded content is not a property-list dictionary."""

    def __init__(self, url: str, original_error: Exception = None):
        self.url = url
        message = f"Content of {url} is not a valid property list"
        super().__init__(message, original_error)
