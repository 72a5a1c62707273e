"""HTTP client for Retroactive support manifests.

Downloads property lists (the support manifest and Apple's software
catalog) and parses them into dictionaries.
"""

import logging

import requests

from retroactive.manifest.exceptions import (
    ManifestConnectionError,
    ManifestError,
    ManifestHTTPError,
)
from retroactive.manifest.plist import parse_plist

logger = logging.getLogger("retroactive.manifest_client")


# Request timeout in seconds
REQUEST_TIMEOUT = 30

USER_AGENT = "Retroactive/1.0"


class ManifestClient:
    """Fetches and parses remote property lists."""

    def __init__(self, timeout: int = REQUEST_TIMEOUT):
        """
        Initialize manifest client.

        Args:
            timeout: Request timeout in seconds
        """
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/x-plist, application/xml, */*",
            "User-Agent": USER_AGENT,
        })

    @property
    def timeout(self) -> int:
        """Request timeout in seconds."""
        return self._timeout

    def fetch_plist(self, url: str) -> dict:
        """
        Download a property list and parse it.

        Args:
            url: Full URL of the plist

        Returns:
            Top-level dictionary of the plist

        Raises:
            ManifestConnectionError: If unable to connect or timed out
            ManifestHTTPError: If the server returned a non-200 status
            ManifestParseError: If the body is not a plist dictionary
            ManifestError: For other request errors
        """
        try:
            logger.debug(f"Fetching plist from: {url}")
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise ManifestConnectionError(url, e)
        except requests.exceptions.ConnectionError as e:
            raise ManifestConnectionError(url, e)
        except requests.exceptions.RequestException as e:
            raise ManifestError(f"Request for {url} failed", e)

        if response.status_code != 200:
            raise ManifestHTTPError(url, response.status_code)

        data = parse_plist(response.content, url)

        logger.debug(f"Parsed {len(data)} keys from {url}")
        return data

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "ManifestClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
