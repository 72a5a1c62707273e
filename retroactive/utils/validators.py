"""Input validators for Retroactive.

Provides validation for values read from support manifests before they
are used to make network requests.
"""

import ipaddress
import re
from typing import Any, Optional, Tuple
from urllib.parse import urlparse


# Hostname pattern (simplified; underscores occur in internal mirror names)
HOSTNAME_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?!-)[A-Za-z0-9_-]{1,63}(?<!-)(\.[A-Za-z0-9_-]{1,63})*$'
)

ALLOWED_SCHEMES = ("http", "https")


def is_valid_host(host: str) -> bool:
    """True for a DNS hostname or an IPv4/IPv6 address literal."""
    if HOSTNAME_PATTERN.match(host):
        return True
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def validate_url(url: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate an http(s) URL.

    Args:
        url: URL string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not url.strip():
        return False, "URL is required"

    url = url.strip()

    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError:
        return False, f"Invalid URL: {url}"

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return False, f"Unsupported URL scheme: {parsed.scheme or '(none)'}"

    if not parsed.hostname or not is_valid_host(parsed.hostname):
        return False, f"Invalid host in URL: {url}"

    if port is not None and not 1 <= port <= 65535:
        return False, f"Port must be between 1 and 65535, got {port}"

    return True, None


def validate_build_number(value: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate a bundle build number.

    Args:
        value: Build number (int or numeric string)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(value, bool):
        return False, "Build number must be a number"

    if isinstance(value, str) and not (value.isascii() and value.isdigit()):
        return False, "Build number must contain only digits"

    if not isinstance(value, int):
        try:
            value = int(value)
        except (ValueError, TypeError):
            return False, "Build number must be a number"

    if value < 0:
        return False, f"Build number must not be negative, got {value}"

    return True, None
