"""Headers sent with every API request."""

import sys
from typing import Dict, Optional

from gerrit.rest import __version__

_PY_VERSION = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

JSON_CONTENT_TYPE = "application/json"


def get_user_agent(http_lib_version: str, client_name: Optional[str] = None) -> str:
    """Build the User-Agent string.

    Args:
        http_lib_version: The HTTP library and version (e.g., "requests/2.31.0")
        client_name: Optional client name to append

    Returns:
        User-Agent string like "gerrit-rest/1.0.0 python/3.11.0 requests/2.31.0 MyClient"
    """
    base = f"gerrit-rest/{__version__} python/{_PY_VERSION} {http_lib_version}"
    if client_name:
        return f"{base} {client_name}"
    return base


def api_headers(user_agent: str) -> Dict[str, str]:
    # Gerrit wants both set even when the request has no body
    return {
        "Accept": JSON_CONTENT_TYPE,
        "Content-Type": JSON_CONTENT_TYPE,
        "User-Agent": user_agent,
    }


def digest_probe_headers(user_agent: str) -> Dict[str, str]:
    return {
        "Accept": "*/*",
        "Content-Type": JSON_CONTENT_TYPE,
        "User-Agent": user_agent,
    }
