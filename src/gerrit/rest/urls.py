"""URL construction for Gerrit REST requests."""

import dataclasses
import re
from typing import Any, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote, urlencode, urlsplit, urlunsplit

from gerrit.rest import AUTHENTICATED_PREFIX
from gerrit.rest.auth import Credential
from gerrit.rest.errors import ConfigurationError, InvalidPathError, NoInstanceGivenError, UserWithoutPasswordError

# Everything that may legally appear in a path, query or fragment, plus "%" so
# that escapes made by the caller (e.g. "plugin%2Fdelete-project") survive.
_URL_SAFE = "/%:@!$&'()*+,;=?#[]~"

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

Options = Union[Mapping[str, Any], Any, None]


def normalize_endpoint(endpoint: str) -> str:
    """Return the endpoint with exactly one trailing slash."""
    return endpoint.rstrip("/") + "/"


def quote_segment(value: str) -> str:
    """Escape a value for use as a single path segment.

    Project names such as ``plugin/delete-project`` must reach Gerrit as
    ``plugin%2Fdelete-project``, otherwise the slash is read as a path boundary
    and Gerrit answers for a different (usually missing) resource.
    """
    return quote(value, safe="")


def build_url(endpoint: str, path: str, authenticated: bool = False) -> str:
    """Build the absolute URL for a request path relative to the endpoint.

    Args:
        endpoint: Base URL of the Gerrit instance
        path: Relative path, e.g. "projects/plugin%2Fdelete-project"
        authenticated: Route the request under the "a/" namespace

    Raises:
        InvalidPathError: If the path contains control characters or broken escapes
    """
    if path.startswith("/"):
        path = path[1:]

    if authenticated and not path.startswith(AUTHENTICATED_PREFIX):
        path = AUTHENTICATED_PREFIX + path

    if _CONTROL_CHARS.search(path):
        raise InvalidPathError(f"Invalid control character in request path: {path!r}")
    if _INVALID_ESCAPE.search(path):
        raise InvalidPathError(f"Invalid percent escape in request path: {path!r}")

    return normalize_endpoint(endpoint) + quote(path, safe=_URL_SAFE)


def parse_connection_string(connection_string: str) -> Tuple[str, Optional[Credential]]:
    """Split a connection string into a credential free endpoint and the embedded credential.

    The connection string has the form ``scheme://[name[:secret]@]host[:port][/path]``.
    Name and secret are percent-decoded. Query and fragment are dropped.

    Raises:
        NoInstanceGivenError: If the connection string is empty
        UserWithoutPasswordError: If a name is given without a secret
        ConfigurationError: If the connection string is not a URL
    """
    if not connection_string:
        raise NoInstanceGivenError()

    try:
        parts = urlsplit(connection_string)
        # accessing port validates it
        _ = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid Gerrit URL {connection_string!r}: {e}") from e

    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"Invalid Gerrit URL {connection_string!r}: scheme and host are required")

    userinfo, has_userinfo, hostport = parts.netloc.rpartition("@")
    endpoint = normalize_endpoint(urlunsplit((parts.scheme, hostport, parts.path, "", "")))
    if not has_userinfo:
        return endpoint, None

    name, has_secret, secret = userinfo.partition(":")
    if not has_secret:
        raise UserWithoutPasswordError()

    return endpoint, Credential(unquote(name), unquote(secret))


def add_options(path: str, options: Options) -> str:
    """Encode options as the query string of path, replacing any existing query.

    Options may be a mapping or a dataclass instance. ``None`` values are left out,
    sequences become repeated parameters and booleans are sent as "true"/"false".
    """
    if options is None:
        return path

    if dataclasses.is_dataclass(options) and not isinstance(options, type):
        options = dataclasses.asdict(options)

    params: List[Tuple[str, str]] = []
    for key, value in options.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            params.append((key, _option_value(v)))

    base = path.split("?", 1)[0]
    if not params:
        return base
    return f"{base}?{urlencode(params)}"


def _option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
