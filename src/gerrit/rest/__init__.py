import logging
import os
from logging import NullHandler
from pathlib import Path

logging.getLogger(__name__).addHandler(NullHandler())

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"

# Gerrit prefixes JSON responses with this line to defeat cross-site script inclusion
MAGIC_PREFIX = b")]}'\n"

# Authenticated access to a resource lives under this path namespace
AUTHENTICATED_PREFIX = "a/"

SELF_ACCOUNT = "self"

DEFAULT_ENV_CONFIG_FILE_PATH = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "gerrit-rest" / "environments.json"
)

from gerrit.rest.auth import Authentication, AuthScheme, AuthState, Credential  # noqa: E402
from gerrit.rest.errors import (  # noqa: E402
    ApiError,
    AuthenticationFailedError,
    AuthSchemeInapplicableError,
    GerritError,
    NoInstanceGivenError,
    ResponseDecodeError,
    UserWithoutPasswordError,
    WWWAuthenticateHeaderMissingError,
    WWWAuthenticateHeaderNotDigestError,
)
from gerrit.rest.response import ApiResponse  # noqa: E402
from gerrit.rest.serde import Discard, RawSink, Typed, strip_magic_prefix  # noqa: E402

__all__ = [
    "ApiError",
    "ApiResponse",
    "AuthScheme",
    "AuthSchemeInapplicableError",
    "AuthState",
    "Authentication",
    "AuthenticationFailedError",
    "Credential",
    "Discard",
    "GerritError",
    "NoInstanceGivenError",
    "RawSink",
    "ResponseDecodeError",
    "Typed",
    "UserWithoutPasswordError",
    "WWWAuthenticateHeaderMissingError",
    "WWWAuthenticateHeaderNotDigestError",
    "strip_magic_prefix",
]
