"""Exceptions raised by the Gerrit REST client."""

from typing import Any, Optional


class GerritError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(GerritError, ValueError):
    """The client was configured with an unusable connection string."""


class NoInstanceGivenError(ConfigurationError):
    def __init__(self, message: str = "No Gerrit instance given.") -> None:
        super().__init__(message)


class UserWithoutPasswordError(ConfigurationError):
    def __init__(self, message: str = "A username was provided without a password.") -> None:
        super().__init__(message)


class InvalidPathError(GerritError, ValueError):
    """A relative request path could not be turned into a URL."""


class AuthSchemeInapplicableError(GerritError):
    """The server does not accept the authentication scheme that was attempted.

    Raised while applying Digest authentication. During bootstrap these are taken
    as a signal to try the next scheme instead of failing.
    """


class WWWAuthenticateHeaderMissingError(AuthSchemeInapplicableError):
    def __init__(self, message: str = "WWW-Authenticate header is missing.") -> None:
        super().__init__(message)


class WWWAuthenticateHeaderNotDigestError(AuthSchemeInapplicableError):
    def __init__(self, message: str = "WWW-Authenticate header is not set to Digest.") -> None:
        super().__init__(message)


class UnsupportedDigestChallengeError(AuthSchemeInapplicableError):
    """The Digest challenge asks for an algorithm or qop we cannot answer."""


class AuthenticationFailedError(GerritError):
    """None of the authentication schemes accepted the provided credentials.

    ``client`` is the client that was being bootstrapped. Its authentication has
    been reset, so it can still be used anonymously or reconfigured.
    """

    def __init__(
        self,
        message: str = "Failed to authenticate using the provided credentials.",
        client: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.client = client


class ApiError(GerritError):
    """The server answered with a status code outside of 200-299."""

    def __init__(self, url: str, status_code: int, reason: str = "", response: Optional[Any] = None) -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(f"API call to {url} failed: {status}")
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.response = response


class ResponseDecodeError(GerritError, ValueError):
    """A successful response carried a body that is not valid JSON."""

    def __init__(self, message: str, response: Optional[Any] = None) -> None:
        super().__init__(message)
        self.response = response
