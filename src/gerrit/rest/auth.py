"""Authentication state of a Gerrit client."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AuthScheme(str, Enum):
    NONE = "none"
    BASIC = "basic"
    COOKIE = "cookie"
    DIGEST = "digest"


@dataclass(frozen=True)
class Credential:
    """A (name, secret) pair.

    Username and password for Basic and Digest, cookie name and value for Cookie.
    """

    name: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class AuthState:
    """Immutable snapshot of the selected scheme and its credential.

    Requests capture one snapshot when they are built, so the URL prefix and the
    applied credentials always belong to the same scheme.
    """

    scheme: AuthScheme = AuthScheme.NONE
    credential: Optional[Credential] = None

    @property
    def has_auth(self) -> bool:
        return self.scheme is not AuthScheme.NONE


NO_AUTH = AuthState()


class Authentication:
    """Holds the authentication scheme used by a client.

    Setting a scheme replaces the previous scheme and credential, schemes never
    combine. Changes only affect requests built afterwards.

    The state is shared by every request of the client and no locking is done.
    Configure authentication once, before issuing requests from several threads,
    and do not change it while requests are in flight.
    """

    def __init__(self) -> None:
        self._state = NO_AUTH

    @property
    def state(self) -> AuthState:
        return self._state

    def set_basic_auth(self, username: str, password: str) -> None:
        self._state = AuthState(AuthScheme.BASIC, Credential(username, password))

    def set_cookie_auth(self, name: str, value: str) -> None:
        self._state = AuthState(AuthScheme.COOKIE, Credential(name, value))

    def set_digest_auth(self, username: str, password: str) -> None:
        """Use Digest authentication.

        Every request made afterwards is preceded by an unauthenticated request to
        the same URL that fetches the server's challenge.
        """
        self._state = AuthState(AuthScheme.DIGEST, Credential(username, password))

    def set_auth(self, scheme: AuthScheme, credential: Credential) -> None:
        if scheme is AuthScheme.NONE:
            self.reset_auth()
        else:
            self._state = AuthState(scheme, credential)

    def reset_auth(self) -> None:
        self._state = NO_AUTH

    def has_auth(self) -> bool:
        return self._state.has_auth

    def has_basic_auth(self) -> bool:
        return self._state.scheme is AuthScheme.BASIC

    def has_cookie_auth(self) -> bool:
        return self._state.scheme is AuthScheme.COOKIE

    def has_digest_auth(self) -> bool:
        return self._state.scheme is AuthScheme.DIGEST

    def __repr__(self) -> str:
        return f"Authentication(scheme={self._state.scheme.value})"
