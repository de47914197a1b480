"""Authentication handlers for requests."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

from gerrit.rest._digest import WWW_AUTHENTICATE, parse_challenge
from gerrit.rest._protocols import Transport
from gerrit.rest.auth import AuthScheme, AuthState
from gerrit.rest.errors import UnsupportedDigestChallengeError
from gerrit.rest.response import is_success

logger = logging.getLogger(__name__)


class CookieAuth(AuthBase):
    """Sends the credential as a cookie."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        cookie = f"{self.name}={self.value}"
        existing = r.headers.get("Cookie")
        r.headers["Cookie"] = f"{existing}; {cookie}" if existing else cookie
        return r


class DigestProbeAuth(AuthBase):
    """Answers a Digest challenge obtained with an unauthenticated probe request.

    The probe uses the method and URL of the real request but carries no body.
    Nonces are not kept between requests, so every request costs one extra round trip.
    """

    def __init__(
        self,
        username: str,
        password: str,
        transport: Transport,
        probe_headers: Optional[Dict[str, str]] = None,
        **send_kwargs: Any,
    ) -> None:
        self.username = username
        self.password = password
        self._transport = transport
        self._probe_headers = probe_headers or {"Accept": "*/*"}
        self._send_kwargs = send_kwargs

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        probe = requests.Request(r.method, r.url, headers=self._probe_headers).prepare()
        response = self._transport.send(probe, **self._send_kwargs)

        # Only a 401 carries a challenge we can answer
        if response.status_code != 401:
            if not is_success(response.status_code):
                logger.warning(
                    f"Digest probe to {r.url} answered with status {response.status_code}, "
                    "sending the request without credentials"
                )
            return r

        challenge = parse_challenge(response.headers.get(WWW_AUTHENTICATE))
        r.headers["Authorization"] = self._authorization(r.method, r.url, challenge)
        return r

    def _authorization(self, method: str, url: str, challenge: Dict[str, str]) -> str:
        header = _build_digest_header(self.username, self.password, method, url, challenge)
        if header is None:
            raise UnsupportedDigestChallengeError(f"Cannot answer digest challenge for {url}")
        return header


def _build_digest_header(
    username: str, password: str, method: str, url: str, challenge: Dict[str, str]
) -> Optional[str]:
    """Compute a Digest Authorization header with requests' HTTPDigestAuth.

    Relies on HTTPDigestAuth internals: build_digest_header() reads the challenge
    from the per-thread state that handle_401() normally fills in.
    """
    chal = dict(challenge)
    # requests does not strip whitespace around qop tokens; parse_challenge
    # has already checked that "auth" is offered
    if chal.get("qop"):
        chal["qop"] = "auth"
    digest = HTTPDigestAuth(username, password)
    digest.init_per_thread_state()
    digest._thread_local.chal = chal
    return digest.build_digest_header(method, url)


def make_auth(
    state: AuthState,
    transport: Transport,
    probe_headers: Optional[Dict[str, str]] = None,
    **send_kwargs: Any,
) -> Optional[AuthBase]:
    """Return the requests auth handler for an authentication snapshot, or None."""
    if not state.has_auth or state.credential is None:
        return None
    name, secret = state.credential.name, state.credential.secret
    if state.scheme is AuthScheme.BASIC:
        return HTTPBasicAuth(name, secret)
    if state.scheme is AuthScheme.COOKIE:
        return CookieAuth(name, secret)
    return DigestProbeAuth(name, secret, transport, probe_headers, **send_kwargs)
