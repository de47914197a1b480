"""Authentication of httpx requests."""

import logging
from typing import Dict, Optional

import httpx

from gerrit.rest._digest import WWW_AUTHENTICATE, parse_challenge
from gerrit.rest._protocols import AsyncTransport
from gerrit.rest.auth import AuthScheme, AuthState
from gerrit.rest.errors import UnsupportedDigestChallengeError
from gerrit.rest.response import is_success

logger = logging.getLogger(__name__)


async def apply_auth(
    request: httpx.Request,
    state: AuthState,
    transport: AsyncTransport,
    probe_headers: Optional[Dict[str, str]] = None,
) -> httpx.Request:
    """Authenticate request according to the snapshot.

    Digest authentication first sends an unauthenticated probe with the same method
    and URL to obtain the server's challenge.
    """
    if not state.has_auth or state.credential is None:
        return request

    name, secret = state.credential.name, state.credential.secret

    if state.scheme is AuthScheme.BASIC:
        return next(httpx.BasicAuth(name, secret).sync_auth_flow(request))

    if state.scheme is AuthScheme.COOKIE:
        cookie = f"{name}={secret}"
        existing = request.headers.get("Cookie")
        request.headers["Cookie"] = f"{existing}; {cookie}" if existing else cookie
        return request

    probe = httpx.Request(
        request.method,
        request.url,
        headers=probe_headers or {"Accept": "*/*"},
        extensions=dict(request.extensions),
    )
    response = await transport.send(probe)

    if response.status_code != 401:
        if not is_success(response.status_code):
            logger.warning(
                f"Digest probe to {request.url} answered with status {response.status_code}, "
                "sending the request without credentials"
            )
        return request

    parse_challenge(response.headers.get(WWW_AUTHENTICATE))

    # A fresh DigestAuth per request: the flow yields the request untouched,
    # then answers the probe's challenge on the same request object.
    flow = httpx.DigestAuth(name, secret).sync_auth_flow(request)
    next(flow)
    try:
        return flow.send(response)
    except StopIteration:
        raise UnsupportedDigestChallengeError(f"Cannot answer digest challenge for {request.url}") from None
