"""Parsing of Digest challenges taken from WWW-Authenticate headers."""

from typing import Dict, Optional

from requests.utils import parse_dict_header

from gerrit.rest.errors import (
    UnsupportedDigestChallengeError,
    WWWAuthenticateHeaderMissingError,
    WWWAuthenticateHeaderNotDigestError,
)

WWW_AUTHENTICATE = "WWW-Authenticate"

# Algorithms both requests and httpx know how to answer
SUPPORTED_ALGORITHMS = ("MD5", "MD5-SESS", "SHA", "SHA-256", "SHA-512")


def parse_challenge(header: Optional[str]) -> Dict[str, str]:
    """Parse the parameters of a Digest challenge.

    Raises:
        WWWAuthenticateHeaderMissingError: If the header is missing or empty
        WWWAuthenticateHeaderNotDigestError: If the header names another scheme
        UnsupportedDigestChallengeError: If the challenge cannot be answered
    """
    if not header or not header.strip():
        raise WWWAuthenticateHeaderMissingError()

    scheme, _, params = header.strip().partition(" ")
    if scheme.lower() != "digest":
        raise WWWAuthenticateHeaderNotDigestError()

    challenge = parse_dict_header(params)
    for key in ("realm", "nonce"):
        if key not in challenge:
            raise UnsupportedDigestChallengeError(f"Digest challenge has no {key}")

    algorithm = (challenge.get("algorithm") or "MD5").upper()
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise UnsupportedDigestChallengeError(f"Unsupported digest algorithm {algorithm}")

    qop = challenge.get("qop")
    if qop is not None and "auth" not in [q.strip() for q in qop.split(",")]:
        raise UnsupportedDigestChallengeError(f"Unsupported digest qop {qop}")

    return challenge
