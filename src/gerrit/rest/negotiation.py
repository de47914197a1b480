"""Selection of the authentication scheme accepted by a Gerrit server.

Both clients probe the schemes in PROBE_ORDER by fetching the caller's own
account. Digest comes first: it is Gerrit's default and Basic or Cookie attempts
against a Digest-only server fail in ways that are hard to tell apart from bad
credentials.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gerrit.rest.auth import AuthScheme
from gerrit.rest.errors import ApiError, AuthSchemeInapplicableError

logger = logging.getLogger(__name__)

PROBE_ORDER = (AuthScheme.DIGEST, AuthScheme.BASIC, AuthScheme.COOKIE)

PROBE_ACCEPTED_STATUS = 200
UNAUTHORIZED_STATUS = 401


class ProbeOutcome(Enum):
    ACCEPTED = "accepted"
    INAPPLICABLE = "inapplicable"
    FATAL = "fatal"


@dataclass(frozen=True)
class ProbeResult:
    scheme: AuthScheme
    outcome: ProbeOutcome
    reason: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def accepted(cls, scheme: AuthScheme) -> "ProbeResult":
        return cls(scheme, ProbeOutcome.ACCEPTED)

    @classmethod
    def inapplicable(cls, scheme: AuthScheme, reason: str) -> "ProbeResult":
        return cls(scheme, ProbeOutcome.INAPPLICABLE, reason=reason)

    @classmethod
    def fatal(cls, scheme: AuthScheme, error: BaseException) -> "ProbeResult":
        return cls(scheme, ProbeOutcome.FATAL, reason=str(error), error=error)


def result_from_status(scheme: AuthScheme, status_code: int) -> ProbeResult:
    """Classify a probe that completed without raising."""
    if status_code == PROBE_ACCEPTED_STATUS:
        return ProbeResult.accepted(scheme)
    return ProbeResult.inapplicable(scheme, f"probe answered with status {status_code}")


def result_from_error(scheme: AuthScheme, error: BaseException) -> ProbeResult:
    """Classify a probe that raised.

    A missing or non-Digest challenge and a plain 401 mean the scheme does not
    apply. Everything else (network failures, malformed responses, other status
    codes) ends the negotiation.
    """
    if isinstance(error, AuthSchemeInapplicableError):
        return ProbeResult.inapplicable(scheme, str(error))
    if isinstance(error, ApiError) and error.status_code == UNAUTHORIZED_STATUS:
        return ProbeResult.inapplicable(scheme, str(error))
    return ProbeResult.fatal(scheme, error)


def log_result(result: ProbeResult) -> None:
    if result.outcome is ProbeOutcome.ACCEPTED:
        logger.debug(f"Server accepted {result.scheme.value} authentication")
    else:
        logger.debug(f"{result.scheme.value} authentication {result.outcome.value}: {result.reason}")
