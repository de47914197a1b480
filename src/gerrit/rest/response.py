"""Classification of HTTP responses and the response wrapper returned to callers."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from gerrit.rest.errors import ApiError


@dataclass
class ApiResponse:
    """A Gerrit API response.

    Wraps the transport response (requests.Response or httpx.Response) together
    with the decoded body.
    """

    http_response: Any
    data: Any = None

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.http_response.headers

    @property
    def url(self) -> str:
        return str(self.http_response.url)


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def check_status(status_code: int, reason: str, url: str, response: Optional[Any] = None) -> None:
    """Raise ApiError unless the status code is within 200-299.

    Gerrit error responses are not expected to carry a body, so only the status
    line ends up in the error.
    """
    if is_success(status_code):
        return
    raise ApiError(url, status_code, reason, response=response)


def check_response(response: Any) -> None:
    """Run check_status on a requests or httpx response."""
    reason = getattr(response, "reason", None)
    if reason is None:
        reason = getattr(response, "reason_phrase", "")
    check_status(response.status_code, reason or "", str(response.request.url), response=response)
