"""Protocol definitions for transports and raw body sinks."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Protocol for synchronous transports (requests.Session)."""

    def send(self, request: Any, **kwargs: Any) -> Any:
        raise NotImplementedError


@runtime_checkable
class AsyncTransport(Protocol):
    """Protocol for asynchronous transports (httpx.AsyncClient)."""

    async def send(self, request: Any, **kwargs: Any) -> Any:
        raise NotImplementedError


@runtime_checkable
class ByteSink(Protocol):
    """Protocol for destinations that take the raw response body."""

    def write(self, data: bytes) -> Any:
        raise NotImplementedError
