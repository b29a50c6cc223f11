"""Request execution.

``RequestExecutor.submit`` returns a ``PendingRequest``: a single-shot awaitable
that sends one GET, decodes the body and settles exactly once. Transport and
decode failures never raise; they settle the request with an ``Err``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Generator
from enum import Enum
from typing import Any, Protocol

import httpx

from .config import DEFAULT_TIMEOUT, ClientConfig
from .errors import ConceptNetError, DecodeError, TransportError
from .result import Err, Ok, Result
from .types import Callback

logger = logging.getLogger(__name__)

Completion = Result[Any, ConceptNetError]
Decoder = Callable[[bytes], Any]


class Transport(Protocol):
    """Performs one GET and returns the raw body, or raises TransportError."""

    async def get(self, host: str, port: int, path: str) -> bytes: ...


def _base_url(host: str, port: int) -> str:
    return ClientConfig(host=host, port=port).base_url


class HttpxTransport:
    """Transport backed by a fresh ``httpx.AsyncClient`` per request."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests).
        """
        self.timeout = timeout
        self._transport = transport

    async def get(self, host: str, port: int, path: str) -> bytes:
        url = f"{_base_url(host, port)}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError("Request timed out") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"HTTP error: {response.status_code}",
                status_code=response.status_code,
            )
        return response.content


def decode_json(body: bytes) -> Any:
    """Decode a JSON response body."""
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError("Invalid JSON response") from e


class RequestState(str, Enum):
    """Lifecycle of a single request."""

    IDLE = "idle"
    SENT = "sent"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PendingRequest:
    """Single-shot handle for one outbound request.

    The GET goes out once ``start()`` runs: when the request is awaited, when
    ``wait()`` is called, or at submit time for requests carrying a callback
    inside a running event loop. Awaiting again, from any number of tasks,
    yields the same completion and never issues a second GET. Cancelling one
    waiter does not cancel the request itself.

    Usage:
        pending = client.lookup("/c/en/toast")
        result = await pending
        if result.is_ok():
            print(result.value["edges"])
    """

    def __init__(
        self,
        config: ClientConfig,
        path: str,
        transport: Transport,
        decoder: Decoder,
        callback: Callback | None = None,
    ) -> None:
        self.path = path
        self._config = config
        self._transport = transport
        self._decoder = decoder
        self._callback = callback
        self._state = RequestState.IDLE
        self._completion: Completion | None = None
        self._task: asyncio.Future[Completion] | None = None

    def __repr__(self) -> str:
        return f"PendingRequest(path={self.path!r}, state={self._state.value})"

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def done(self) -> bool:
        return self._completion is not None

    @property
    def completion(self) -> Completion | None:
        """The settled completion, or None while idle or in flight."""
        return self._completion

    def __await__(self) -> Generator[Any, None, Completion]:
        return self._settle().__await__()

    def start(self) -> asyncio.Future[Completion]:
        """Schedule the request on the running loop; later calls return the same task."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._execute())
        return self._task

    async def _settle(self) -> Completion:
        if self._completion is not None:
            return self._completion
        return await asyncio.shield(self.start())

    def wait(self) -> Completion:
        """Run the request to completion from synchronous code."""
        if self._completion is not None:
            return self._completion
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError("wait() cannot be called from a running event loop; await the request instead")
        if self._task is not None:
            raise RuntimeError("Request is already running in another event loop")
        return asyncio.run(self._settle())

    async def _execute(self) -> Completion:
        self._state = RequestState.SENT
        logger.debug(f"GET {self._config.base_url}{self.path}")

        try:
            body = await self._transport.get(self._config.host, self._config.port, self.path)
        except TransportError as e:
            return self._finish(Err(e))
        except httpx.HTTPError as e:
            error = TransportError(f"Request failed: {e}")
            error.__cause__ = e
            return self._finish(Err(error))

        try:
            document = self._decoder(body)
        except DecodeError as e:
            return self._finish(Err(e))
        except ValueError as e:
            error = DecodeError(f"Invalid JSON response: {e}")
            error.__cause__ = e
            return self._finish(Err(error))

        return self._finish(Ok(document))

    def _finish(self, completion: Completion) -> Completion:
        self._completion = completion
        if completion.is_ok():
            self._state = RequestState.SUCCEEDED
        else:
            self._state = RequestState.FAILED
            logger.warning(f"Request {self.path} failed: {completion.error}")

        if self._callback is not None:
            error, data = completion.as_pair()
            self._callback(error, data)
        return completion


class RequestExecutor:
    """Creates pending requests bound to one client's configuration."""

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        decoder: Decoder | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or HttpxTransport(config.timeout)
        self._decoder = decoder or decode_json

    def submit(self, path: str, callback: Callback | None = None) -> PendingRequest:
        """Create a request for ``path``.

        With a callback and a running event loop the GET is scheduled right
        away, so the callback fires without anyone awaiting the request.
        Outside a loop it fires when ``wait()`` runs the request.
        """
        pending = PendingRequest(self._config, path, self._transport, self._decoder, callback)
        if callback is not None:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                return pending
            pending.start()
        return pending
