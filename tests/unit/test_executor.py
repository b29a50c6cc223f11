"""Unit tests for request execution and the HTTP transport."""

import asyncio
import json

import httpx
import pytest

from conceptnetclient.config import ClientConfig
from conceptnetclient.errors import DecodeError, ErrorKind, TransportError
from conceptnetclient.executor import (
    HttpxTransport,
    PendingRequest,
    RequestExecutor,
    RequestState,
    decode_json,
)
from conceptnetclient.result import Err, Ok
from tests.conftest import RecordingCallback, StubTransport


@pytest.fixture
def config():
    return ClientConfig.create()


class TestPendingRequest:
    """Tests for the single-shot request state machine."""

    @pytest.mark.asyncio
    async def test_success_settles_once(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/data/5.4/c/en/toast", callback)
        assert pending.state is RequestState.IDLE
        assert transport.calls == []

        result = await pending

        assert result == Ok({"numFound": 1, "edges": []})
        assert pending.state is RequestState.SUCCEEDED
        assert pending.done
        assert transport.calls == [("conceptnet5.media.mit.edu", 80, "/data/5.4/c/en/toast")]
        assert callback.calls == [(None, {"numFound": 1, "edges": []})]

    @pytest.mark.asyncio
    async def test_transport_failure_is_delivered_not_raised(self, config, failing_transport, callback):
        pending = RequestExecutor(config, failing_transport).submit("/x", callback)

        result = await pending

        assert result.is_err()
        assert isinstance(result.error, TransportError)
        assert result.error.kind is ErrorKind.TRANSPORT
        assert pending.state is RequestState.FAILED
        assert len(callback.calls) == 1
        error, data = callback.calls[0]
        assert error is result.error
        assert data is None

    @pytest.mark.asyncio
    async def test_httpx_errors_from_custom_transport_become_transport_errors(self, config, callback):
        stub = StubTransport(error=httpx.ConnectError("refused"))
        result = await RequestExecutor(config, stub).submit("/x", callback)
        assert isinstance(result.error, TransportError)
        assert isinstance(result.error.__cause__, httpx.ConnectError)
        assert len(callback.calls) == 1

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self, config, callback):
        stub = StubTransport(body=b"<html>not json</html>")
        result = await RequestExecutor(config, stub).submit("/x", callback)
        assert isinstance(result.error, DecodeError)
        assert callback.calls == [(result.error, None)]

    @pytest.mark.asyncio
    async def test_value_error_from_custom_decoder_is_decode_error(self, config, transport):
        def decoder(body):
            raise ValueError("bad body")

        result = await RequestExecutor(config, transport, decoder).submit("/x")
        assert isinstance(result.error, DecodeError)
        assert "bad body" in str(result.error)

    @pytest.mark.asyncio
    async def test_custom_decoder_result_is_passed_through(self, config, transport):
        result = await RequestExecutor(config, transport, lambda body: body.upper()).submit("/x")
        assert result.unwrap() == transport.body.upper()

    @pytest.mark.asyncio
    async def test_awaiting_twice_sends_once(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/x", callback)
        first = await pending
        second = await pending
        assert first is second
        assert len(transport.calls) == 1
        assert len(callback.calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_waiters_share_one_request(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/x", callback)
        async def waiter():
            return await pending

        results = await asyncio.gather(waiter(), waiter(), waiter())
        assert results[0] is results[1] is results[2]
        assert len(transport.calls) == 1
        assert len(callback.calls) == 1

    @pytest.mark.asyncio
    async def test_callback_exception_propagates_to_waiter(self, config, transport):
        def broken(error, data):
            raise RuntimeError("handler bug")

        pending = RequestExecutor(config, transport).submit("/x", broken)
        with pytest.raises(RuntimeError, match="handler bug"):
            await pending
        assert pending.state is RequestState.SUCCEEDED

    @pytest.mark.asyncio
    async def test_wait_inside_running_request_is_rejected(self, config):
        gate = asyncio.Event()

        class SlowTransport:
            async def get(self, host, port, path):
                await gate.wait()
                return b"{}"

        pending = RequestExecutor(config, SlowTransport()).submit("/x")
        task = asyncio.ensure_future(pending)
        await asyncio.sleep(0)
        with pytest.raises(RuntimeError):
            pending.wait()
        gate.set()
        assert (await task) == Ok({})

    @pytest.mark.asyncio
    async def test_wait_from_running_loop_leaves_request_idle(self, config, transport):
        pending = RequestExecutor(config, transport).submit("/x")
        with pytest.raises(RuntimeError, match="running event loop"):
            pending.wait()
        assert pending.state is RequestState.IDLE
        assert (await pending) == Ok({"numFound": 1, "edges": []})
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_submit_with_callback_schedules_request(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/x", callback)
        await asyncio.sleep(0)
        assert pending.state is RequestState.SUCCEEDED
        assert len(callback.calls) == 1

    def test_submit_with_callback_outside_loop_waits_for_wait(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/x", callback)
        assert pending.state is RequestState.IDLE
        pending.wait()
        assert len(callback.calls) == 1

    def test_wait_runs_request_synchronously(self, config, transport, callback):
        pending = RequestExecutor(config, transport).submit("/x", callback)
        assert pending.wait() == Ok({"numFound": 1, "edges": []})
        assert pending.wait() is pending.completion
        assert len(transport.calls) == 1
        assert len(callback.calls) == 1

    def test_repr_shows_path_and_state(self, config, transport):
        pending = PendingRequest(config, "/x", transport, decode_json)
        assert repr(pending) == "PendingRequest(path='/x', state=idle)"


class TestDecodeJson:
    """Tests for the default decoder."""

    def test_valid_json(self):
        assert decode_json(b'{"uri": "/c/en/grind_beef"}') == {"uri": "/c/en/grind_beef"}

    @pytest.mark.parametrize("body", [b"", b"{", b"\xff\xfe", b"nope"])
    def test_invalid_json(self, body):
        with pytest.raises(DecodeError):
            decode_json(body)


class TestHttpxTransport:
    """Tests for the httpx-backed transport."""

    @pytest.mark.asyncio
    async def test_get_returns_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"edges": []})

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        body = await transport.get("conceptnet5.media.mit.edu", 80, "/data/5.4/c/en/toast?limit=50&offset=0")

        assert json.loads(body) == {"edges": []}
        assert seen == ["http://conceptnet5.media.mit.edu/data/5.4/c/en/toast?limit=50&offset=0"]

    @pytest.mark.asyncio
    async def test_non_default_port_and_https(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, content=b"{}")

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        await transport.get("10.0.0.1", 1234, "/a")
        await transport.get("api.conceptnet.io", 443, "/b")

        assert seen == ["http://10.0.0.1:1234/a", "https://api.conceptnet.io/b"]

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        transport = HttpxTransport(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
        with pytest.raises(TransportError) as exc_info:
            await transport.get("example.org", 80, "/x")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError, match="Request failed"):
            await transport.get("example.org", 80, "/x")

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError, match="timed out"):
            await transport.get("example.org", 80, "/x")

    @pytest.mark.asyncio
    async def test_failure_reaches_completion_through_executor(self, config):
        http = HttpxTransport(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        callback = RecordingCallback()
        result = await RequestExecutor(config, http).submit("/missing", callback)
        assert isinstance(result, Err)
        assert result.error.status_code == 404
        assert callback.calls == [(result.error, None)]
