"""
ZeroMQ adapter contract tests

Run ZeroMQClient (DEALER) against the mock peer behind a ROUTER socket.
"""

import asyncio

import pytest

from seam_rpc.adapters.zeromq.client import ZeroMQClient
from seam_rpc.errors import RemoteError, RequestTimeout

pytestmark = pytest.mark.asyncio

# Must match ZMQ_ADDRESS in conftest
TEST_SERVER_ADDRESS = "tcp://127.0.0.1:15555"


async def test_basic_rpc(zmq_peer):
    """Test basic RPC call"""
    async with ZeroMQClient(server_address=TEST_SERVER_ADDRESS) as client:
        test_data = {"message": "Hello, World!", "number": 42}
        response = await client.call("mirror", test_data)

    assert response == {"method": "mirror", "params": test_data}
    assert zmq_peer.requests[0]["jsonrpc"] == "2.0"


async def test_concurrent_requests_in_flight(zmq_peer):
    """DEALER allows overlapping requests, unlike REQ"""
    async with ZeroMQClient(server_address=TEST_SERVER_ADDRESS) as client:
        slow = asyncio.ensure_future(client.call("wait", {"delay": 50}))
        fast = asyncio.ensure_future(client.call("wait", {"delay": 5}))

        done, _ = await asyncio.wait({slow, fast}, return_when=asyncio.FIRST_COMPLETED)
        assert done == {fast}
        assert await fast == "waited for 5ms"
        assert await slow == "waited for 50ms"


async def test_unknown_method(zmq_peer):
    async with ZeroMQClient(server_address=TEST_SERVER_ADDRESS) as client:
        with pytest.raises(RemoteError, match="Method not found"):
            await client.call("unknown")


async def test_request_timeout(zmq_peer):
    async with ZeroMQClient(server_address=TEST_SERVER_ADDRESS, request_timeout_ms=50) as client:
        with pytest.raises(RequestTimeout):
            await client.call("silent")
        assert client.pending_count == 0


async def test_notification(zmq_peer):
    async with ZeroMQClient(server_address=TEST_SERVER_ADDRESS) as client:
        await client.notify("log", {"line": "hello"})
        await asyncio.wait_for(zmq_peer.wait_for_notifications(), timeout=1.0)

    assert zmq_peer.notifications == [("log", {"line": "hello"})]
