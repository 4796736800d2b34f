"""
Shared fixtures for seam_rpc tests

- MockPeer: JSON-RPC 2.0 peer behind a websockets server or a ZeroMQ ROUTER socket
- FakeHub / FakeTransport: in-memory transport with scripted open/close/error behavior
"""

import asyncio
import contextlib
import json

import pytest
import pytest_asyncio
import websockets
import zmq
import zmq.asyncio
from websockets.exceptions import ConnectionClosed

from seam_rpc.errors import TransportError
from seam_rpc.transport.base import Transport, TransportState

WS_HOST = "localhost"
WS_PORT = 8200
WS_URL = f"ws://{WS_HOST}:{WS_PORT}"

SILENT_PORT = 8201
SILENT_URL = f"ws://127.0.0.1:{SILENT_PORT}"

ZMQ_ADDRESS = "tcp://127.0.0.1:15555"


class MockPeer:
    """Remote peer with a fixed set of test methods

    mirror  - echoes method and params
    wait    - answers "waited for <delay>ms" after params["delay"] ms
    silent  - never answers
    garbage - answers with an unparsable payload
    stray   - sends an unknown-id response and an id-less message, then answers
    drop    - closes the connection (WebSocket only)
    *       - "Method not found" error
    """

    def __init__(self):
        self.connections = 0
        self.requests = []
        self.notifications = []
        self._tasks = set()

    async def dispatch(self, raw, reply):
        request = json.loads(raw)
        method = request.get("method")
        params = request.get("params")

        if "id" not in request:
            self.notifications.append((method, params))
            return

        self.requests.append(request)
        response = {"jsonrpc": "2.0", "id": request["id"]}

        if method == "mirror":
            response["result"] = {"method": method, "params": params}
        elif method == "wait":
            delay = params["delay"]
            response["result"] = f"waited for {delay}ms"
            self._reply_later(delay, reply, response)
            return
        elif method == "silent":
            return
        elif method == "garbage":
            await reply("{this is not json")
            return
        elif method == "stray":
            await reply(json.dumps({"jsonrpc": "2.0", "id": "no-such-request", "result": "stray"}))
            await reply(json.dumps({"jsonrpc": "2.0", "method": "server.event", "params": {}}))
            response["result"] = "after stray"
        else:
            response["error"] = {"code": -32601, "message": "Method not found"}

        await reply(json.dumps(response))

    def _reply_later(self, delay_ms, reply, response):
        async def send():
            await asyncio.sleep(delay_ms / 1000.0)
            with contextlib.suppress(ConnectionClosed, zmq.error.ZMQError):
                await reply(json.dumps(response))

        task = asyncio.create_task(send())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def handle_websocket(self, websocket):
        self.connections += 1
        with contextlib.suppress(ConnectionClosed):
            async for raw in websocket:
                if json.loads(raw).get("method") == "drop":
                    await websocket.close(code=1011, reason="dropped by peer")
                    return
                await self.dispatch(raw, websocket.send)

    async def wait_for_notifications(self, count=1):
        while len(self.notifications) < count:
            await asyncio.sleep(0.005)

    def shutdown(self):
        for task in list(self._tasks):
            task.cancel()


@pytest_asyncio.fixture
async def ws_peer():
    """MockPeer served at ws://localhost:8200"""
    peer = MockPeer()
    async with websockets.serve(peer.handle_websocket, WS_HOST, WS_PORT):
        yield peer
    peer.shutdown()


@pytest_asyncio.fixture
async def zmq_peer():
    """MockPeer behind a ROUTER socket at ZMQ_ADDRESS"""
    peer = MockPeer()
    context = zmq.asyncio.Context()
    socket = context.socket(zmq.ROUTER)
    socket.setsockopt(zmq.LINGER, 0)
    socket.bind(ZMQ_ADDRESS)

    async def serve():
        while True:
            identity, payload = await socket.recv_multipart()

            async def reply(text, identity=identity):
                await socket.send_multipart([identity, text.encode("utf-8")])

            await peer.dispatch(payload, reply)

    server_task = asyncio.create_task(serve())
    yield peer

    peer.shutdown()
    server_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await server_task
    socket.close()
    context.term()


@pytest_asyncio.fixture
async def silent_server():
    """TCP server that accepts connections but never answers the WebSocket handshake"""
    writers = []

    def accept(reader, writer):
        writers.append(writer)

    server = await asyncio.start_server(accept, "127.0.0.1", SILENT_PORT)
    yield SILENT_URL

    for writer in writers:
        writer.close()
    server.close()
    await server.wait_closed()


class FakeTransport(Transport):
    """Scripted in-memory transport"""

    name = "Fake"

    def __init__(self, endpoint, hub):
        super().__init__(endpoint)
        self.hub = hub
        self.sent = []

    async def open(self):
        self._set_state(TransportState.CONNECTING)
        await self.hub.open_gate.wait()
        if self.hub.open_error:
            self._set_state(TransportState.CLOSED)
            raise TransportError(f"Fake error: {self.hub.open_error}")
        self._set_state(TransportState.OPEN)

    async def send(self, data):
        if not self.is_open:
            raise TransportError("Fake is not open")
        if self.hub.send_error:
            raise TransportError(f"Fake error: {self.hub.send_error}")
        self.sent.append(json.loads(data))

    async def close(self):
        if self._state in (TransportState.CLOSING, TransportState.CLOSED):
            return
        self._set_state(TransportState.CLOSED)
        self.hub.closed.append(self)

    async def wait_sent(self, count=1):
        while len(self.sent) < count:
            await asyncio.sleep(0)

    def deliver(self, payload):
        """Inject an inbound message (dicts are JSON-encoded)"""
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        self._emit_message(payload)

    def reply(self, index=-1, **members):
        """Answer one of the sent requests"""
        self.deliver({"jsonrpc": "2.0", "id": self.sent[index]["id"], **members})

    def fail(self, error):
        self._set_state(TransportState.CLOSED)
        self._emit_error(error)

    def drop(self, reason=""):
        self._set_state(TransportState.CLOSED)
        self._emit_close(reason)


class FakeHub:
    """Factory and recorder for FakeTransport instances"""

    def __init__(self):
        self.created = []
        self.closed = []
        self.open_error = None
        self.send_error = None
        self.open_gate = asyncio.Event()
        self.open_gate.set()

    def __call__(self, endpoint):
        transport = FakeTransport(endpoint, self)
        self.created.append(transport)
        return transport

    def hold_open(self):
        """Make open() block until release_open()"""
        self.open_gate.clear()

    def release_open(self):
        self.open_gate.set()

    @property
    def latest(self):
        return self.created[-1]

    async def wait_sent(self, count=1, generation=1):
        """Wait until the generation-th transport has sent count messages"""
        while len(self.created) < generation or len(self.created[generation - 1].sent) < count:
            await asyncio.sleep(0)
        return self.created[generation - 1]


@pytest.fixture
def fake_hub():
    return FakeHub()


@pytest.fixture
def sequential_ids():
    """Deterministic request id generator: req-1, req-2, ..."""
    counter = iter(range(1, 1_000_000))
    return lambda: f"req-{next(counter)}"
