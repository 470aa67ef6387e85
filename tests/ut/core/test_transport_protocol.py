import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from tcpdemo.core.models.config import ServerConfig
from tcpdemo.core.models.errors import InvalidEncoding, TruncatedInput, UnknownRequestType
from tcpdemo.core.models.message import Echo, Jumble
from tcpdemo.core.models.state import ServerState
from tcpdemo.core.transport.flow import FlowControl
from tcpdemo.core.transport.protocol import Protocol


@pytest.fixture
def server_state():
    return ServerState()


@pytest.fixture
def config():
    return ServerConfig(
        app=AsyncMock(),
        host="1.1.1.1",
        port=1234,
        backlog=100,
        max_buffer_size=1024,
    )


def make_protocol(config, server_state, transport) -> Protocol:
    proto = Protocol(config, server_state)
    proto.connection_made(transport)
    proto._streamer.queue = Mock()
    proto._streamer.queue.put_nowait = Mock()
    return proto


def queued(proto) -> list:
    return [call.args[0] for call in proto._streamer.queue.put_nowait.call_args_list]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_connection_made_initializes_everything(config, server_state, transport):
    proto = Protocol(config, server_state)
    proto.connection_made(transport)

    assert proto._transport is transport
    assert isinstance(proto._flow, FlowControl)
    assert proto in server_state.connections
    assert len(server_state.tasks) == 1
    assert proto._streamer is not None


@pytest.mark.ut
@pytest.mark.asyncio
async def test_connection_lost_removes_connection_and_closes_transport(config, server_state, transport):
    proto = make_protocol(config, server_state, transport)

    proto.connection_lost(exc=None)

    assert proto not in server_state.connections
    assert transport.is_closing()
    assert queued(proto) == [None]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_connection_lost_releases_paused_writer(config, server_state, transport):
    proto = make_protocol(config, server_state, transport)
    proto.pause_writing()
    waiter = asyncio.create_task(proto._flow.drain())
    await asyncio.sleep(0)
    assert not waiter.done()

    proto.connection_lost(exc=ConnectionResetError())

    await asyncio.wait_for(waiter, timeout=1)
    assert proto._flow.closed


@pytest.mark.ut
@pytest.mark.asyncio
async def test_data_received_single_complete_request(config, server_state, transport, request_codec):
    proto = make_protocol(config, server_state, transport)

    proto.data_received(request_codec.encode(Echo("hello")))

    assert queued(proto) == [Echo("hello")]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_data_received_fragmented_request(config, server_state, transport, request_codec):
    proto = make_protocol(config, server_state, transport)
    data = request_codec.encode(Jumble("hello", 3))

    proto.data_received(data[:2])
    proto.data_received(data[2:9])
    assert queued(proto) == []

    proto.data_received(data[9:])
    assert queued(proto) == [Jumble("hello", 3)]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_data_received_multiple_requests(config, server_state, transport, request_codec):
    proto = make_protocol(config, server_state, transport)

    proto.data_received(request_codec.encode(Echo("a")) + request_codec.encode(Echo("bbb")))

    assert queued(proto) == [Echo("a"), Echo("bbb")]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_unknown_tag_is_forwarded_and_reading_stops(config, server_state, transport, request_codec):
    proto = make_protocol(config, server_state, transport)

    proto.data_received(b"\x05\x00\x00")
    proto.data_received(request_codec.encode(Echo("ignored")))

    items = queued(proto)
    assert len(items) == 1
    assert isinstance(items[0], UnknownRequestType)
    assert not transport.is_reading()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_invalid_utf8_is_forwarded(config, server_state, transport):
    proto = make_protocol(config, server_state, transport)

    proto.data_received(b"\x01\x00\x01\xff")

    items = queued(proto)
    assert len(items) == 1
    assert isinstance(items[0], InvalidEncoding)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_connection_lost_mid_request_reports_truncation(config, server_state, transport):
    proto = make_protocol(config, server_state, transport)

    proto.data_received(b"\x01\x00\x05He")
    proto.connection_lost(exc=None)

    items = queued(proto)
    assert isinstance(items[0], TruncatedInput)
    assert items[1] is None


@pytest.mark.ut
@pytest.mark.asyncio
async def test_buffer_overflow_closes_connection(config, server_state, transport):
    config.max_buffer_size = 10
    proto = make_protocol(config, server_state, transport)

    proto.data_received(b"\x01\x00\x20" + b"x" * 20)

    assert transport.is_closing()
    assert queued(proto) == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pause_resume_writing(config, server_state, transport):
    proto = Protocol(config, server_state)
    proto.connection_made(transport)

    proto._flow = Mock()

    proto.pause_writing()
    proto._flow.pause_writing.assert_called_once()

    proto.resume_writing()
    proto._flow.resume_writing.assert_called_once()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_shutdown_closes_transport(config, server_state, transport):
    proto = Protocol(config, server_state)
    proto.connection_made(transport)

    proto.shutdown()

    assert transport.is_closing()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_application_runs_and_closes_transport(config, server_state, transport):
    proto = Protocol(config, server_state)
    proto.connection_made(transport)

    await asyncio.gather(*server_state.tasks)

    config.app.assert_awaited_once()
    assert transport.is_closing()
