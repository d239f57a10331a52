import asyncio
import hashlib
import hmac
import logging

import kchannel
import pytest

from kchannel.protocol import shell, wire
from kchannel.protocol.fields import DELIMITER
from kchannel.protocol.message import Header


key = b'secret'


def request(msg_type='execute_request', content=b'{"code":"1+1"}', msg_id='abc',
            routing=(b'client-1',), buffers=(), metadata=b'{}', key=key):

    header = Header(msg_id=msg_id, session='s1', username='u',
                    date='2024-01-01T00:00:00.0000Z', msg_type=msg_type,
                    version='5.3')
    header = kchannel.json.dumps(header)

    digest = b''
    if key:
        mac = hmac.new(key, header + b'' + metadata + content, hashlib.sha256)
        digest = mac.hexdigest().encode()

    parts = list(routing)
    parts.extend((DELIMITER, digest, header, b'', metadata, content))
    parts.extend(buffers)
    return parts


def channel_for(transport, **kwargs):
    kwargs.setdefault('key', key)
    return kchannel.Channel(transport, shell.requests, shell.replies, **kwargs)


def run(coroutine):
    return asyncio.run(asyncio.wait_for(coroutine, timeout=5))


def test_open(transport):

    channel = channel_for(transport)
    assert transport.opened == 1
    assert transport.is_open

    channel.close()
    assert transport.closed == 1


def test_recv(transport):

    channel = channel_for(transport)
    transport.inbox.append(request(buffers=(b'blob',)))

    envelope = run(channel.recv())

    assert envelope.routing_ids == (b'client-1',)
    assert envelope.header.msg_id == 'abc'
    assert envelope.parent_header is None
    assert envelope.content == shell.ExecuteRequest(code='1+1')
    assert envelope.buffers == (b'blob',)


def test_recv_errors_leave_channel_usable(transport):

    channel = channel_for(transport)

    no_delimiter = request()
    no_delimiter.remove(DELIMITER)

    tampered = request()
    tampered[-1] = b'{"code":"2+2"}'

    transport.inbox.append(no_delimiter)
    transport.inbox.append(request()[:5])
    transport.inbox.append(tampered)
    transport.inbox.append(request(msg_type='bogus_request'))
    transport.inbox.append(request(msg_id='good'))

    with pytest.raises(kchannel.ProtocolError):
        run(channel.recv())

    with pytest.raises(kchannel.ProtocolError):
        run(channel.recv())

    with pytest.raises(kchannel.AuthenticationError):
        run(channel.recv())

    with pytest.raises(kchannel.DeserializationError):
        run(channel.recv())

    envelope = run(channel.recv())
    assert envelope.header.msg_id == 'good'


def test_recv_without_key(transport):

    channel = channel_for(transport, key=None)
    assert channel.key is None

    parts = request(key=None)
    transport.inbox.append(parts)

    envelope = run(channel.recv())
    assert envelope.content.code == '1+1'

    # An empty key from a connection file also disables signing.

    channel = channel_for(transport, key='')
    assert channel.key is None


def test_next(transport):

    channel = channel_for(transport)
    transport.inbox.append(request(buffers=(b'one', b'two'), metadata=b'{"x":1}'))
    parent = run(channel.recv())

    reply = shell.ExecuteReply(execution_count=1)
    derived = channel.next(parent, reply, now=1704067200.5)

    assert derived.routing_ids == parent.routing_ids
    assert derived.metadata == parent.metadata
    assert derived.buffers == parent.buffers
    assert derived.parent_header == parent.header
    assert derived.content is reply

    assert derived.header.msg_type == 'execute_reply'
    assert derived.header.date == '2024-01-01T00:00:00.5000Z'
    assert derived.header.session == parent.header.session
    assert derived.header.username == parent.header.username
    assert derived.header.version == parent.header.version
    assert derived.header.msg_id != parent.header.msg_id

    another = channel.next(parent, reply)
    assert another.header.msg_id != derived.header.msg_id
    assert another.header.msg_id != parent.header.msg_id

    # The parent is untouched.

    assert parent.header.msg_type == 'execute_request'
    assert parent.header.msg_id == 'abc'


def test_next_id_factory(transport):

    ids = iter(('first', 'second'))
    channel = channel_for(transport, id_factory=lambda: next(ids))
    transport.inbox.append(request())
    parent = run(channel.recv())

    assert channel.next(parent, shell.InterruptReply()).header.msg_id == 'first'
    assert channel.next(parent, shell.InterruptReply()).header.msg_id == 'second'


def test_next_rejects_unknown_content(transport):

    channel = channel_for(transport)
    transport.inbox.append(request())
    parent = run(channel.recv())

    with pytest.raises(TypeError):
        channel.next(parent, shell.ExecuteRequest(code='requests are not replies'))


def test_send_next(transport):

    channel = channel_for(transport)
    transport.inbox.append(request(routing=(b'a', b'b'), buffers=(b'blob',)))
    parent = run(channel.recv())

    run(channel.send_next(parent, shell.ExecuteReply(execution_count=7)))

    assert len(transport.sent) == 1
    parts = transport.sent[0]

    assert parts[:3] == [b'a', b'b', DELIMITER]
    assert parts[-1] == b'blob'

    # The reply is readable by anyone holding the key.

    decoded = wire.parse(parts, shell.replies, key)
    assert decoded.content == shell.ExecuteReply(execution_count=7)
    assert decoded.parent_header == parent.header
    assert decoded.header.msg_type == 'execute_reply'


def test_closed(transport):

    channel = channel_for(transport)
    transport.inbox.append(request())
    parent = run(channel.recv())

    channel.close()
    channel.close()
    assert transport.closed == 1

    with pytest.raises(kchannel.TransportClosed):
        run(channel.recv())

    with pytest.raises(kchannel.TransportClosed):
        run(channel.send_next(parent, shell.InterruptReply()))

    # Deriving a reply does not touch the transport.

    channel.next(parent, shell.InterruptReply())


def test_transport_failure_is_terminal(transport, lost_connection):

    channel = channel_for(transport)
    transport.inbox.append(lost_connection)
    transport.inbox.append(request())

    with pytest.raises(kchannel.TransportError):
        run(channel.recv())

    with pytest.raises(kchannel.TransportClosed):
        run(channel.recv())


def test_send_failure_is_terminal(transport, lost_connection):

    channel = channel_for(transport)
    transport.inbox.append(request())
    parent = run(channel.recv())

    transport.fail_send = lost_connection

    with pytest.raises(kchannel.TransportError):
        run(channel.send_next(parent, shell.InterruptReply()))

    transport.fail_send = None

    with pytest.raises(kchannel.TransportClosed):
        run(channel.send_next(parent, shell.InterruptReply()))


def test_cancelled_recv(transport):

    channel = channel_for(transport)

    async def cancel_then_receive():
        pending = asyncio.ensure_future(channel.recv())
        await asyncio.sleep(0)
        pending.cancel()

        with pytest.raises(asyncio.CancelledError):
            await pending

        transport.inbox.append(request())
        return await channel.recv()

    envelope = run(cancel_then_receive())
    assert envelope.header.msg_id == 'abc'


def test_logging(transport, caplog):

    log = logging.getLogger('test.channel')
    channel = channel_for(transport, log=log)
    transport.inbox.append(request())

    with caplog.at_level(logging.DEBUG, logger='test.channel'):
        parent = run(channel.recv())
        run(channel.send_next(parent, shell.InterruptReply()))

    messages = [record.getMessage() for record in caplog.records if record.name == 'test.channel']
    assert len(messages) == 2
    assert messages[0].startswith('RECV: digest=')
    assert '"execute_request"' in messages[0]
    assert messages[1].startswith('SEND: digest=')
    assert '"interrupt_reply"' in messages[1]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
