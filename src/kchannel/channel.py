""" The :class:`Channel` is the bidirectional endpoint a kernel talks through:
    it receives requests, verifying and decoding them, and sends the
    replies derived from them, encoding and signing them.

    A channel is parameterized by two :class:`~kchannel.protocol.content.ContentCodec`
    instances, one describing the requests it accepts and one describing
    the replies it emits. The channel itself knows nothing about any
    particular message kind.

    Sending is not internally synchronized. Each call to :func:`Channel.send`
    hands one complete multipart message to the transport, but tasks sharing
    a channel must not interleave calls without their own lock.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

import msgspec

from .protocol import wire
from .protocol.content import ContentCodec
from .protocol.message import Envelope, iso8601, new_id
from .transport.base import Transport, TransportClosed, TransportError


logger = logging.getLogger(__name__)


class Channel:
    """ Exchange :class:`~kchannel.protocol.message.Envelope` instances over
        an already constructed *transport*. If a *key* is provided every
        received message must carry a valid digest, and every sent message
        is signed; *digestmod* names the :mod:`hashlib` algorithm for the
        HMAC. The *log* argument overrides the logger that records each
        message sent or received.

        Most callers will use :func:`create` or :func:`from_connection`
        rather than invoking the constructor directly.
    """

    def __init__(self, transport: Transport, requests: ContentCodec,
                 replies: ContentCodec, key: Union[bytes, str, None] = None,
                 digestmod: str = 'sha256', log: Optional[logging.Logger] = None,
                 id_factory: Callable[[], str] = new_id):

        if isinstance(key, str):
            key = key.encode()

        self.transport = transport
        self.requests = requests
        self.replies = replies
        self.key = key or None
        self.digestmod = digestmod
        self.log = log if log is not None else logger
        self.id_factory = id_factory

        self.closed = False
        self.failure = None

        if not transport.is_open:
            transport.open()


    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.transport)


    @classmethod
    def create(cls, kind: str, uri: str, requests: ContentCodec, replies: ContentCodec,
               key: Union[bytes, str, None] = None, ctx=None, **kwargs) -> 'Channel':
        """ Open a ZeroMQ socket of the requested *kind* at *uri* and wrap
            it in a new :class:`Channel`. Additional keyword arguments are
            passed to the constructor.
        """

        from .transport.zmq import ZmqTransport

        transport = ZmqTransport(kind, uri, ctx=ctx)
        return cls(transport, requests, replies, key=key, **kwargs)


    @classmethod
    def from_connection(cls, info, name: str, requests: ContentCodec,
                        replies: ContentCodec, ctx=None, **kwargs) -> 'Channel':
        """ Open the channel *name* ('shell', 'control', ...) described by a
            :class:`~kchannel.config.ConnectionInfo` instance.
        """

        kwargs.setdefault('digestmod', info.digestmod)

        return cls.create(info.kind(name), info.uri(name), requests, replies,
                          key=info.key, ctx=ctx, **kwargs)


    def _check_open(self):
        if self.closed:
            raise TransportClosed(repr(self) + ' is closed')

        if self.failure is not None:
            raise TransportClosed(repr(self) + ' failed earlier') from self.failure


    async def recv(self) -> Envelope:
        """ Wait for the next complete request and return it as an
            :class:`Envelope`. Errors parsing the request are raised for
            this call only; transport errors close the channel for good.
        """

        self._check_open()

        try:
            frames = await self.transport.recv()
        except TransportError as e:
            self.failure = e
            raise

        _routing_ids, tail = wire.split(frames)
        self._log('RECV', tail)

        return wire.parse(frames, self.requests, self.key, self.digestmod)


    async def send(self, envelope: Envelope) -> None:
        """ Encode, sign, and transmit a reply *envelope*.
        """

        self._check_open()

        frames = wire.serialize(envelope, self.replies, self.key, self.digestmod)

        tail = frames[len(envelope.routing_ids) + 1:]
        self._log('SEND', tail)

        try:
            await self.transport.send(frames)
        except TransportError as e:
            self.failure = e
            raise


    def next(self, parent: Envelope, content: msgspec.Struct,
             now: Optional[float] = None) -> Envelope:
        """ Derive a reply to the request *parent* carrying *content*. The
            routing identities, metadata and buffers of the parent are
            carried over, and the header is a copy of the parent's with a
            fresh msg_id, date, and msg_type. The *now* argument is a UNIX
            epoch timestamp, defaulting to the current time.
        """

        msg_type = self.replies.discriminator_of(content)

        header = msgspec.structs.replace(
            parent.header,
            msg_id=self.id_factory(),
            date=iso8601(now),
            msg_type=msg_type,
        )

        return Envelope(
            routing_ids=parent.routing_ids,
            header=header,
            parent_header=parent.header,
            metadata=parent.metadata,
            content=content,
            buffers=parent.buffers,
        )


    async def send_next(self, parent: Envelope, content: msgspec.Struct) -> None:
        await self.send(self.next(parent, content))


    def close(self) -> None:
        """ Release the transport. Closing an already closed channel does
            nothing; any other use of a closed channel raises
            :class:`~kchannel.transport.base.TransportClosed`.
        """

        if self.closed:
            return

        self.closed = True
        self.transport.close()


    def _log(self, direction, tail):
        if not self.log.isEnabledFor(logging.DEBUG):
            return

        # The tail may be short if the frames are malformed; parsing will
        # complain about it shortly, log whatever is there.

        fields = [field.decode(errors='replace') for field in tail[:5]]
        fields.extend([''] * (5 - len(fields)))
        digest, header, parent, metadata, content = fields

        self.log.debug('%s: digest=%s; header=%s; parent=%s; content=%s; metadata=%s',
                       direction, digest, header, parent, content, metadata)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
