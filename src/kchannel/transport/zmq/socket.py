"""ZeroMQ multipart transport, driven by :mod:`zmq.asyncio`.

A :class:`ZmqTransport` owns exactly one socket. Receiving suspends the
calling task until a complete multipart message is available; ZeroMQ never
delivers a partial message, so a cancelled receive leaves nothing behind.
"""

from __future__ import annotations

import atexit
from typing import List, Optional, Sequence

import zmq
import zmq.asyncio

from ..base import Transport, TransportClosed, TransportConnectionError


context = zmq.asyncio.Context()

KINDS = {
    'DEALER': zmq.DEALER,
    'PAIR': zmq.PAIR,
    'PUB': zmq.PUB,
    'REP': zmq.REP,
    'REQ': zmq.REQ,
    'ROUTER': zmq.ROUTER,
    'SUB': zmq.SUB,
}

# Socket kinds a kernel listens on; everything else connects.

BINDING = set(('PUB', 'REP', 'ROUTER'))


class ZmqTransport(Transport):
    """ Carry multipart messages over a single ZeroMQ socket of the given
        *kind* (one of the names in :data:`KINDS`), bound or connected to
        *uri*. Whether to bind is inferred from the kind unless *bind* is
        given explicitly.
    """

    def __init__(self, kind: str, uri: str, ctx: Optional[zmq.asyncio.Context] = None,
                 bind: Optional[bool] = None, identity: Optional[bytes] = None):

        kind = kind.upper()

        try:
            KINDS[kind]
        except KeyError:
            raise ValueError('unknown socket kind: ' + repr(kind)) from None

        if bind is None:
            bind = kind in BINDING

        self.kind = kind
        self.uri = uri
        self.bind = bind
        self.identity = identity
        self.context = ctx if ctx is not None else context
        self.socket = None


    def __repr__(self):
        return '%s(%s %s)' % (self.__class__.__name__, self.kind, self.uri)


    @property
    def is_open(self) -> bool:
        return self.socket is not None


    def open(self) -> None:

        if self.socket is not None:
            return

        socket = self.context.socket(KINDS[self.kind])
        socket.setsockopt(zmq.LINGER, 0)

        if self.identity is not None:
            socket.identity = self.identity

        if self.kind == 'SUB':
            socket.setsockopt(zmq.SUBSCRIBE, b'')

        try:
            if self.bind:
                socket.bind(self.uri)
            else:
                socket.connect(self.uri)
        except zmq.ZMQError as e:
            socket.close(linger=0)
            raise TransportConnectionError('cannot open %s: %s' % (self.uri, e)) from e

        self.socket = socket


    def close(self) -> None:

        socket = self.socket
        self.socket = None

        if socket is not None:
            socket.close(linger=0)


    def _require_socket(self):
        socket = self.socket
        if socket is None:
            raise TransportClosed(repr(self) + ' is closed')
        return socket


    async def send(self, frames: Sequence[bytes]) -> None:
        socket = self._require_socket()

        try:
            await socket.send_multipart(frames)
        except zmq.ZMQError as e:
            raise TransportConnectionError('send on %s failed: %s' % (self.uri, e)) from e


    async def recv(self) -> List[bytes]:
        socket = self._require_socket()

        try:
            return await socket.recv_multipart()
        except zmq.ZMQError as e:
            raise TransportConnectionError('recv on %s failed: %s' % (self.uri, e)) from e


def _cleanup() -> None:
    context.destroy(linger=0)


atexit.register(_cleanup)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
