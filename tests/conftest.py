import asyncio
import collections

import pytest

from kchannel.transport.base import Transport, TransportConnectionError


class MemoryTransport(Transport):
    """ A transport that keeps messages in local queues: frames handed to
        :func:`send` accumulate in *sent*, and :func:`recv` returns whatever
        was put in *inbox*. An exception in the inbox is raised instead of
        returned.
    """

    def __init__(self):
        self.opened = 0
        self.closed = 0
        self._open = False
        self.sent = list()
        self.inbox = collections.deque()
        self.fail_send = None

    @property
    def is_open(self):
        return self._open

    def open(self):
        self.opened += 1
        self._open = True

    def close(self):
        self.closed += 1
        self._open = False

    async def send(self, frames):
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(list(frames))

    async def recv(self):
        while not self.inbox:
            await asyncio.sleep(0)

        frames = self.inbox.popleft()
        if isinstance(frames, Exception):
            raise frames
        return list(frames)


@pytest.fixture
def transport():
    return MemoryTransport()


@pytest.fixture
def lost_connection():
    return TransportConnectionError('connection lost')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
