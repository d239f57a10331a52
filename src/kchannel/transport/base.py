"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`kchannel.protocol` so the protocol remains
transport-agnostic: a transport moves ordered sequences of byte frames and
knows nothing about what they mean.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportClosed(TransportError):
    """The transport was closed, or failed earlier, and cannot be used."""


class Transport(ABC):
    """Minimal contract for a multipart message transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    async def send(self, frames: Sequence[bytes]) -> None:
        """Write one complete multipart message as a single unit."""

    @abstractmethod
    async def recv(self) -> List[bytes]:
        """Wait for and return the next complete multipart message."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
