"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
    TransportClosed,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
