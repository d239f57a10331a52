"""ZeroMQ transport."""

from .socket import ZmqTransport, KINDS, context


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
