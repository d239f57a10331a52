""" Python implementation of the kernel messaging channel. This includes the
    multipart wire framing, message authentication, typed content, and a
    channel that ties them to a transport.
"""

# Utility components.

from . import json

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import config

# Primary public-facing interfaces.

from .channel import Channel
from .protocol import (
    ContentCodec,
    Envelope,
    Header,
    MessageError,
    ProtocolError,
    AuthenticationError,
    DeserializationError,
)
from .transport import TransportError, TransportClosed

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
