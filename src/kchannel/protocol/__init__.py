"""
kchannel Protocol Layer
=======================

This package defines the kernel messaging protocol: the structure of a
message, how it is authenticated, how its content is typed, and how it maps
to and from multipart frames.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Channel (kchannel.channel)
    recv() / send() / next() / send_next()

    │
    ▼
Framing (wire.py)
    parse() and serialize(): Envelope <-> multipart frames

    │
    ├──► Authentication (auth.py)
    │        HMAC digest over header, parent header, metadata, content
    │
    └──► Content (content.py, shell.py)
             Tagged content codecs, one per message-kind set

    │
    ▼
Message Model (message.py)
    Immutable Header and Envelope structures

---------------------------------------------------------------------
"""

from . import errors
from . import fields
from . import auth
from . import message
from . import content
from . import wire
from . import shell

from .errors import (
    MessageError,
    ProtocolError,
    AuthenticationError,
    DeserializationError,
)
from .message import Envelope, Header
from .content import ContentCodec


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
