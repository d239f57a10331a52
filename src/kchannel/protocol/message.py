""" A class representation of a protocol message. A message on the wire is
    a multipart sequence; the :class:`Envelope` is the structured, immutable
    view of one such sequence, and the :class:`Header` is the portion of it
    that identifies the message.
"""

import time as timemodule
import uuid
from typing import Any, Optional, Tuple

import msgspec


class Header(msgspec.Struct, frozen=True, kw_only=True):
    """ The identifying block of a message. The field order here is the
        field order in the encoded JSON.

        :ivar msg_id: Unique identifier, freshly generated per message.
        :ivar session: Identifier of the client session, supplied by the caller.
        :ivar username: Name of the user owning the session; may be empty.
        :ivar date: ISO-8601 timestamp for the message creation time.
        :ivar msg_type: Discriminator tag of the paired content.
        :ivar version: Messaging protocol version.
    """

    msg_id: str
    session: str
    username: str = ""
    date: Optional[str] = None
    msg_type: str
    version: str = ""


class Envelope(msgspec.Struct, frozen=True, kw_only=True):
    """ One complete protocol message. The *content* is a typed value from
        the request or reply set of the channel that produced the envelope.

        The *routing_ids*, *metadata* and *buffers* are never interpreted:
        they are carried from a request to the replies derived from it so
        that the transport can route the replies back to their origin.
    """

    header: Header
    content: Any
    parent_header: Optional[Header] = None
    routing_ids: Tuple[bytes, ...] = ()
    metadata: str = "{}"
    buffers: Tuple[bytes, ...] = ()

    @property
    def msg_type(self) -> str:
        return self.header.msg_type


def new_id() -> str:
    """ Return a new globally unique message identifier.
    """

    return str(uuid.uuid4())


def iso8601(epoch: Optional[float] = None) -> str:
    """ Format a UNIX epoch timestamp as an ISO-8601 UTC string with four
        digits of sub-second precision, for example
        '2024-01-01T00:00:00.1234Z'. The current time is used if *epoch*
        is None.
    """

    if epoch is None:
        epoch = timemodule.time()

    tm = timemodule.gmtime(epoch)
    seconds = epoch % 60.0

    # Rounding can carry the seconds up to 60.0; clamp it rather than
    # emit an invalid timestamp.

    if seconds >= 59.99995:
        seconds = 59.9999

    return '%04d-%02d-%02dT%02d:%02d:%07.4fZ' % (
        tm.tm_year, tm.tm_mon, tm.tm_mday, tm.tm_hour, tm.tm_min, seconds)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
