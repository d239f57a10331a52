"""Multipart framing for protocol messages.

    routing_id..., <IDS|MSG>, digest, header, parent_header, metadata,
    content, buffer...

Everything before the delimiter is routing information added by the
transport; the four JSON fields following the digest are the signed part of
the message; anything after the content is an opaque binary buffer.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

import msgspec

from .. import json
from . import auth
from .content import ContentCodec, compose, decompose
from .errors import DeserializationError, ProtocolError
from .fields import DELIMITER, SIGNED_FIELDS
from .message import Envelope, Header


Frame = Union[bytes, str]


def _as_bytes(frame: Frame) -> bytes:
    try:
        return frame.encode()
    except AttributeError:
        return bytes(frame)


def split(frames: Sequence[Frame]) -> Tuple[Tuple[bytes, ...], List[bytes]]:
    """ Separate the routing prefix from the payload tail. Raises
        :class:`ProtocolError` if the delimiter is absent.
    """

    frames = [_as_bytes(frame) for frame in frames]

    try:
        index = frames.index(DELIMITER)
    except ValueError:
        raise ProtocolError('missing delimiter') from None

    return tuple(frames[:index]), frames[index + 1:]


def _decode_header(field: bytes) -> Header:
    try:
        return json.decode(field, Header)
    except (json.DecodeError, ValueError) as e:
        raise DeserializationError('invalid header: ' + str(e)) from e


def _decode_parent(field: bytes) -> Optional[Header]:

    # An unset parent header is transmitted either as an empty frame or as
    # an empty JSON object, depending on the peer.

    if field.strip() in (b'', b'{}'):
        return None

    return _decode_header(field)


def _decode_content(field: bytes, msg_type: str, codec: ContentCodec):
    if field.strip() == b'':
        body = None
    else:
        try:
            body = json.loads(field)
        except json.DecodeError as e:
            raise DeserializationError('invalid content: ' + str(e)) from e

    return codec.decode(compose(msg_type, body))


def parse(frames: Sequence[Frame], codec: ContentCodec, key=None,
          digestmod: str = 'sha256') -> Envelope:
    """ Decode a received multipart message into an :class:`Envelope`. The
        digest is verified before anything is decoded; an
        :class:`~.errors.AuthenticationError` means the header and content
        were never looked at.
    """

    routing_ids, tail = split(frames)

    if len(tail) < len(SIGNED_FIELDS):
        raise ProtocolError('wrong arity')

    digest, header, parent_header, metadata, content = tail[:5]
    buffers = tuple(tail[5:])

    auth.verify(key, digest, header, parent_header, metadata, content, digestmod)

    header = _decode_header(header)
    parent_header = _decode_parent(parent_header)
    content = _decode_content(content, header.msg_type, codec)

    try:
        metadata = metadata.decode()
    except UnicodeDecodeError as e:
        raise DeserializationError('invalid metadata: ' + str(e)) from e

    return Envelope(
        routing_ids=routing_ids,
        header=header,
        parent_header=parent_header,
        metadata=metadata,
        content=content,
        buffers=buffers,
    )


def serialize(envelope: Envelope, codec: ContentCodec, key=None,
              digestmod: str = 'sha256') -> List[bytes]:
    """ Encode an :class:`Envelope` as a signed multipart message. The
        header's msg_type is always taken from the content, so the two can
        never disagree on the wire.
    """

    msg_type, body = decompose(codec.encode(envelope.content))

    header = envelope.header
    if header.msg_type != msg_type:
        header = msgspec.structs.replace(header, msg_type=msg_type)

    header = json.dumps(header)

    if envelope.parent_header is None:
        parent_header = b''
    else:
        parent_header = json.dumps(envelope.parent_header)

    metadata = _as_bytes(envelope.metadata)

    if body is None:
        content = b'{}'
    else:
        content = json.dumps(body)

    digest = auth.sign(key, header, parent_header, metadata, content, digestmod)

    parts = list(envelope.routing_ids)
    parts.append(DELIMITER)
    parts.append(digest.encode())
    parts.append(header)
    parts.append(parent_header)
    parts.append(metadata)
    parts.append(content)
    parts.extend(envelope.buffers)

    return parts


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
