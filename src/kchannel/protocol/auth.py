""" Message authentication. A digest is a keyed HMAC computed over the four
    signable fields of a message, concatenated in wire order: the header,
    the parent header (empty if there is none), the metadata, and the content.
    The digest is transmitted as a lowercase hex string.

    Both functions are pure: there is no replay window and no per-session
    state, the same inputs always produce the same result.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

from .errors import AuthenticationError
from .fields import DEFAULT_SIGNATURE_SCHEME


Text = Union[bytes, str]


def _as_bytes(value: Optional[Text]) -> bytes:
    if value is None:
        return b""
    try:
        return value.encode()
    except AttributeError:
        # Assume it is already bytes.
        return bytes(value)


def hash_name(scheme: str = DEFAULT_SIGNATURE_SCHEME) -> str:
    """ Translate a signature scheme such as 'hmac-sha256' into the name of
        the :mod:`hashlib` algorithm backing it. A ValueError is raised for
        schemes that are not HMAC based, or name an unknown hash.
    """

    prefix, _, name = scheme.partition("-")

    if prefix != "hmac" or not name:
        raise ValueError("unsupported signature scheme: " + repr(scheme))

    try:
        digest_size = hashlib.new(name).digest_size
    except ValueError:
        raise ValueError("unknown hash for signature scheme: " + repr(scheme)) from None

    # The shake family reports no fixed digest size and cannot back an HMAC.

    if not digest_size:
        raise ValueError("variable-length hash in signature scheme: " + repr(scheme))

    return name


def sign(key: Optional[Text], header: Text, parent_header: Text, metadata: Text,
         content: Text, digestmod: str = "sha256") -> str:
    """ Return the hex digest for the supplied fields. If *key* is None or
        empty, signing is disabled and the empty string is returned.
    """

    if not key:
        return ""

    mac = hmac.new(_as_bytes(key), digestmod=digestmod)

    for field in (header, parent_header, metadata, content):
        mac.update(_as_bytes(field))

    return mac.hexdigest()


def verify(key: Optional[Text], digest: Text, header: Text, parent_header: Text,
           metadata: Text, content: Text, digestmod: str = "sha256") -> None:
    """ Check *digest* against the supplied fields, raising
        :class:`AuthenticationError` if it does not match. Without a *key*
        every digest is accepted.
    """

    if not key:
        return

    digest = _as_bytes(digest)
    if not digest:
        raise AuthenticationError("message is not signed")

    expected = sign(key, header, parent_header, metadata, content, digestmod)

    if not hmac.compare_digest(expected.encode(), digest):
        raise AuthenticationError("invalid message digest: " + repr(digest))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
