"""Protocol-level exceptions.

Transport failures live in :mod:`kchannel.transport.base`; everything raised
here describes a message that was received or built incorrectly.
"""


class MessageError(Exception):
    """Base class for all message-level errors."""


class ProtocolError(MessageError):
    """The multipart framing is malformed: no delimiter, too few fields."""


class AuthenticationError(MessageError):
    """The message digest is missing or does not match the signed fields."""


class DeserializationError(MessageError):
    """Well-formed frames whose JSON or content schema could not be decoded."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
