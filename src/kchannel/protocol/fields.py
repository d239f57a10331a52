"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Literal frame separating transport routing identities from the signed part
# of the message.
DELIMITER = b"<IDS|MSG>"

# Version of the messaging protocol stamped into headers we originate.
PROTOCOL_VERSION = "5.3"

# Number of frames following the delimiter before any buffers.
SIGNED_FIELDS = ("digest", "header", "parent_header", "metadata", "content")

DEFAULT_SIGNATURE_SCHEME = "hmac-sha256"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
