''' Wrapper module providing the equivalent of :func:`json.loads` and
    :func:`json.dumps`, backed by :mod:`msgspec`.
'''

import msgspec


# The msgspec 'encode' operation returns bytes. Everything that goes on the
# wire is bytes anyway, so 'dumps' does not bother converting to str.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError


def decode(data, type):
    """ Decode JSON *data* directly into an instance of *type*, which is
        typically a :class:`msgspec.Struct` subclass.
    """

    return msgspec.json.decode(data, type=type)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
