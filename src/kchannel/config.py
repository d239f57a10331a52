""" Connection configuration. A kernel is told where to listen, and which
    key to sign messages with, through a small JSON connection file::

        {
          "transport": "tcp",
          "ip": "127.0.0.1",
          "shell_port": 53794,
          "iopub_port": 53795,
          "stdin_port": 53796,
          "control_port": 53797,
          "hb_port": 53798,
          "key": "a0436f6c-1916-498b-8eb9-e81ab9368e84",
          "signature_scheme": "hmac-sha256",
          "kernel_name": ""
        }

    The location of the file can be supplied directly, or via the
    KCHANNEL_CONNECTION_FILE environment variable.
"""

import os

import msgspec

from . import json
from .protocol import auth
from .protocol.fields import DEFAULT_SIGNATURE_SCHEME


environment_variable = 'KCHANNEL_CONNECTION_FILE'

# Socket kind used by the kernel side of each named channel.

kinds = {
    'shell': 'ROUTER',
    'control': 'ROUTER',
    'stdin': 'ROUTER',
    'iopub': 'PUB',
    'hb': 'REP',
}


class ConnectionInfo(msgspec.Struct, frozen=True, kw_only=True):
    """ The decoded contents of a connection file. Unknown fields in the
        file are ignored.
    """

    transport: str = 'tcp'
    ip: str = '127.0.0.1'
    shell_port: int = 0
    iopub_port: int = 0
    stdin_port: int = 0
    control_port: int = 0
    hb_port: int = 0
    key: str = ''
    signature_scheme: str = DEFAULT_SIGNATURE_SCHEME
    kernel_name: str = ''


    def __post_init__(self):
        if self.transport not in ('tcp', 'ipc'):
            raise ValueError('unsupported transport: ' + repr(self.transport))

        # Fail here, rather than on the first signed message.
        auth.hash_name(self.signature_scheme)


    @property
    def digestmod(self):
        """ The :mod:`hashlib` name of the hash used for message digests.
        """

        return auth.hash_name(self.signature_scheme)


    def kind(self, name):
        """ Return the socket kind for the channel *name*, one of 'shell',
            'control', 'stdin', 'iopub', or 'hb'.
        """

        try:
            return kinds[name]
        except KeyError:
            raise KeyError('unknown channel name: ' + repr(name)) from None


    def port(self, name):
        self.kind(name)
        return getattr(self, name + '_port')


    def uri(self, name):
        """ Return the endpoint for the channel *name*. For the ipc transport
            the 'ip' field is a filesystem path prefix, and the port number
            is appended to it as a suffix.
        """

        port = self.port(name)

        if self.transport == 'ipc':
            return 'ipc://%s-%d' % (self.ip, port)

        return 'tcp://%s:%d' % (self.ip, port)



def load(filename=None):
    """ Read the connection file at *filename*, or at the location named by
        the KCHANNEL_CONNECTION_FILE environment variable if no filename is
        given, and return a :class:`ConnectionInfo` instance.
    """

    if filename is None:
        try:
            filename = os.environ[environment_variable]
        except KeyError:
            raise RuntimeError('no connection file specified, and ' + environment_variable + ' is not set') from None

    with open(filename, 'rb') as file:
        contents = file.read()

    try:
        return json.decode(contents, ConnectionInfo)
    except msgspec.DecodeError as e:
        raise ValueError('invalid connection file ' + repr(filename) + ': ' + str(e)) from e


def save(info, filename):
    """ Write *info* to *filename* as a connection file. The file is only
        readable by its owner, since it contains the signing key.
    """

    contents = json.dumps(info)

    descriptor = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(descriptor, 'wb') as file:
        file.write(contents)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
