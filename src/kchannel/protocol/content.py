"""Typed message content.

Every content kind is a :class:`msgspec.Struct` subclass naming its
discriminator tag in a ``msg_type`` class variable::

    class KernelInfoRequest(msgspec.Struct):
        msg_type: ClassVar[str] = "kernel_info_request"

A :class:`ContentCodec` groups the kinds one side of a channel understands and
converts them to and from the tagged form: a JSON array holding the tag,
followed by the body object if the content carries any fields.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

import msgspec

from .errors import DeserializationError


def compose(msg_type: str, body: Any) -> List[Any]:
    """ Combine a tag and a decoded JSON body into the tagged form. A null or
        empty body collapses to the bare tag.
    """

    if body is None or body == {}:
        return [msg_type]
    return [msg_type, body]


def decompose(tagged: List[Any]) -> Tuple[str, Optional[Any]]:
    """ Split the tagged form into its tag and body. The body is None when
        the tagged form is a bare tag.
    """

    if not tagged or not isinstance(tagged[0], str):
        raise DeserializationError("content is not tagged: " + repr(tagged))

    if len(tagged) == 1:
        return tagged[0], None

    if len(tagged) == 2:
        return tagged[0], tagged[1]

    raise DeserializationError("content has extra elements: " + repr(tagged))


class ContentCodec:
    """ A set of content kinds, indexed by discriminator tag. Two codecs
        parameterize a channel: one for the requests it receives, one for
        the replies it sends.
    """

    def __init__(self, *kinds: Type[msgspec.Struct]):
        self.kinds: Dict[str, Type[msgspec.Struct]] = dict()

        for kind in kinds:
            self.register(kind)


    def __contains__(self, msg_type: str) -> bool:
        return msg_type in self.kinds


    def __iter__(self):
        return iter(self.kinds)


    def register(self, kind: Type[msgspec.Struct]) -> Type[msgspec.Struct]:
        """ Add *kind* to this codec. Returns *kind*, so this can be used as
            a class decorator.
        """

        try:
            msg_type = kind.msg_type
        except AttributeError:
            raise TypeError(repr(kind) + ' has no msg_type') from None

        existing = self.kinds.get(msg_type)
        if existing is not None and existing is not kind:
            raise ValueError('duplicate msg_type: ' + repr(msg_type))

        self.kinds[msg_type] = kind
        return kind


    def discriminator_of(self, value: msgspec.Struct) -> str:
        """ Return the tag for *value*, which must be one of the kinds
            registered with this codec.
        """

        msg_type = getattr(type(value), 'msg_type', None)

        if self.kinds.get(msg_type) is not type(value):
            raise TypeError('not a registered content kind: ' + repr(value))

        return msg_type


    def encode(self, value: msgspec.Struct) -> List[Any]:
        """ Return the tagged form of *value*: [tag] if it carries no fields,
            otherwise [tag, body].
        """

        msg_type = self.discriminator_of(value)
        body = msgspec.to_builtins(value)
        return compose(msg_type, body)


    def decode(self, tagged: Iterable[Any]) -> msgspec.Struct:
        """ Build the typed value described by the tagged form. Raises
            :class:`DeserializationError` for an unknown tag, or for a body
            that does not match the schema of its tag.
        """

        msg_type, body = decompose(list(tagged))

        try:
            kind = self.kinds[msg_type]
        except KeyError:
            raise DeserializationError('unknown msg_type: ' + repr(msg_type)) from None

        if body is None:
            body = dict()

        try:
            return msgspec.convert(body, kind)
        except msgspec.ValidationError as e:
            raise DeserializationError(msg_type + ': ' + str(e)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
