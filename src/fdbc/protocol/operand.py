""" Construction and parsing of operands: the byte sequence that carries one
    document submission to the server. The layout, in order:

        key                      8 bytes, see :mod:`fdbc.protocol.key`
        ETB
        STX url ETX
        STX metadata ETX         see :mod:`fdbc.protocol.metadata`
        ETB
        token ETX                repeated once per token
        ETB

    Fields are found by scanning for delimiters, there are no length
    prefixes. That only works if the delimiters never appear inside a
    field, so :func:`encode` refuses any field containing one of them
    rather than produce a frame that cannot be parsed.
"""

import re

from . import fields
from . import key
from . import metadata as metadata_codec
from .errors import (
    BadMetadata,
    DecodeError,
    DelimiterError,
    EncodeError,
    InvalidText,
    MissingDelimiter,
    Truncated,
    UnexpectedEOF,
)


_control = re.compile(b'[' + re.escape(bytes(sorted(fields.CONTROL))) + b']')

# A token runs until ETX or ETB. A terminating ETX belongs to the token and
# is consumed with it; an ETB is left for the caller to see as the end of
# the token block.

_token = re.compile(b'([^' + re.escape(bytes((fields.ETX, fields.ETB))) + b']*)' + re.escape(bytes((fields.ETX,))) + b'?')


class Document:
    """ The :class:`Document` is the unit of submission to the server: a
        *url*, an ordered sequence of *tokens* indexed for that url, and a
        dictionary of string *metadata*. A document is encoded once per
        write; it has no identity beyond its contents.

        :ivar url: The document URL, as a string.
        :ivar tokens: A list of token strings, order is preserved.
        :ivar metadata: A dictionary mapping strings to strings.
    """

    def __init__(self, url, tokens=(), metadata=None):

        if isinstance(tokens, (str, bytes)):
            raise TypeError('tokens must be a sequence of strings, not a single ' + type(tokens).__name__)

        if metadata is None:
            metadata = dict()

        self.url = url
        self.tokens = list(tokens)
        self.metadata = dict(metadata)


    def __eq__(self, other):

        if not isinstance(other, Document):
            return NotImplemented

        return (self.url, self.tokens, self.metadata) == (other.url, other.tokens, other.metadata)


    def __repr__(self):
        return 'Document(%r, %r, %r)' % (self.url, self.tokens, self.metadata)


    @property
    def key(self):
        """ The 8-byte key the server will file this document under.
        """

        return key.hash(self.url)


    def encapsulate(self):
        """ Return the operand bytes for this document. See :func:`encode`.
        """

        return encode(self.url, self.tokens, self.metadata)


    @classmethod
    def from_operand(cls, operand):
        """ Return a new :class:`Document` parsed from *operand* bytes. See
            :func:`decode`.
        """

        document = decode(operand)
        if cls is Document:
            return document

        return cls(document.url, document.tokens, document.metadata)


# end of class Document



def _utf8(value, field):

    try:
        return value.encode('utf-8')
    except AttributeError:
        pass
    except UnicodeEncodeError as error:
        raise EncodeError('%s is not encodable as UTF-8: %s' % (field, error)) from error

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    raise TypeError('%s must be str or bytes, not %s' % (field, type(value).__name__))


def _check(field, value):
    """ Raise a :class:`DelimiterError` if *value* contains any of the
        reserved control bytes; otherwise return *value* unmodified.
    """

    found = _control.search(value)
    if found is not None:
        raise DelimiterError(field, found.group()[0], found.start())

    return value


def encode(url, tokens, metadata):
    """ Return the operand for the document described by *url*, *tokens*,
        and *metadata*. The result is never empty; a document with an empty
        url, no tokens, and no metadata still produces a complete frame.

        :class:`EncodeError` is raised if the metadata cannot be encoded,
        and its subclass :class:`DelimiterError` if the url, the encoded
        metadata, or any token contains STX, ETX, or ETB.
    """

    if isinstance(tokens, (str, bytes)):
        raise TypeError('tokens must be a sequence of strings, not a single ' + type(tokens).__name__)

    url = _check('url', _utf8(url, 'url'))
    packed = _check('metadata', metadata_codec.encode(metadata))

    operand = bytearray()
    operand += key.hash(url)
    operand.append(fields.ETB)

    operand.append(fields.STX)
    operand += url
    operand.append(fields.ETX)

    operand.append(fields.STX)
    operand += packed
    operand.append(fields.ETX)
    operand.append(fields.ETB)

    for index, token in enumerate(tokens):
        field = 'token %d' % (index)
        operand += _check(field, _utf8(token, field))
        operand.append(fields.ETX)

    operand.append(fields.ETB)

    return bytes(operand)


def _expect(operand, position, delimiter, field):

    try:
        found = operand[position]
    except IndexError:
        raise MissingDelimiter(field, 'found end of input')

    if found != delimiter:
        raise MissingDelimiter(field, 'found 0x%02x at offset %d' % (found, position))

    return position + 1


def _field(operand, position, field):
    """ Return the bytes from *position* up to the next ETX, and the
        position immediately after that ETX.
    """

    end = operand.find(fields.ETX, position)
    if end == -1:
        raise UnexpectedEOF(field, 'no ETX after offset %d' % (position))

    return operand[position:end], end + 1


def _text(value, field):

    try:
        return value.decode('utf-8')
    except UnicodeDecodeError as error:
        raise InvalidText(field, str(error)) from error


def parse(operand):
    """ Parse *operand* bytes, returning a (key, :class:`Document`) tuple.
        The key is returned as found on the wire; it is not checked against
        the hash of the url.

        The first structural violation raises a :class:`FrameError`
        subclass identifying the field being read. The token block is
        allowed to end without its closing ETB, and anything after the
        closing ETB is ignored.
    """

    operand = bytes(operand)
    length = len(operand)

    if length < fields.KEY_SIZE:
        raise Truncated('key', 'need %d bytes, have %d' % (fields.KEY_SIZE, length))

    wire_key = operand[:fields.KEY_SIZE]
    position = fields.KEY_SIZE

    position = _expect(operand, position, fields.ETB, 'post-key ETB')

    position = _expect(operand, position, fields.STX, 'url STX')
    url, position = _field(operand, position, 'url')
    url = _text(url, 'url')

    position = _expect(operand, position, fields.STX, 'metadata STX')
    packed, position = _field(operand, position, 'metadata')

    try:
        metadata = metadata_codec.decode(packed)
    except DecodeError as error:
        raise BadMetadata('metadata', str(error)) from error

    position = _expect(operand, position, fields.ETB, 'metadata ETB')

    tokens = list()

    while position < length:
        if operand[position] == fields.ETB:
            break

        match = _token.match(operand, position)
        field = 'token %d' % (len(tokens))
        tokens.append(_text(match.group(1), field))
        position = match.end()

    document = Document(url, tokens, metadata)
    return wire_key, document


def decode(operand):
    """ Parse *operand* bytes and return the :class:`Document` it carries.
        See :func:`parse` for the error handling.
    """

    wire_key, document = parse(operand)
    return document


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
