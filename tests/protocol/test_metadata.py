import pytest

from fdbc.protocol import metadata
from fdbc.protocol.errors import DecodeError, EncodeError


def test_empty():

    assert metadata.encode({}) == b'\x80'
    assert metadata.encode(None) == b'\x80'
    assert metadata.decode(b'\x80') == {}


def test_known_encoding():

    assert metadata.encode({'a': 'b'}) == b'\x81\xa1a\xa1b'
    assert metadata.decode(b'\x81\xa1a\xa1b') == {'a': 'b'}


def test_encode_and_decode():

    original = dict()
    original['title'] = 'An example page'
    original['lang'] = 'en'
    original['empty'] = ''
    original['unicode'] = 'naïve café 日本語'
    original['long'] = 'x' * 300

    encoded = metadata.encode(original)
    assert isinstance(encoded, bytes)
    assert metadata.decode(encoded) == original


def test_encode_rejects_non_strings():

    with pytest.raises(EncodeError):
        metadata.encode({'count': 5})

    with pytest.raises(EncodeError):
        metadata.encode({1: 'one'})

    with pytest.raises(EncodeError):
        metadata.encode({'nested': {'a': 'b'}})

    with pytest.raises(EncodeError):
        metadata.encode(['not', 'a', 'mapping'])


def test_decode_rejects_malformed():

    bad_inputs = list()
    bad_inputs.append(b'')                  # Nothing at all.
    bad_inputs.append(b'\x81\xa1a')         # Truncated map.
    bad_inputs.append(b'\x81\xa1a\x01')     # Integer value.
    bad_inputs.append(b'\x92\xa1a\xa1b')    # A list, not a map.
    bad_inputs.append(b'\x80\x80')          # Trailing data.
    bad_inputs.append(b'\xc1')              # Never-used type byte.

    for bad in bad_inputs:
        with pytest.raises(DecodeError):
            metadata.decode(bad)


def test_errors_are_value_errors():

    with pytest.raises(ValueError):
        metadata.decode(b'')

    with pytest.raises(ValueError):
        metadata.encode({'count': 5})


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
