import os
import struct
import subprocess
import sys

import pytest

import fdbc
from fdbc.protocol import key


def test_size_and_byte_order():

    hashed = key.hash('https://example.com/')
    assert isinstance(hashed, bytes)
    assert len(hashed) == fdbc.protocol.fields.KEY_SIZE
    assert hashed == struct.pack('<Q', key.integer('https://example.com/'))


def test_known_value():

    # The xxHash64 of empty input with a zero seed is a published test
    # vector; the key is that value, least significant byte first.

    assert key.integer('') == 0xef46db3751d8e999
    assert key.hash('') == bytes.fromhex('99e9d85137db46ef')


def test_deterministic():

    url = 'https://example.com/some/page?query=1'
    first = key.hash(url)

    for attempt in range(10):
        assert key.hash(url) == first


def test_str_and_bytes_agree():

    url = 'https://例え.jp/パス'
    assert key.hash(url) == key.hash(url.encode('utf-8'))
    assert key.hash(url) == key.hash(bytearray(url.encode('utf-8')))


def test_different_urls():

    # Collisions are possible in principle, so this only checks that two
    # specific urls, known not to collide, produce different keys.

    assert key.hash('https://example.com/a') != key.hash('https://example.com/b')


def test_bad_type():

    with pytest.raises(TypeError):
        key.hash(12345)

    with pytest.raises(TypeError):
        key.hash(None)


def test_lone_surrogate():

    hashed = key.hash('\ud800')
    assert len(hashed) == 8
    assert hashed == key.hash(b'\xed\xa0\x80')
    assert fdbc.Document('\ud800').key == hashed


def test_unpack():

    hashed = key.hash('https://example.com/')
    assert key.unpack(hashed) == key.integer('https://example.com/')

    with pytest.raises(ValueError):
        key.unpack(b'1234')


def test_stable_across_processes():

    url = 'https://example.com/across'
    script = 'import fdbc.protocol.key as k; print(k.hash(%r).hex())' % (url)

    environment = dict(os.environ)
    environment['PYTHONHASHSEED'] = 'random'

    output = subprocess.check_output((sys.executable, '-c', script), env=environment)
    assert output.decode().strip() == key.hash(url).hex()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
