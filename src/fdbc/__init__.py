""" Python client for the fdb indexing server. This includes the codec for
    document operands, the key/value metadata they carry, and a minimal
    TCP client to submit documents and look up tokens.
"""

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import transport
home = config.directory

# Primary public-facing interfaces.

from .client import Client, connect
from .protocol import Document, encode, decode

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
