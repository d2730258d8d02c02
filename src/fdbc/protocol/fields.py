"""Protocol constants.

Keep these in one place to avoid magic numbers in the framing code.
"""

# Structural delimiters, borrowed from the ASCII control range.

STX = 0x02      # start of a text field
ETX = 0x03      # end of a text field, also terminates each token
ETB = 0x17      # end of a structural block

CONTROL = frozenset((STX, ETX, ETB))

NAMES = {STX: 'STX', ETX: 'ETX', ETB: 'ETB'}

# Size in bytes of the hashed key leading every operand.

KEY_SIZE = 8

# Command byte preceding the token in a read request.

READ = 0x0A

# Legacy cap on the size of a single read response.

READ_SIZE = 100


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
