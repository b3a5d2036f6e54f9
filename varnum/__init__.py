"""
varnum - integers of any width, kept as little-endian bytes.

Usage example:

    import varnum

    total = varnum.Number.from_uint16(0xFFFF) + varnum.Number.from_uint16(0xFFFF)
    assert total == 0x1FFFE
    assert total.byte_size == 3          # grew a byte, did not wrap
    assert total.to_string(16) == '01FFFE'

Usage example:

    from varnum import Number

    ok, n = Number.try_parse('FF', 16)   # signed by default, so n == -1
"""

from .number import Number
from .number import int_to_string

__all__ = [
    'Number',
    'int_to_string',
]

from . import version
__version__ = version.__doc__
