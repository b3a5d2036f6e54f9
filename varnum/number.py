"""
A varnum Number is an integer whose width in bytes is decided at run time.

Features:
 - signed (two's complement) or unsigned interpretation of the same bytes
 - overflow grows the byte buffer, it never wraps
 - base 2, 10 and 16 text conversion
"""

import binascii
import decimal
import logging
import math
import numbers
import operator
import struct


logger = logging.getLogger(__name__)


class Number(numbers.Integral):
    """
    An integer stored as a little-endian string of 8-bit bytes, signed or unsigned.

    The raw value is a bytes object, least significant byte first.
    The signed flag picks how those bytes are read:
        Number(b'\xFF', signed=False) is 255
        Number(b'\xFF', signed=True)  is -1
    Same bits, different numbers.

    Widths
    ------
    A Number built from raw bytes keeps exactly those bytes, redundant or not:

        assert 4 == Number(b'\x01\x00\x00\x00', signed=True).byte_size

    A Number built from a native type gets that type's width:

        assert 2 == Number.from_int16(0).byte_size
        assert 8 == Number.from_uint64(1).byte_size

    A Number that is the result of arithmetic is at least as wide as its
    widest operand.  It is widened only when the true result would not fit.
    So overflow never wraps around, and never truncates:

        assert 3 == (Number.from_uint16(0xFFFF) + Number.from_uint16(0xFFFF)).byte_size

    Signedness of results
    ---------------------
    A result is signed if either operand is signed, or if it is negative.
    So subtracting a bigger unsigned Number from a smaller one gives a signed Number.

    Equality and order
    ------------------
    Comparisons go by numeric value, whatever the widths and flags:

        assert Number(b'\x01', signed=False) == Number(b'\x01\x00\x00', signed=True)

    The same bit pattern can be two different numbers though:

        assert Number(b'\xFF', signed=True) != Number(b'\xFF', signed=False)
        assert Number(b'\xFF', signed=True) <  Number(b'\xFF', signed=False)
    """

    __slots__ = ('_raw', '_signed')

    DIGITS = '0123456789ABCDEF'
    DIGITS_PER_BYTE = {
        2:  8,
        10: 0,   # not bit based
        16: 2,
    }
    # TODO:  Radix 4 and 8.  Radix 8 digits straddle bytes, so to_string() would need a bit stream.
    BYTE_FORMAT = {
        2:  '08b',
        16: '02X',
    }

    # struct format and signedness for each native integer kind, little-endian.
    NATIVE_FORMATS = {
        'int8':   ('b', True),
        'uint8':  ('B', False),
        'int16':  ('h', True),
        'uint16': ('H', False),
        'int32':  ('i', True),
        'uint32': ('I', False),
        'int64':  ('q', True),
        'uint64': ('Q', False),
    }
    # Floating point kinds store the floor of the value in the integer kind of the same width.
    FLOAT_FORMATS = {
        'float32': ('f', 'int32'),
        'float64': ('d', 'int64'),
    }
    # Kinds tried in order for a bare int, like the type of an integer literal in C#.
    INT_LITERAL_KINDS = ('int32', 'uint32', 'int64', 'uint64')

    DECIMAL_BYTES = 16
    DECIMAL_MAX = 2**96 - 1   # 79228162514264337593543950335, a 96-bit mantissa

    def __init__(self, content=None, signed=None):
        """
        Number constructor.

        content - the type can be:
            None              zero, no bytes at all, always unsigned
            bytes             b'\x01\x00'  (least significant byte first, kept verbatim)
            bytearray, list or tuple of ints 0-255
            int               42           (width of the smallest fitting int32, uint32, int64, uint64)
            float             42.0         see from_float64()
            decimal.Decimal   Decimal(42)  see from_decimal()
            another Number    Number(42)
        signed - only for raw bytes content, defaults to False
        """
        if content is None:
            raw, is_signed = b'', False
        elif isinstance(content, (bytes, bytearray, list, tuple)):
            raw, is_signed = self._raw_from_sequence(content), bool(signed)
        elif signed is not None:
            raise self.ConstructorTypeError("signed= applies to raw bytes, not to a {}".format(
                type_name(content)
            ))
        elif isinstance(content, Number):
            raw, is_signed = content.raw, content.signed
        elif isinstance(content, bool):
            raise self.ConstructorTypeError("Number(bool) is not supported, use Number(int(x))")
        elif isinstance(content, int):
            raw, is_signed = self._raw_from_int(content)
        elif isinstance(content, float):
            raw, is_signed = self._raw_from_native(content, 'float64')
        elif isinstance(content, decimal.Decimal):
            raw, is_signed = self._raw_from_decimal(content)
        else:
            raise self.ConstructorTypeError("{outer}({inner}) is not supported".format(
                outer=type_name(self),
                inner=type_name(content),
            ))
        self._raw = raw
        self._signed = is_signed

    class ConstructorTypeError(TypeError):
        """e.g. Number(object) or Number(42, signed=True)"""

    class ConstructorValueError(ValueError):
        """e.g. Number([256]) or Number.from_native(1, 'int128')"""

    class ConstructorOverflowError(OverflowError):
        """e.g. Number.from_int8(128) or Number(float('nan'))"""

    class ConversionOverflowError(OverflowError):
        """e.g. Number(256).to_uint8()"""

    class DivideByZeroError(ZeroDivisionError):
        """e.g. Number(1) // 0"""

    class RadixError(ValueError):
        """e.g. Number(1).to_string(8)"""

    class LengthError(ValueError):
        """e.g. Number(1).to_string(16, -1) or Number(1).resize(-1)"""

    class ParseError(ValueError):
        """e.g. Number.parse('12AB', 10)"""

    class ShiftCountError(ValueError):
        """e.g. Number(1) << -1"""

    class ExponentError(ValueError):
        """e.g. Number.power(2, -1)"""

    # Raw internal format
    # -------------------
    @property
    def raw(self):
        """
        Get the internal byte-string, least significant byte first.

            assert b'\x2A\x00\x00\x00' == Number(42).raw
        """
        return self._raw

    def get_bytes(self):
        """The raw bytes.  They're immutable, so the caller may keep them."""
        return self._raw

    @property
    def signed(self):
        """Are the bytes read as two's complement?"""
        return self._signed

    @property
    def byte_size(self):
        return len(self._raw)

    @property
    def is_zero(self):
        """All bytes zero, or no bytes at all."""
        return not self._raw.strip(b'\x00')

    @property
    def sign(self):
        """True for non-negative.  Always True when unsigned or empty."""
        if not self._signed or not self._raw:
            return True
        return (self._raw[-1] & 0x80) == 0

    def __len__(self):
        return len(self._raw)

    def __getitem__(self, index):
        """Read one raw byte, e.g. Number(258)[1] == 1"""
        return self._raw[index]

    def __reduce__(self):
        """For the 'pickle' and 'copy' packages."""
        return type(self), (self._raw, self._signed)

    def __repr__(self):
        """Handle repr(Number(x)), e.g. Number(b'\\x01\\x00', signed=True)"""
        return "{class_name}({raw!r}, signed={signed!r})".format(
            class_name=type_name(self),
            raw=self._raw,
            signed=self._signed,
        )

    def __str__(self):
        """Handle str(Number(x)), the signed decimal rendering."""
        return self.to_string(10)

    def hex(self):
        """
        The raw bytes in hexadecimal, most significant first.  Every byte, redundant or not.

        assert '0000002A' == Number(42).hex()
        """
        return hex_from_bytes(self._raw[::-1])

    # "from" conversions:  Number <-- other type
    # ------------------------------------------
    @classmethod
    def _raw_from_sequence(cls, content):
        try:
            return bytes(content)
        except (TypeError, ValueError) as e:
            raise cls.ConstructorValueError("Raw content must be bytes 0-255, not {content}:  {error}".format(
                content=repr(content),
                error=str(e),
            ))

    @classmethod
    def _raw_from_int(cls, i):
        """Pick the width the way a C# integer literal picks its type."""
        for kind in cls.INT_LITERAL_KINDS:
            struct_format, is_signed = cls.NATIVE_FORMATS[kind]
            try:
                return struct.pack('<' + struct_format, i), is_signed
            except struct.error:
                pass
        return pack_little(i, byte_width(i, True), True), True

    @classmethod
    def _raw_from_native(cls, value, kind):
        if isinstance(kind, str) and kind in cls.FLOAT_FORMATS:
            return cls._raw_from_float(value, kind)
        try:
            struct_format, is_signed = cls.NATIVE_FORMATS[kind]
        except (KeyError, TypeError):
            raise cls.ConstructorValueError("Unknown native kind {}".format(repr(kind)))
        if isinstance(value, bool) or not isinstance(value, int):
            raise cls.ConstructorTypeError("A {kind} must come from an int, not a {type}".format(
                kind=kind,
                type=type_name(value),
            ))
        try:
            return struct.pack('<' + struct_format, value), is_signed
        except struct.error:
            raise cls.ConstructorOverflowError("{value} is out of range for {kind}".format(
                value=decimal_string(value),
                kind=kind,
            ))

    @classmethod
    def _raw_from_float(cls, value, kind):
        """
        Store the floor of a floating point number, at the float's own width.

        The value is first narrowed to the float kind's precision,
        so from_float32(16777217.0) stores 16777216, as a C# float would.
        """
        float_format, int_kind = cls.FLOAT_FORMATS[kind]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise cls.ConstructorTypeError("A {kind} must come from a float, not a {type}".format(
                kind=kind,
                type=type_name(value),
            ))
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            raise cls.ConstructorOverflowError("{} has no integer value".format(value))
        try:
            narrowed = struct.unpack('<' + float_format, struct.pack('<' + float_format, value))[0]
        except OverflowError:
            raise cls.ConstructorOverflowError("{value} is out of range for {kind}".format(
                value=value,
                kind=kind,
            ))
        return cls._raw_from_native(math.floor(narrowed), int_kind)

    @classmethod
    def _raw_from_decimal(cls, value):
        """
        Store a decimal in 16 bytes, truncated toward zero, two's complement.

        The range is that of a .NET decimal, a 96-bit mantissa.
        """
        if not isinstance(value, decimal.Decimal):
            try:
                value = decimal.Decimal(value)
            except (TypeError, ValueError, decimal.InvalidOperation):
                raise cls.ConstructorTypeError("Cannot make a decimal from a {}".format(type_name(value)))
        if not value.is_finite():
            raise cls.ConstructorOverflowError("{} has no integer value".format(value))
        whole = int(value)
        if abs(whole) > cls.DECIMAL_MAX:
            raise cls.ConstructorOverflowError("{} is out of range for a decimal".format(value))
        return pack_little(whole, cls.DECIMAL_BYTES, True), True

    @classmethod
    def from_native(cls, value, kind):
        """
        Construct a Number from a value of a native type, at that type's width.

        kind - 'int8', 'uint8', 'int16', 'uint16', 'int32', 'uint32', 'int64', 'uint64',
               'float32', 'float64'

        assert b'\xFE\xFF' == Number.from_native(-2, 'int16').raw
        """
        raw, is_signed = cls._raw_from_native(value, kind)
        return cls(raw, is_signed)

    @classmethod
    def from_int8(cls, value):   return cls.from_native(value, 'int8')
    @classmethod
    def from_uint8(cls, value):  return cls.from_native(value, 'uint8')
    @classmethod
    def from_int16(cls, value):  return cls.from_native(value, 'int16')
    @classmethod
    def from_uint16(cls, value): return cls.from_native(value, 'uint16')
    @classmethod
    def from_int32(cls, value):  return cls.from_native(value, 'int32')
    @classmethod
    def from_uint32(cls, value): return cls.from_native(value, 'uint32')
    @classmethod
    def from_int64(cls, value):  return cls.from_native(value, 'int64')
    @classmethod
    def from_uint64(cls, value): return cls.from_native(value, 'uint64')

    @classmethod
    def from_float32(cls, value):
        """4 bytes, signed.  Holds the floor of the single-precision value."""
        return cls.from_native(value, 'float32')

    @classmethod
    def from_float64(cls, value):
        """8 bytes, signed.  Holds the floor of the value."""
        return cls.from_native(value, 'float64')

    @classmethod
    def from_decimal(cls, value):
        """
        16 bytes, signed.

        assert b'\x01' + b'\x00' * 15 == Number.from_decimal(decimal.Decimal(1)).raw
        assert b'\xFF' * 16 == Number.from_decimal(decimal.Decimal(-1)).raw
        """
        raw, is_signed = cls._raw_from_decimal(value)
        return cls(raw, is_signed)

    # "to" conversions:  Number --> other type
    # ----------------------------------------
    def __int__(self):
        """Convert to an integer."""
        return unpack_little(self._raw, self._signed)

    def __bool__(self):
        return not self.is_zero

    def __trunc__(self):
        return int(self)

    def __floor__(self):
        return int(self)

    def __ceil__(self):
        return int(self)

    def __round__(self, ndigits=None):
        """Already whole, so round(n) is int(n) and round(n, digits) is n."""
        if ndigits is None:
            return int(self)
        return self

    def to_native(self, kind):
        """
        Convert to a native type, failing rather than wrapping or truncating.

        Raise ConversionOverflowError if the value does not fit.

        assert 255 == Number(255).to_native('uint8')
        """
        integer = int(self)
        try:
            if isinstance(kind, str) and kind in self.FLOAT_FORMATS:
                float_format, _ = self.FLOAT_FORMATS[kind]
                return struct.unpack('<' + float_format, struct.pack('<' + float_format, float(integer)))[0]
            struct_format, _ = self.NATIVE_FORMATS[kind]
        except (KeyError, TypeError):
            raise self.ConstructorValueError("Unknown native kind {}".format(repr(kind)))
        except OverflowError:
            raise self.ConversionOverflowError("{value} is out of range for {kind}".format(
                value=decimal_string(integer),
                kind=kind,
            ))
        try:
            struct.pack('<' + struct_format, integer)
        except struct.error:
            raise self.ConversionOverflowError("{value} is out of range for {kind}".format(
                value=decimal_string(integer),
                kind=kind,
            ))
        return integer

    def try_to_native(self, kind):
        """Like to_native() but return a tuple (success, value).  On failure the value is None."""
        try:
            return True, self.to_native(kind)
        except self.ConversionOverflowError:
            return False, None

    def to_int8(self):   return self.to_native('int8')
    def to_uint8(self):  return self.to_native('uint8')
    def to_int16(self):  return self.to_native('int16')
    def to_uint16(self): return self.to_native('uint16')
    def to_int32(self):  return self.to_native('int32')
    def to_uint32(self): return self.to_native('uint32')
    def to_int64(self):  return self.to_native('int64')
    def to_uint64(self): return self.to_native('uint64')
    def to_float32(self): return self.to_native('float32')
    def to_float64(self): return self.to_native('float64')

    def to_decimal(self):
        """To a decimal.Decimal, within the range of a .NET decimal."""
        integer = int(self)
        if abs(integer) > self.DECIMAL_MAX:
            raise self.ConversionOverflowError("{} is out of range for a decimal".format(decimal_string(integer)))
        return decimal.Decimal(integer)

    # Width and signedness
    # --------------------
    def resize(self, size, extend_sign=True):
        """
        Truncate or extend to exactly size bytes.

        Extension copies the sign bit when signed (unless extend_sign is False), otherwise pads zeros.
        Truncation discards high bytes, so this is the one place a value can change.
        Resizing to 0 gives the unsigned zero.
        """
        if size < 0:
            raise self.LengthError("Size cannot be negative:  {}".format(size))
        if size == 0:
            return type(self)()
        if size <= len(self._raw):
            return type(self)(self._raw[:size], self._signed)
        pad = b'\x00' if self.sign or not extend_sign else b'\xFF'
        return type(self)(self._raw + pad * (size - len(self._raw)), self._signed)

    def to_signed(self, extend=True):
        """
        Signed version of the same value.

        extend - add a zero byte when the top bit is already in use, so the value stays the same.
                 Without it, unsigned 0xFF becomes signed -1.
        An empty Number has no bytes to sign, and stays the unsigned zero.
        """
        if self._signed or not self._raw:
            return self
        raw = self._raw
        if extend and raw and raw[-1] & 0x80:
            raw += b'\x00'
        return type(self)(raw, True)

    def to_unsigned(self, positive_only=False):
        """
        Unsigned version of the same bytes.

        positive_only - a negative value becomes zero, rather than a big positive number.
        """
        if not self._signed:
            return self
        if positive_only and not self.sign:
            return type(self)()
        return type(self)(self._raw, False)

    # Comparison
    # ----------
    @classmethod
    def _operand(cls, x):
        """Get x ready as an operand.  Numbers and ints are welcome."""
        if isinstance(x, Number):
            return x
        if isinstance(x, int) and not isinstance(x, bool):
            return cls(x)
        raise cls.ConstructorTypeError("A {} cannot be an operand of a Number".format(type_name(x)))

    def compare_to(self, other):
        """
        -1, 0, or 1 as this Number is less than, equal to, or greater than the other.

        Numeric order, regardless of width or signedness.
        """
        mine = int(self)
        theirs = int(self._operand(other))
        return (mine > theirs) - (mine < theirs)

    def _compared(self, other, op):
        try:
            other_number = self._operand(other)
        except self.ConstructorTypeError:
            # NOTE:  So Number(1) == 'one' is False instead of an exception.
            return NotImplemented
        return op(self.compare_to(other_number), 0)

    def __eq__(self, other): return self._compared(other, operator.eq)
    def __ne__(self, other): return self._compared(other, operator.ne)
    def __lt__(self, other): return self._compared(other, operator.lt)
    def __le__(self, other): return self._compared(other, operator.le)
    def __gt__(self, other): return self._compared(other, operator.gt)
    def __ge__(self, other): return self._compared(other, operator.ge)

    def __hash__(self):
        """Equal values hash alike, including equal ints."""
        return hash(int(self))

    # Math
    # ----
    @classmethod
    def _from_value(cls, value, signed, min_width):
        """
        Build a result from its integer value.

        The result is at least min_width bytes, wider only if the value would not fit.
        It is signed if asked, or if the value is negative.
        A result with no bytes is the unsigned zero.
        """
        signed = signed or value < 0
        width = max(min_width, byte_width(value, signed))
        if width > min_width:
            logger.debug("Widened result from %d to %d bytes", min_width, width)
        if width == 0:
            return cls()
        return cls(pack_little(value, width, signed), signed)

    @classmethod
    def _binary_op(cls, op, input_left, input_right):
        """Two-input operator.  NotImplemented lets Python try the other operand."""
        try:
            left = cls._operand(input_left)
            right = cls._operand(input_right)
        except cls.ConstructorTypeError:
            return NotImplemented
        return op(left, right)

    @classmethod
    def add(cls, left, right):
        """
        Add two Numbers.  The result grows by one byte at most.

        assert 0x1FFFE == Number.add(Number.from_uint16(0xFFFF), Number.from_uint16(0xFFFF))
        """
        left, right = cls._operand(left), cls._operand(right)
        return cls._from_value(
            int(left) + int(right),
            left.signed or right.signed,
            max(left.byte_size, right.byte_size),
        )

    @classmethod
    def subtract(cls, left, right):
        """Subtract.  An unsigned result that goes negative becomes signed, and one byte wider if need be."""
        left, right = cls._operand(left), cls._operand(right)
        return cls._from_value(
            int(left) - int(right),
            left.signed or right.signed,
            max(left.byte_size, right.byte_size),
        )

    @classmethod
    def multiply(cls, left, right):
        """Full product.  Grows as many bytes as it takes."""
        left, right = cls._operand(left), cls._operand(right)
        return cls._from_value(
            int(left) * int(right),
            left.signed or right.signed,
            max(left.byte_size, right.byte_size),
        )

    @classmethod
    def divide(cls, dividend, divisor):
        """
        Integer division, truncated toward zero.  Return a tuple (quotient, remainder).

        The remainder has the sign of the dividend, so quotient * divisor + remainder == dividend.

            quotient, remainder = Number.divide(26, 5)
            assert (5, 1) == (quotient, remainder)
            quotient, remainder = Number.divide(-26, 5)
            assert (-5, -1) == (quotient, remainder)

        Raise DivideByZeroError if the divisor is zero.
        """
        dividend, divisor = cls._operand(dividend), cls._operand(divisor)
        if divisor.is_zero:
            logger.debug("Dividing %s by zero", dividend)
            raise cls.DivideByZeroError("Cannot divide {} by zero".format(dividend))
        n = int(dividend)
        d = int(divisor)
        quotient = abs(n) // abs(d)
        if (n < 0) != (d < 0):
            quotient = -quotient
        remainder = n - quotient * d
        signed = dividend.signed or divisor.signed
        width = max(dividend.byte_size, divisor.byte_size)
        return cls._from_value(quotient, signed, width), cls._from_value(remainder, signed, width)

    @classmethod
    def negate(cls, value):
        """
        Two's complement:  invert all the bits and add one.

        The result is signed.  An unsigned value with its top bit set gains a byte first,
        e.g. -Number.from_uint16(0xFFFF) is the 3 bytes 01 00 FF.
        Zero negates to itself.
        """
        value = cls._operand(value)
        if value.is_zero:
            return value
        return cls.add(cls.ones_complement(value.to_signed(extend=True)), cls.ONE)

    @classmethod
    def absolute(cls, value):
        value = cls._operand(value)
        return value if value.sign else cls.negate(value)

    @classmethod
    def increment(cls, value):
        return cls.add(value, cls.ONE)

    @classmethod
    def decrement(cls, value):
        return cls.subtract(value, cls.ONE)

    ZERO_POWER_DEFAULT = None   # what power(x, 0) returns, see power()

    @classmethod
    def power(cls, base, exponent, zero_power=None):
        """
        Raise base to a non-negative integer exponent, by square-and-multiply.

        assert 81 == Number.power(3, 4)

        An exponent of zero returns zero_power, or Number.ZERO_POWER_DEFAULT if that is None.
        ZERO_POWER_DEFAULT is Number.ZERO, not Number.ONE.  That is a long-standing quirk
        callers rely on.  Pass zero_power=Number.ONE for the arithmetic answer.

        Raise ExponentError on a negative exponent.
        """
        base = cls._operand(base)
        if isinstance(exponent, Number):
            exponent = int(exponent)
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise cls.ExponentError("Exponent must be an integer, not a {}".format(type_name(exponent)))
        if exponent < 0:
            raise cls.ExponentError("Exponent cannot be negative:  {}".format(exponent))
        if exponent == 0:
            return cls._operand(cls.ZERO_POWER_DEFAULT if zero_power is None else zero_power)

        result = None
        square = base
        while True:
            if exponent & 1:
                result = square if result is None else cls.multiply(result, square)
            exponent >>= 1
            if exponent == 0:
                return result
            square = cls.multiply(square, square)

    @classmethod
    def _shift_count(cls, count):
        if isinstance(count, Number):
            count = int(count)
        if isinstance(count, bool) or not isinstance(count, int):
            raise cls.ShiftCountError("Shift count must be an integer, not a {}".format(type_name(count)))
        if count < 0:
            raise cls.ShiftCountError("Shift count cannot be negative:  {}".format(count))
        return count

    @classmethod
    def shift_left(cls, value, count):
        """
        Multiply by 2**count.  Widens as far as it takes, so no set bit is ever lost.

        assert 0x1FFFFFFFE == Number.shift_left(Number.from_uint32(0xFFFFFFFF), 1)
        """
        value = cls._operand(value)
        count = cls._shift_count(count)
        if count == 0:
            return value
        return cls._from_value(int(value) << count, value.signed, value.byte_size)

    @classmethod
    def shift_right(cls, value, count):
        """
        Logical shift of the raw bits.  Zeros come in at the top, even for a negative value.

        Whole bytes shifted out are dropped.  Shift out every bit and the result is zero.
        A signed result whose top bit would read as a sign gets a zero byte on top,
        so the result is never negative.

        assert 0x7FFFFFFF == Number.shift_right(Number.from_uint32(0xFFFFFFFF), 1)
        """
        value = cls._operand(value)
        count = cls._shift_count(count)
        if count == 0:
            return value
        bit_pattern = unpack_little(value.raw, False)
        width = max(value.byte_size - (count >> 3), 0)
        return cls._from_value(bit_pattern >> count, value.signed, width)

    @classmethod
    def _bitwise(cls, op, left, right):
        """Apply a bitwise operator to the sign-extended values."""
        left, right = cls._operand(left), cls._operand(right)
        return cls._from_value(
            op(int(left), int(right)),
            left.signed or right.signed,
            max(left.byte_size, right.byte_size),
        )

    @classmethod
    def bitwise_and(cls, left, right): return cls._bitwise(operator.and_, left, right)
    @classmethod
    def bitwise_or(cls, left, right):  return cls._bitwise(operator.or_, left, right)
    @classmethod
    def xor(cls, left, right):         return cls._bitwise(operator.xor, left, right)

    _INVERTED_BYTES = bytes(range(0xFF, -1, -1))

    @classmethod
    def ones_complement(cls, value):
        """
        Flip every stored bit.  Same width, same signedness.

        No bytes at all flip to a single FF byte.
        """
        value = cls._operand(value)
        raw = value.raw or b'\x00'
        return cls(raw.translate(cls._INVERTED_BYTES), value.signed)

    def __pos__(self): return self
    def __neg__(self): return self.negate(self)
    def __abs__(self): return self.absolute(self)
    def __invert__(self): return self.ones_complement(self)

    def __add__(self, other): return self._binary_op(self.add, self, other)
    def __radd__(self, other): return self._binary_op(self.add, other, self)
    def __sub__(self, other): return self._binary_op(self.subtract, self, other)
    def __rsub__(self, other): return self._binary_op(self.subtract, other, self)
    def __mul__(self, other): return self._binary_op(self.multiply, self, other)
    def __rmul__(self, other): return self._binary_op(self.multiply, other, self)
    def __and__(self, other): return self._binary_op(self.bitwise_and, self, other)
    def __rand__(self, other): return self._binary_op(self.bitwise_and, other, self)
    def __or__(self, other): return self._binary_op(self.bitwise_or, self, other)
    def __ror__(self, other): return self._binary_op(self.bitwise_or, other, self)
    def __xor__(self, other): return self._binary_op(self.xor, self, other)
    def __rxor__(self, other): return self._binary_op(self.xor, other, self)

    # NOTE:  Division truncates toward zero, unlike int, whose // floors.
    #        Number(-7) // 2 == -3 but -7 // 2 == -4.  And / is the same integer division, not a float.
    def __truediv__(self, other): return self._binary_op(self._quotient, self, other)
    def __rtruediv__(self, other): return self._binary_op(self._quotient, other, self)
    def __floordiv__(self, other): return self._binary_op(self._quotient, self, other)
    def __rfloordiv__(self, other): return self._binary_op(self._quotient, other, self)
    def __mod__(self, other): return self._binary_op(self._remainder, self, other)
    def __rmod__(self, other): return self._binary_op(self._remainder, other, self)
    def __divmod__(self, other): return self._binary_op(self.divide, self, other)
    def __rdivmod__(self, other): return self._binary_op(self.divide, other, self)

    @classmethod
    def _quotient(cls, dividend, divisor):
        return cls.divide(dividend, divisor)[0]

    @classmethod
    def _remainder(cls, dividend, divisor):
        return cls.divide(dividend, divisor)[1]

    def __lshift__(self, count):
        try:
            return self.shift_left(self, count)
        except self.ShiftCountError:
            if isinstance(count, (int, Number)):
                raise
            return NotImplemented

    def __rshift__(self, count):
        try:
            return self.shift_right(self, count)
        except self.ShiftCountError:
            if isinstance(count, (int, Number)):
                raise
            return NotImplemented

    def __rlshift__(self, other): return self._binary_op(self.shift_left, other, self)
    def __rrshift__(self, other): return self._binary_op(self.shift_right, other, self)

    def __pow__(self, exponent, modulus=None):
        if isinstance(exponent, bool) or not isinstance(exponent, (int, Number)):
            return NotImplemented
        result = self.power(self, exponent)
        if modulus is None:
            return result
        return result % modulus

    def __rpow__(self, base):
        return self._binary_op(self.power, base, self)

    # Text
    # ----
    @classmethod
    def _digits_per_byte(cls, radix):
        """Digits per byte for a bit based radix, 0 for decimal.  Raise RadixError for anything else."""
        if isinstance(radix, int) and not isinstance(radix, bool) and radix in cls.DIGITS_PER_BYTE:
            return cls.DIGITS_PER_BYTE[radix]
        raise cls.RadixError("Radix must be one of {supported}, not {radix}".format(
            supported=', '.join(str(r) for r in sorted(cls.DIGITS_PER_BYTE)),
            radix=repr(radix),
        ))

    def to_string(self, radix=10, min_length=0):
        """
        Render in base 2, 10 or 16, uppercase, at least min_length digits.

        Base 10 is the plain value, with a minus sign when negative.
            assert '-1' == Number.from_int8(-1).to_string(10)
            assert '-001' == Number.from_int8(-1).to_string(10, 3)

        Base 2 and 16 render whole bytes of the two's complement bit pattern.
        High zero bytes are dropped from a non-negative value, but a signed
        value keeps a zero byte if its top bit would otherwise look like a sign.
        A negative value renders every byte it has.
            assert   'FF' == Number.from_uint32(255).to_string(16)
            assert '00FF' == Number.from_int32(255).to_string(16)
            assert   'FF' == Number.from_int8(-1).to_string(16)
            assert 'FFFFFFFFFFFFFFFF' == Number.from_int64(-1).to_string(16)

        min_length is rounded up to whole bytes, then the text is padded
        with 0 digits, or with 1 or F digits to sign-extend a negative value.
            assert '0000FF' == Number(255).to_string(16, 5)
            assert 'FFFFFF' == Number.from_int8(-1).to_string(16, 5)
        """
        digits_per_byte = self._digits_per_byte(radix)
        if min_length < 0:
            raise self.LengthError("Minimum length cannot be negative:  {}".format(min_length))

        if not digits_per_byte:
            integer = int(self)
            digits = decimal_string(abs(integer)).rjust(min_length, '0')
            return '-' + digits if integer < 0 else digits

        negative = not self.sign
        if negative:
            significant = self._raw
        else:
            significant = self._raw.rstrip(b'\x00') or b'\x00'
            if self._signed and significant[-1] & 0x80:
                significant += b'\x00'
        byte_format = self.BYTE_FORMAT[radix]
        text = ''.join(format(b, byte_format) for b in reversed(significant))
        whole_bytes = -(-min_length // digits_per_byte)
        pad_digit = self.DIGITS[radix - 1] if negative else self.DIGITS[0]
        return text.rjust(whole_bytes * digits_per_byte, pad_digit)

    @classmethod
    def parse(cls, text, radix, signed=True):
        """
        Construct a Number from a string of digits in base 2, 10 or 16.

        Base 10 takes an optional leading minus sign.  It is signed if negative or if signed is True.
        Any number of digits.
            assert -1 == Number.parse('-1', 10)

        Base 2 and 16 are a bit pattern, case-insensitive, filling as many whole bytes as the digits need.
        With signed=True, a set top bit of the top byte makes the value negative.
        Digits that don't fill the top byte leave its high bits clear.
            assert  -1 == Number.parse('FF', 16)
            assert 255 == Number.parse('FF', 16, signed=False)
            assert 255 == Number.parse('0FF', 16)
            assert  15 == Number.parse('F', 16)

        Raise RadixError for an unsupported radix, ParseError for anything that is not all digits.
        """
        digits_per_byte = cls._digits_per_byte(radix)
        if not isinstance(text, str) or not text:
            raise cls.ParseError("Expecting a string of digits, not {}".format(repr(text)))
        if not digits_per_byte:
            negative = text.startswith('-')
            digits = text[1:] if negative else text
            cls._check_digits(text, digits, radix)
            integer = int_from_decimal(digits)
            if negative:
                integer = -integer
            return cls._from_value(integer, signed or negative, 0)

        cls._check_digits(text, text, radix)
        num_bytes = -(-len(text) // digits_per_byte)
        num_bits = num_bytes * 8
        integer = int(text, radix)
        if signed and integer >> (num_bits - 1):
            integer -= 1 << num_bits
        return cls(pack_little(integer, num_bytes, signed), signed)

    @classmethod
    def _check_digits(cls, text, digits, radix):
        valid = cls.DIGITS[:radix]
        if not digits or any(c not in valid for c in digits.upper()):
            raise cls.ParseError("{text} is not a base {radix} number".format(
                text=repr(text),
                radix=radix,
            ))

    @classmethod
    def try_parse(cls, text, radix, signed=True):
        """
        Like parse() but return a tuple (success, number) instead of raising on bad text.

        On failure the number is Number.ZERO.

            ok, n = Number.try_parse('11111111', 2, signed=False)
            assert ok and n == 255
            ok, n = Number.try_parse("980&'=%", 16)
            assert not ok and n == 0

        An unsupported radix is the caller's mistake, not the text's, and still raises RadixError.
        """
        try:
            return True, cls.parse(text, radix, signed)
        except cls.ParseError as e:
            logger.debug("try_parse rejected %r:  %s", text, e)
            return False, cls.ZERO

    # Constants named for convenience
    # ---------
    ZERO = None        # no bytes, unsigned
    ONE = None         # 01, signed
    MINUS_ONE = None   # FF, signed

    @classmethod
    def internal_setup(cls):
        """Initialize Number constants after the Number class is defined."""
        cls.ZERO = cls()
        cls.ONE = cls(b'\x01', signed=True)
        cls.MINUS_ONE = cls(b'\xFF', signed=True)
        cls.ZERO_POWER_DEFAULT = cls.ZERO


Number.internal_setup()


# Packing and Unpacking Bytes
# ---------------------------
def pack_little(the_integer, num_bytes, signed):
    """
    Pack an integer into a byte-string, least significant byte first.

    :param the_integer:  an arbitrarily large integer
    :param num_bytes:  exact number of bytes to output, must be enough
    :param signed:  two's complement, or plain magnitude
    """
    return the_integer.to_bytes(num_bytes, 'little', signed=signed)
assert b'\xAA\x00' == pack_little(170, 2, False)
assert b'\x56\xFF' == pack_little(-170, 2, True)


def unpack_little(binary_string, signed):
    """Convert a little-endian byte string into an integer.  No bytes is zero."""
    return int.from_bytes(binary_string, 'little', signed=signed)
assert 170 == unpack_little(b'\xAA\x00', True)
assert -170 == unpack_little(b'\x56\xFF', True)
assert 0xFF56 == unpack_little(b'\x56\xFF', False)
assert 0 == unpack_little(b'', True)


def byte_width(the_integer, signed):
    """
    The fewest bytes that hold the integer.  Zero takes no bytes.

    Signed needs room for the sign bit, so 128 takes 2 bytes but -128 takes 1.
    """
    assert signed or the_integer >= 0
    if the_integer == 0:
        return 0
    if signed:
        num_bits = (the_integer if the_integer > 0 else ~the_integer).bit_length() + 1
    else:
        num_bits = the_integer.bit_length()
    return (num_bits + 7) >> 3
assert 1 == byte_width(255, False)
assert 2 == byte_width(255, True)
assert 1 == byte_width(-128, True)
assert 2 == byte_width(-129, True)


# Decimal
# -------
DECIMAL_CHUNK_DIGITS = 4000   # under the interpreter's 4300 digit limit on int <--> str
DECIMAL_CHUNK = 10 ** DECIMAL_CHUNK_DIGITS


def decimal_string(the_integer):
    """
    Decimal digits of an integer of any size, with a minus sign if negative.

    Past DECIMAL_CHUNK_DIGITS digits, str() is done a chunk at a time.
    """
    if the_integer < 0:
        return '-' + decimal_string(-the_integer)
    if the_integer < DECIMAL_CHUNK:
        return str(the_integer)
    chunks = []
    while the_integer >= DECIMAL_CHUNK:
        the_integer, chunk = divmod(the_integer, DECIMAL_CHUNK)
        chunks.append(str(chunk).zfill(DECIMAL_CHUNK_DIGITS))
    chunks.append(str(the_integer))
    return ''.join(reversed(chunks))
assert '-42' == decimal_string(-42)
assert '1' + '0' * 4000 == decimal_string(DECIMAL_CHUNK)


def int_from_decimal(digits):
    """Integer from a string of decimal digits, any number of them.  No sign."""
    integer = 0
    for start in range(0, len(digits), DECIMAL_CHUNK_DIGITS):
        chunk = digits[start:start + DECIMAL_CHUNK_DIGITS]
        integer = integer * 10 ** len(chunk) + int(chunk)
    return integer
assert 42 == int_from_decimal('042')
assert DECIMAL_CHUNK == int_from_decimal('1' + '0' * 4000)


# Hexadecimal
# -----------
def hex_from_bytes(string_of_8_bit_bytes):
    """Encode an 8-bit binary (base-256) string into a hexadecimal string."""
    return binascii.hexlify(string_of_8_bit_bytes).decode().upper()
assert 'BEEF' == hex_from_bytes(b'\xBE\xEF')


# Native integers
# ---------------
def int_to_string(value, radix, min_length=0, kind='int64'):
    """
    Render a native integer in base 2, 10 or 16, as a Number of that native kind would.

    assert '00FF' == int_to_string(255, 16)
    assert   'FF' == int_to_string(255, 16, kind='uint64')
    assert '0000FF' == int_to_string(255, 16, 5)
    """
    return Number.from_native(value, kind).to_string(radix, min_length)


# Inspection
# ----------
def type_name(x):
    """Describe (very briefly) what type of object this is."""
    return type(x).__name__
assert 'int' == type_name(3)
assert 'Number' == type_name(Number.ZERO)
