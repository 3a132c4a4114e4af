"""Encoding of commands into the multi-bulk wire format.

Commands can be built from a printf-like format string, where ``%s``
interpolates a string up to its first NUL byte, ``%b`` interpolates a
binary-safe value and the usual integer and floating point conversions
are accepted, or from a ready list of arguments.
"""

from __future__ import annotations

import math
import operator
from typing import Callable, Iterable, Iterator, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]

_PERCENT = ord("%")
_SPACE = ord(" ")
_FLAGS = b"#0-+ "
_INT_CONVERSIONS = b"diouxX"
_FLOAT_CONVERSIONS = b"eEfFgGaA"
_DIGITS = b"0123456789"
# Specifiers this long or longer are consumed but not rendered.
_SPEC_LIMIT = 14
_LENGTH_BITS = {b"": 32, b"hh": 8, b"h": 16, b"l": 64, b"ll": 64}
_HEX_FRACTION_DIGITS = 13


class FormatError(ValueError):
    """Raised when a command format string or its arguments are invalid."""


def count_digits(value: int) -> int:
    """Number of decimal digits of a non-negative integer."""
    value = operator.index(value)
    if value < 0:
        raise ValueError("count_digits needs a non-negative integer")
    return len(str(value))


def bulk_len(length: int) -> int:
    """Bytes taken on the wire by a bulk string of ``length`` bytes."""
    return 1 + count_digits(length) + 2 + length + 2


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode()
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise FormatError(f"expected a string or bytes argument, not {type(data).__name__}")


def _c_string(data: BytesLike) -> bytes:
    """A string argument, cut at its first NUL byte."""
    return _to_bytes(data).split(b"\0", 1)[0]


def _assemble(argv: list[bytes]) -> bytes:
    parts = [b"*%d\r\n" % len(argv)]
    parts.extend(b"$%d\r\n%s\r\n" % (len(arg), arg) for arg in argv)
    return b"".join(parts)


def _wrap(value: int, bits: int, signed: bool) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _pad(sign_and_prefix: str, digits: str, flags: str, width: int, zero_ok: bool) -> str:
    text = sign_and_prefix + digits
    if len(text) >= width:
        return text
    if "-" in flags:
        return text.ljust(width)
    if "0" in flags and zero_ok:
        return sign_and_prefix + digits.rjust(width - len(sign_and_prefix), "0")
    return text.rjust(width)


def _format_int(value: int, conv: str, flags: str, width: int,
                precision: Optional[int], bits: int) -> str:
    signed = conv in "di"
    value = _wrap(value, bits, signed)
    negative = value < 0
    magnitude = abs(value)
    if conv in "diu":
        digits = str(magnitude)
    elif conv == "o":
        digits = format(magnitude, "o")
    else:
        digits = format(magnitude, conv)
    if precision is not None:
        digits = "" if precision == 0 and magnitude == 0 else digits.zfill(precision)
    if conv == "o" and "#" in flags and not digits.startswith("0"):
        digits = "0" + digits
    prefix = ""
    if negative:
        prefix = "-"
    elif signed and "+" in flags:
        prefix = "+"
    elif signed and " " in flags:
        prefix = " "
    if conv in "xX" and "#" in flags and magnitude:
        prefix += "0" + conv
    return _pad(prefix, digits, flags, width, precision is None)


def _format_hex_float(value: float, upper: bool, flags: str, width: int,
                      precision: Optional[int]) -> str:
    if math.copysign(1.0, value) < 0 and not math.isnan(value):
        sign = "-"
    elif "+" in flags:
        sign = "+"
    elif " " in flags:
        sign = " "
    else:
        sign = ""
    magnitude = abs(value)
    finite = math.isfinite(magnitude)
    if not finite:
        body = "nan" if math.isnan(magnitude) else "inf"
        text = _pad(sign, body, flags, width, False)
        return text.upper() if upper else text

    mantissa, exponent = magnitude.hex()[2:].split("p")
    lead, fraction = mantissa.split(".")
    if precision is None:
        fraction = fraction.rstrip("0")
    elif precision < _HEX_FRACTION_DIGITS:
        whole = (int(lead, 16) << (4 * _HEX_FRACTION_DIGITS)) | int(fraction, 16)
        shift = 4 * (_HEX_FRACTION_DIGITS - precision)
        quotient, remainder = divmod(whole, 1 << shift)
        half = 1 << (shift - 1)
        if remainder > half or (remainder == half and quotient & 1):
            quotient += 1
        lead = format(quotient >> (4 * precision), "x")
        fraction = format(quotient & ((1 << (4 * precision)) - 1), f"0{precision}x") if precision else ""
    else:
        fraction = fraction.ljust(precision, "0")
    point = "." if fraction or "#" in flags else ""
    digits = f"{lead}{point}{fraction}p{exponent}"
    text = _pad(sign + "0x", digits, flags, width, True)
    return text.upper() if upper else text


def _format_float(value: float, conv: str, flags: str, width: int,
                  precision: Optional[int]) -> str:
    if conv in "aA":
        return _format_hex_float(value, conv == "A", flags, width, precision)
    if not math.isfinite(value):
        flags = flags.replace("0", "")
    spec = "%" + flags + (str(width) if width else "")
    if precision is not None:
        spec += f".{precision}"
    return (spec + conv) % value


def _render_spec(source: bytes, start: int, next_arg: Callable[[], object]) -> tuple[bytes, int]:
    """Render the printf specifier at ``start``; return text and the resume position."""
    end = len(source)
    pos = start + 1
    while pos < end and source[pos] in _FLAGS:
        pos += 1
    flags_end = pos
    while pos < end and source[pos] in _DIGITS:
        pos += 1
    width_text = source[flags_end:pos]
    precision: Optional[int] = None
    if pos < end and source[pos] == ord("."):
        pos += 1
        precision_start = pos
        while pos < end and source[pos] in _DIGITS:
            pos += 1
        precision = int(source[precision_start:pos] or b"0")
    if pos >= end:
        raise FormatError("format specifier is cut short")

    length = b""
    is_float = False
    if source[pos] in _INT_CONVERSIONS:
        pass
    elif source[pos] in _FLOAT_CONVERSIONS:
        is_float = True
    else:
        for modifier in (b"hh", b"h", b"ll", b"l"):
            if source.startswith(modifier, pos):
                length = modifier
                pos += len(modifier)
                break
        else:
            raise FormatError(f"unsupported conversion {source[start:pos + 1]!r}")
        if pos >= end or source[pos] not in _INT_CONVERSIONS:
            raise FormatError(f"unsupported conversion {source[start:pos + 1]!r}")

    arg = next_arg()
    conv = chr(source[pos])
    flags = source[start + 1:flags_end].decode("ascii")
    width = int(width_text or b"0")
    if is_float:
        try:
            number = float(arg)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise FormatError(f"%{conv} needs a number argument") from exc
    else:
        try:
            integer = operator.index(arg)  # type: ignore[arg-type]
        except TypeError as exc:
            raise FormatError(f"%{conv} needs an integer argument") from exc

    if pos + 1 - start >= _SPEC_LIMIT:
        return b"", start + 2
    if is_float:
        text = _format_float(number, conv, flags, width, precision)
    else:
        text = _format_int(integer, conv, flags, width, precision, _LENGTH_BITS[length])
    return text.encode("ascii"), pos + 1


def format_command(fmt: BytesLike, *args: object) -> bytes:
    """Encode a command described by a printf-like format string.

    Arguments are separated by spaces in ``fmt``; ``%s`` and ``%b``
    interpolate strings, ``%%`` a literal percent sign, and the integer
    and floating point conversions of printf format numbers.
    """
    source = _to_bytes(fmt)
    supplied: Iterator[object] = iter(args)

    def next_arg() -> object:
        try:
            return next(supplied)
        except StopIteration:
            raise FormatError("not enough arguments for format string") from None

    argv: list[bytes] = []
    current = bytearray()
    touched = False
    pos = 0
    end = len(source)
    while pos < end:
        char = source[pos]
        if char != _PERCENT or pos + 1 >= end:
            if char == _SPACE:
                if touched:
                    argv.append(bytes(current))
                    current.clear()
                    touched = False
            else:
                current.append(char)
                touched = True
            pos += 1
            continue

        directive = source[pos + 1]
        next_pos = pos + 2
        if directive == ord("s"):
            current += _c_string(next_arg())  # type: ignore[arg-type]
        elif directive == ord("b"):
            current += _to_bytes(next_arg())  # type: ignore[arg-type]
        elif directive == _PERCENT:
            current += b"%"
        else:
            text, next_pos = _render_spec(source, pos, next_arg)
            current += text
        touched = True
        pos = next_pos

    if touched:
        argv.append(bytes(current))
    return _assemble(argv)


def format_command_argv(argv: Iterable[BytesLike]) -> bytes:
    """Encode a command from its arguments; every argument is binary safe."""
    return _assemble([_to_bytes(arg) for arg in argv])