"""
Lenient RFC 4648 base32 decoding for OTP secrets.

Unlike :func:`base64.b32decode` this never raises on bad input: decoding
stops at the first character outside the alphabet, so a trailing newline,
whitespace or ``=`` padding simply ends the key. Output is bounded by
``max_len`` bytes.
"""
from itertools import islice
from typing import Iterator, Optional

from .trace import NULL_TRACE, Trace

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
MAX_KEY_LEN = 64

_VALUES = {char: index for index, char in enumerate(ALPHABET)}


def symbols(src: str, casefold: bool = False) -> Iterator[int]:
    """
    Yields the 5-bit value of each leading alphabet character of ``src``.
    """
    for char in src:
        if casefold and "a" <= char <= "z":
            char = char.upper()
        value = _VALUES.get(char)
        if value is None:
            return
        yield value


def decode(
    src: Optional[str],
    max_len: int = MAX_KEY_LEN,
    casefold: bool = False,
    trace: Optional[Trace] = None,
) -> bytes:
    """
    Decodes base32 text into at most ``max_len`` bytes.

    :param src: base32 text; ``None`` is treated as empty
    :param max_len: capacity of the key buffer
    :param casefold: accept ASCII lowercase letters as well
    :param trace: diagnostics context, dumps the key at verbosity 2
    :returns: the key bytes, possibly empty
    """
    trace = trace or NULL_TRACE
    if max_len < 0:
        raise ValueError("max_len must not be negative")

    out = bytearray()
    values = symbols(src or "", casefold)
    while len(out) < max_len:
        group = list(islice(values, 8))
        if not group:
            break
        # 8 symbols make 40 bits; a short group is zero-filled on the right
        missing = 8 - len(group)
        acc = 0
        for value in group:
            acc = (acc << 5) | value
        acc <<= 5 * missing
        # bytes made up only of padding bits are dropped
        count = 5 - (5 * missing + 7) // 8
        for n in range(count):
            if len(out) >= max_len:
                break
            out.append((acc >> (32 - 8 * n)) & 0xFF)

    key = bytes(out)
    trace.dump(2, "Key", key)
    return key
