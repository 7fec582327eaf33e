"""Unsigned LEB128 varint handling.

Every length-prefixed field of a multihash is encoded with 7 payload bits per
byte, least-significant group first, with the high bit set on every byte but
the last.

Decoding never raises on malformed bytes. Instead the consumed count signals
the failure:

    consumed > 0: success
    consumed == 0: buffer ended before the final byte (need more input)
    consumed < 0: value does not fit in 64 bits; -consumed - 1 is the index
                  of the offending byte

Non-minimal encodings (trailing 0x80 groups, e.g. b"\x92\x00" for 0x12) decode
to their value; callers that need canonical input compare `consumed` with
`encoded_length(value)`.
"""

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

MAX_VARINT_LEN = 10
MAX_UINT64 = (1 << 64) - 1


def encode(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as a minimal varint."""
    if not isinstance(value, int):
        raise TypeError("Expected integer value")
    if value < 0 or value > MAX_UINT64:
        raise ValueError(f"Value out of range for uint64: {value}")
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def encoded_length(value: int) -> int:
    """Return the number of bytes `encode(value)` would produce."""
    if value < 0 or value > MAX_UINT64:
        raise ValueError(f"Value out of range for uint64: {value}")
    return max(1, (value.bit_length() + 6) // 7)


def decode(buf: BytesLike, offset: int = 0) -> tuple[int, int]:
    """Parse the first varint in `buf`, starting at `offset`.

    Returns:
        A pair of the decoded value and the number of bytes consumed. On
        failure the value is 0 and the count is <= 0 (see module docs).

    """
    value = 0
    shift = 0
    for i, byte in enumerate(memoryview(buf)[offset:]):
        if byte < 0x80:
            if i > 9 or (i == 9 and byte > 1):
                return 0, -(i + 1)
            return value | (byte << shift), i + 1
        if i >= MAX_VARINT_LEN:
            # a continuation bit on the 11th byte can never terminate in range
            return 0, -(i + 1)
        value |= (byte & 0x7F) << shift
        shift += 7
    return 0, 0
