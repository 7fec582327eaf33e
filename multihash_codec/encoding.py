"""Text renderings of multihash bytes."""

import base64

import base58
from multiformats import multibase

from .const import DEFAULT_MULTIBASE
from .errors import MALFORMED_INPUT, MultihashError


def to_hex(b: bytes) -> str:
    return bytes(b).hex()


def from_hex(s: str) -> bytes:
    """Parse a hex string into bytes.

    Raises:
        MultihashError: on invalid characters or odd length

    """
    if not isinstance(s, str):
        raise TypeError("Expected hex string")
    try:
        return bytes.fromhex(s)
    except ValueError as err:
        raise MultihashError(MALFORMED_INPUT, f"Invalid hex string: {err}") from err


def to_b64(b: bytes) -> str:
    return base64.b64encode(bytes(b)).decode("ascii")


def from_b64(s: str) -> bytes:
    try:
        return base64.b64decode(s, validate=True)
    except ValueError as err:
        raise MultihashError(MALFORMED_INPUT, f"Invalid base64 string: {err}") from err


def to_b58(b: bytes) -> str:
    return base58.b58encode(bytes(b)).decode("ascii")


def from_b58(s: str) -> bytes:
    try:
        return base58.b58decode(s)
    except ValueError as err:
        raise MultihashError(MALFORMED_INPUT, f"Invalid base58 string: {err}") from err


def to_multibase(b: bytes, base: str = DEFAULT_MULTIBASE) -> str:
    """Encode bytes as a multibase string (prefix character + encoded data)."""
    try:
        return multibase.encode(bytes(b), base)
    except KeyError:
        raise ValueError(f"Unsupported multibase encoding: {base}") from None


def from_multibase(s: str) -> bytes:
    """Decode a multibase string, accepting any registered base."""
    try:
        return multibase.decode(s)
    except (KeyError, ValueError) as err:
        raise MultihashError(
            MALFORMED_INPUT, f"Invalid multibase string: {err}"
        ) from err
