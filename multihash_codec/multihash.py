"""Self-describing digest values.

A multihash is `varint(code) || varint(length) || digest`. `Multihash`
instances are immutable, and each one keeps its full encoded form as its only
storage. Every accessor reads from that buffer.

The `Multihash.from_*` constructors raise `MultihashError` with a reason code.
The module-level `new`/`decode*` functions are the non-raising boundary: they
return None on failure and never a partially built value.
"""

import hmac
import logging
from typing import Optional, Union

from . import encoding, varint
from .const import DEFAULT_HASH, DEFAULT_MULTIBASE, MIN_MULTIHASH_LEN
from .errors import (
    LENGTH_MISMATCH,
    MALFORMED_INPUT,
    MALFORMED_VARINT,
    TRUNCATED_DIGEST,
    UNKNOWN_FUNCTION,
    MultihashError,
)
from .registry import Registry, get_registry

log = logging.getLogger(__name__)


class Multihash:
    """A hash function code, a digest length and the digest bytes."""

    __slots__ = ("_buf", "_code", "_prefix_len")

    def __init__(self, buf: bytes, code: int, prefix_len: int):
        """Initializer.

        Use the `from_*` constructors; this performs no validation.
        """
        self._buf = buf
        self._code = code
        self._prefix_len = prefix_len

    @classmethod
    def _prepare(
        cls, registry: Registry, name: str
    ) -> tuple[int, int, bytearray, int]:
        code = registry.resolve_by_name(name)
        if code is None:
            raise MultihashError(UNKNOWN_FUNCTION, f"Unknown hash function: {name}")
        length = registry.default_length(code)
        prefix = varint.encode(code) + varint.encode(length)
        buf = bytearray(len(prefix) + length)
        buf[: len(prefix)] = prefix
        return code, length, buf, len(prefix)

    @classmethod
    def from_data(cls, data: bytes, name: str = DEFAULT_HASH) -> "Multihash":
        """Hash `data` with the named function.

        Raises:
            MultihashError: if the function name is not registered

        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Expected bytes for data")
        registry = get_registry()
        code, length, buf, prefix_len = cls._prepare(registry, name)
        registry.compute_into(code, data, length, buf, prefix_len)
        return cls(bytes(buf), code, prefix_len)

    @classmethod
    def from_digest(cls, digest: bytes, name: str = DEFAULT_HASH) -> "Multihash":
        """Wrap a digest that was computed elsewhere.

        Raises:
            MultihashError: if the name is unknown or the digest has the wrong size

        """
        registry = get_registry()
        code, length, buf, prefix_len = cls._prepare(registry, name)
        if len(digest) != length:
            raise MultihashError(
                LENGTH_MISMATCH,
                f"Expected {length} byte digest for {name}, got {len(digest)}",
            )
        buf[prefix_len:] = digest
        return cls(bytes(buf), code, prefix_len)

    @classmethod
    def from_bytes(cls, raw: Union[bytes, bytearray, memoryview]) -> "Multihash":
        """Decode an encoded multihash.

        Raises:
            MultihashError: on any invalid input

        """
        if not isinstance(raw, bytes):
            raw = bytes(raw)
        if len(raw) < MIN_MULTIHASH_LEN:
            raise MultihashError(
                MALFORMED_INPUT,
                f"Multihash must be at least {MIN_MULTIHASH_LEN} bytes",
            )

        code, code_len = varint.decode(raw)
        if code_len <= 0:
            raise MultihashError(MALFORMED_VARINT, "Invalid function code varint")
        if code_len != varint.encoded_length(code):
            raise MultihashError(MALFORMED_VARINT, "Function code varint not minimal")

        registry = get_registry()
        expected = registry.default_length(code)
        if expected is None:
            raise MultihashError(
                UNKNOWN_FUNCTION, f"Unknown hash function code: {code:#x}"
            )

        length, length_len = varint.decode(raw, code_len)
        if length_len <= 0:
            raise MultihashError(MALFORMED_VARINT, "Invalid digest length varint")
        if length_len != varint.encoded_length(length):
            raise MultihashError(MALFORMED_VARINT, "Digest length varint not minimal")

        if not registry.is_parametric(code) and length != expected:
            raise MultihashError(
                LENGTH_MISMATCH,
                f"Digest length {length} does not match {expected} "
                f"for {registry.name_of(code)}",
            )

        if length == 0:
            raise MultihashError(TRUNCATED_DIGEST, "Digest must be at least one byte")

        prefix_len = code_len + length_len
        available = len(raw) - prefix_len
        if length != available:
            raise MultihashError(
                TRUNCATED_DIGEST,
                f"Declared digest length {length}, found {available} bytes",
            )

        return cls(raw, code, prefix_len)

    @classmethod
    def from_hex(cls, hex_digest: str) -> "Multihash":
        """Decode a hex-encoded multihash."""
        return cls.from_bytes(encoding.from_hex(hex_digest))

    @classmethod
    def from_b64(cls, b64_digest: str) -> "Multihash":
        """Decode a base64-encoded multihash."""
        return cls.from_bytes(encoding.from_b64(b64_digest))

    @classmethod
    def from_b58(cls, b58_digest: str) -> "Multihash":
        """Decode a base58btc-encoded multihash."""
        return cls.from_bytes(encoding.from_b58(b58_digest))

    @classmethod
    def from_multibase(cls, text: str) -> "Multihash":
        """Decode a multibase-encoded multihash in any registered base."""
        return cls.from_bytes(encoding.from_multibase(text))

    @property
    def code(self) -> int:
        return self._code

    @property
    def length(self) -> int:
        return len(self._buf) - self._prefix_len

    @property
    def prefix(self) -> bytes:
        return self._buf[: self._prefix_len]

    @property
    def digest(self) -> bytes:
        return self._buf[self._prefix_len :]

    def raw_bytes(self) -> bytes:
        return self._buf

    def hash_func_name(self) -> str:
        return get_registry().name_of(self._code)

    def hex_string(self) -> str:
        return encoding.to_hex(self._buf)

    def b64_string(self) -> str:
        return encoding.to_b64(self._buf)

    def b58_string(self) -> str:
        return encoding.to_b58(self._buf)

    def prefix_hex(self) -> str:
        return encoding.to_hex(self.prefix)

    def digest_hex(self) -> str:
        return encoding.to_hex(self.digest)

    def encode(self, base: str = DEFAULT_MULTIBASE) -> str:
        """Render this multihash as a multibase string."""
        return encoding.to_multibase(self._buf, base)

    def verify(self, data: bytes) -> bool:
        """Check whether `data` hashes to this multihash's digest.

        A parametric code may carry fewer bytes than its family member
        produces; the digest is then compared as a prefix of the full output.
        """
        if not self.length:
            return False
        registry = get_registry()
        full = registry.compute(self._code, data, registry.default_length(self._code))
        return hmac.compare_digest(full[: self.length], self.digest)

    def __bytes__(self) -> bytes:
        return self._buf

    def __len__(self) -> int:
        return len(self._buf)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Multihash):
            return NotImplemented
        return self._buf == other._buf

    def __hash__(self) -> int:
        return hash(self._buf)

    def __repr__(self) -> str:
        return f"Multihash({self.hash_func_name()!r}, {self.digest_hex()!r})"


def _checked(op, *args) -> Optional[Multihash]:
    try:
        return op(*args)
    except MultihashError as err:
        log.debug("Multihash rejected (%s): %s", err.error, err.message)
        return None


def new(data: bytes, name: str = DEFAULT_HASH) -> Optional[Multihash]:
    """Hash `data` with the named function, or return None if it is unknown."""
    return _checked(Multihash.from_data, data, name)


def decode(raw: Union[bytes, bytearray, memoryview]) -> Optional[Multihash]:
    """Decode an encoded multihash, or return None if it is invalid."""
    return _checked(Multihash.from_bytes, raw)


def decode_hex(hex_digest: str) -> Optional[Multihash]:
    """Decode a hex-encoded multihash, or return None if it is invalid."""
    return _checked(Multihash.from_hex, hex_digest)


def decode_multibase(text: str) -> Optional[Multihash]:
    """Decode a multibase-encoded multihash, or return None if it is invalid."""
    return _checked(Multihash.from_multibase, text)
