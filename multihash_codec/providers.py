"""Digest primitives for each supported hash family."""

import hashlib
from collections.abc import Callable
from typing import TypeAlias

import mmh3
from Crypto.Hash import keccak

from .const import HashCode

# A provider maps (data, output length in bytes) to exactly that many bytes
DigestFn: TypeAlias = Callable[[bytes, int], bytes]


def _hashlib_digest(name: str) -> DigestFn:
    def digest(data: bytes, length: int) -> bytes:
        return hashlib.new(name, data).digest()[:length]

    return digest


def _shake_digest(name: str) -> DigestFn:
    def digest(data: bytes, length: int) -> bytes:
        return hashlib.new(name, data).digest(length)

    return digest


def _keccak_digest(bits: int) -> DigestFn:
    def digest(data: bytes, length: int) -> bytes:
        h = keccak.new(digest_bits=bits)
        h.update(data)
        return h.digest()[:length]

    return digest


def sum_dbl_sha256(data: bytes, length: int) -> bytes:
    """SHA2-256 applied to its own output."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:length]


def sum_murmur3_32(data: bytes, length: int) -> bytes:
    """32-bit x86 murmur3 with seed 0, rendered big-endian."""
    return mmh3.hash(data, 0, signed=False).to_bytes(4, "big")[:length]


def sum_blake2b(data: bytes, length: int) -> bytes:
    """BLAKE2b parameterized to emit `length` bytes (1..64)."""
    return hashlib.blake2b(data, digest_size=length).digest()


def sum_blake2s(data: bytes, length: int) -> bytes:
    """BLAKE2s parameterized to emit `length` bytes (1..32)."""
    return hashlib.blake2s(data, digest_size=length).digest()


FIXED_PROVIDERS: dict[HashCode, DigestFn] = {
    HashCode.SHA1: _hashlib_digest("sha1"),
    HashCode.SHA2_256: _hashlib_digest("sha256"),
    HashCode.SHA2_512: _hashlib_digest("sha512"),
    HashCode.SHA3_224: _hashlib_digest("sha3_224"),
    HashCode.SHA3_256: _hashlib_digest("sha3_256"),
    HashCode.SHA3_384: _hashlib_digest("sha3_384"),
    HashCode.SHA3_512: _hashlib_digest("sha3_512"),
    HashCode.SHAKE_128: _shake_digest("shake_128"),
    HashCode.SHAKE_256: _shake_digest("shake_256"),
    HashCode.KECCAK_224: _keccak_digest(224),
    HashCode.KECCAK_256: _keccak_digest(256),
    HashCode.KECCAK_384: _keccak_digest(384),
    HashCode.KECCAK_512: _keccak_digest(512),
    HashCode.MURMUR3_32: sum_murmur3_32,
    HashCode.DBL_SHA2_256: sum_dbl_sha256,
}

FAMILY_PROVIDERS: dict[str, DigestFn] = {
    "blake2b": sum_blake2b,
    "blake2s": sum_blake2s,
}
