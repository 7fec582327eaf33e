"""Multihash function codes and defaults."""

from enum import IntEnum


class HashCode(IntEnum):
    """Registered multihash function codes."""

    SHA1 = 0x11
    SHA2_256 = 0x12
    SHA2_512 = 0x13
    SHA3_512 = 0x14
    SHA3_384 = 0x15
    SHA3_256 = 0x16
    SHA3_224 = 0x17
    SHAKE_128 = 0x18
    SHAKE_256 = 0x19
    KECCAK_224 = 0x1A
    KECCAK_256 = 0x1B
    KECCAK_384 = 0x1C
    KECCAK_512 = 0x1D
    MURMUR3_32 = 0x23
    DBL_SHA2_256 = 0x56

    BLAKE2B_MIN = 0xB201
    BLAKE2B_MAX = 0xB240
    BLAKE2S_MIN = 0xB241
    BLAKE2S_MAX = 0xB260


DEFAULT_HASH = "sha2-256"
DEFAULT_MULTIBASE = "base58btc"

# one byte for each varint field plus one digest byte
MIN_MULTIHASH_LEN = 3

FIXED_NAMES: dict[HashCode, str] = {
    HashCode.SHA1: "sha1",
    HashCode.SHA2_256: "sha2-256",
    HashCode.SHA2_512: "sha2-512",
    HashCode.SHA3_224: "sha3-224",
    HashCode.SHA3_256: "sha3-256",
    HashCode.SHA3_384: "sha3-384",
    HashCode.SHA3_512: "sha3-512",
    HashCode.SHAKE_128: "shake-128",
    HashCode.SHAKE_256: "shake-256",
    HashCode.KECCAK_224: "keccak-224",
    HashCode.KECCAK_256: "keccak-256",
    HashCode.KECCAK_384: "keccak-384",
    HashCode.KECCAK_512: "keccak-512",
    HashCode.MURMUR3_32: "murmur3",
    HashCode.DBL_SHA2_256: "dbl-sha2-256",
}

FIXED_LENGTHS: dict[HashCode, int] = {
    HashCode.SHA1: 20,
    HashCode.SHA2_256: 32,
    HashCode.SHA2_512: 64,
    HashCode.SHA3_224: 28,
    HashCode.SHA3_256: 32,
    HashCode.SHA3_384: 48,
    HashCode.SHA3_512: 64,
    HashCode.SHAKE_128: 32,
    HashCode.SHAKE_256: 64,
    HashCode.KECCAK_224: 28,
    HashCode.KECCAK_256: 32,
    HashCode.KECCAK_384: 48,
    HashCode.KECCAK_512: 64,
    HashCode.MURMUR3_32: 4,
    HashCode.DBL_SHA2_256: 32,
}

ALIASES: dict[str, HashCode] = {
    "sha256": HashCode.SHA2_256,
    "sha3": HashCode.SHA3_512,
}

# (family, min code, max code); the member at offset n-1 yields n bytes
PARAMETRIC_FAMILIES: tuple[tuple[str, int, int], ...] = (
    ("blake2b", HashCode.BLAKE2B_MIN, HashCode.BLAKE2B_MAX),
    ("blake2s", HashCode.BLAKE2S_MIN, HashCode.BLAKE2S_MAX),
)
