import base64

import pytest
from multiformats import multihash as mf_multihash

import multihash_codec
from multihash_codec import Multihash, MultihashError, get_registry, varint
from multihash_codec.errors import (
    LENGTH_MISMATCH,
    MALFORMED_INPUT,
    MALFORMED_VARINT,
    TRUNCATED_DIGEST,
    UNKNOWN_FUNCTION,
)

DATA = b"this is some data to hash"

SHA1_HEX = "8c01cfecb50deb6ddcc39eddbddb012835f7919a"
SHA256_HEX = "cc98718f1394ba1071417e108bfb27a81c6fa7ff332ef4e1db37e5df2a9d18f0"
SHA512_HEX = (
    "a47a2a38acdd9addde6b90e8fb3dc5e6a83bb38babfa0167ceaed8e57bade03c8b"
    "1b2ea53776cf2d1c0f5ee3241511e9eabc14f868c4ac63a35e9879ac1977f6"
)


def test_sha1():
    mh = multihash_codec.new(DATA, "sha1")
    assert mh.hex_string() == "1114" + SHA1_HEX
    assert mh.prefix_hex() == "1114"
    assert mh.digest_hex() == SHA1_HEX
    assert mh.code == 0x11
    assert mh.length == 20
    assert mh.hash_func_name() == "sha1"


def test_sha256_alias():
    mh = multihash_codec.new(DATA, "sha256")
    assert mh.prefix_hex() == "1220"
    assert mh.digest_hex() == SHA256_HEX
    assert mh.hash_func_name() == "sha2-256"
    assert mh == multihash_codec.new(DATA, "sha2-256")


def test_default_function():
    assert multihash_codec.new(DATA) == multihash_codec.new(DATA, "sha2-256")
    assert Multihash.from_data(DATA).digest_hex() == SHA256_HEX


def test_sha2_512():
    mh = multihash_codec.new(DATA, "sha2-512")
    assert mh.prefix_hex() == "1340"
    assert mh.digest_hex() == SHA512_HEX
    assert len(mh.raw_bytes()) == 2 + 64


def test_blake2b_prefix():
    mh = multihash_codec.new(DATA, "blake2b-256")
    assert mh.prefix_hex() == "a0e40220"
    assert mh.digest_hex() == (
        "0f110162ff5df5344dd8c3ec6fecef5f20caa533a0b22364b68604ece90e15e9"
    )


def test_sha3_alias_matches_sha3_512():
    assert multihash_codec.new(DATA, "sha3") == multihash_codec.new(DATA, "sha3-512")


def test_unknown_name():
    assert multihash_codec.new(DATA, "sha9000") is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_data(DATA, "sha9000")
    assert excinfo.value.error == UNKNOWN_FUNCTION


def test_data_not_bytes():
    with pytest.raises(TypeError):
        multihash_codec.new("text", "sha1")


@pytest.mark.parametrize("entry", list(get_registry().entries()), ids=lambda e: e.name)
def test_round_trip_all_codes(entry):
    built = multihash_codec.new(DATA, entry.name)
    assert built.length == entry.default_length
    decoded = multihash_codec.decode(built.raw_bytes())
    assert decoded == built
    assert decoded.hash_func_name() == entry.name
    assert decoded.digest == built.digest
    assert decoded.verify(DATA)
    if entry.default_length >= 4:
        assert not decoded.verify(DATA + b"!")


def test_decode_zero_copy():
    raw = multihash_codec.new(DATA).raw_bytes()
    assert multihash_codec.decode(raw).raw_bytes() is raw
    assert multihash_codec.decode(bytearray(raw)).raw_bytes() == raw


def test_decode_hex():
    mh = multihash_codec.decode_hex("1114" + SHA1_HEX)
    assert mh.hash_func_name() == "sha1"
    assert mh.digest_hex() == SHA1_HEX
    assert mh == multihash_codec.new(DATA, "sha1")


@pytest.mark.parametrize("raw", [b"", b"\x12", b"\x12\x20"])
def test_decode_too_short(raw: bytes):
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == MALFORMED_INPUT


@pytest.mark.parametrize(
    "hex_str", ["zz", "1114" + SHA1_HEX[:-1], "11g4" + SHA1_HEX, "not hex at all"]
)
def test_decode_hex_invalid(hex_str: str):
    assert multihash_codec.decode_hex(hex_str) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_hex(hex_str)
    assert excinfo.value.error == MALFORMED_INPUT


@pytest.mark.parametrize(
    "raw",
    [
        b"\xff\xff\xff",  # truncated code
        b"\xff" * 11 + b"\x01",  # overflowing code
        b"\x12\x80\x80",  # truncated length
        b"\x12" + b"\xff" * 9 + b"\x02" + b"\x00",  # overflowing length
    ],
)
def test_decode_malformed_varint(raw: bytes):
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == MALFORMED_VARINT


@pytest.mark.parametrize("raw", [b"\x00\x01\x00", b"\x22\x01\x00", b"\xe1\xe4\x02\x01\x00"])
def test_decode_unknown_code(raw: bytes):
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == UNKNOWN_FUNCTION


def test_decode_length_mismatch():
    # sha2-256 declaring a 31 byte digest
    raw = b"\x12\x1f" + bytes.fromhex(SHA256_HEX)[:31]
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == LENGTH_MISMATCH


@pytest.mark.parametrize(
    "raw",
    [
        b"\x12\x20" + bytes(31),
        b"\x12\x20" + bytes(33),
        b"\xa0\xe4\x02\x20" + bytes(16),
    ],
)
def test_decode_truncated_digest(raw: bytes):
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == TRUNCATED_DIGEST


def test_decode_parametric_declared_length():
    # the length of a blake2b member follows from its code, but must still
    # agree with the bytes present
    raw = varint.encode(0xB201) + b"\x01" + b"\x2e"
    mh = multihash_codec.decode(raw)
    assert mh.hash_func_name() == "blake2b-8"
    assert mh.length == 1
    assert mh.verify(b"")


def test_decode_parametric_truncated_member():
    full = multihash_codec.new(DATA, "blake2b-256")
    raw = full.prefix[:3] + b"\x10" + full.digest[:16]
    mh = multihash_codec.decode(raw)
    assert mh.hash_func_name() == "blake2b-256"
    assert mh.length == 16
    assert mh.verify(DATA)
    assert mh != full


def test_from_digest():
    digest = bytes.fromhex(SHA256_HEX)
    mh = Multihash.from_digest(digest, "sha2-256")
    assert mh == multihash_codec.new(DATA)
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_digest(digest[:20], "sha2-256")
    assert excinfo.value.error == LENGTH_MISMATCH


def test_text_renderings():
    mh = multihash_codec.new(DATA, "sha2-256")
    raw = mh.raw_bytes()
    assert mh.b64_string() == base64.b64encode(raw).decode("ascii")
    assert Multihash.from_b64(mh.b64_string()) == mh
    assert mh.encode() == "z" + mh.b58_string()
    assert mh.b58_string().startswith("Qm")
    assert multihash_codec.decode_multibase(mh.encode()) == mh
    assert multihash_codec.decode_multibase(mh.encode("base32")) == mh
    assert multihash_codec.decode_multibase("!notmultibase") is None
    with pytest.raises(ValueError):
        mh.encode("base9000")


def test_equality_and_hashing():
    a = multihash_codec.new(DATA, "sha1")
    b = multihash_codec.decode_hex(a.hex_string())
    c = multihash_codec.new(DATA + b".", "sha1")
    assert a == b
    assert a != c
    assert a != a.raw_bytes()
    assert len({a, b, c}) == 2
    assert bytes(a) == a.raw_bytes()
    assert len(a) == 22
    assert "sha1" in repr(a)


def test_error_serialize():
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(b"\x12")
    assert excinfo.value.serialize()["error"] == MALFORMED_INPUT
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    "name", ["sha1", "sha2-256", "sha2-512", "sha3-256", "sha3-512", "blake2b-256", "blake2s-256"]
)
def test_multiformats_interop(name: str):
    mh = multihash_codec.new(DATA, name)
    assert bytes(mf_multihash.wrap(mh.digest, name)) == mh.raw_bytes()
    assert mf_multihash.from_digest(mh.raw_bytes()).name == name


@pytest.mark.parametrize("code", [0xB201, 0xB220, 0xB240, 0xB241, 0xB260])
def test_decode_parametric_empty_digest(code: int):
    raw = varint.encode(code) + b"\x00"
    assert len(raw) >= 3
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == TRUNCATED_DIGEST


def test_verify_empty_digest_never_matches():
    mh = Multihash(varint.encode(0xB220) + b"\x00", 0xB220, 4)
    assert mh.length == 0
    assert not mh.verify(b"anything")
    assert not mh.verify(b"")


@pytest.mark.parametrize(
    "raw",
    [
        b"\x92\x00\x20" + bytes(32),  # padded function code
        b"\x12\xa0\x00" + bytes(32),  # padded digest length
    ],
)
def test_decode_non_minimal_varint(raw: bytes):
    assert multihash_codec.decode(raw) is None
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_bytes(raw)
    assert excinfo.value.error == MALFORMED_VARINT


@pytest.mark.parametrize("text", ["é", "!!!!", "abc"])
def test_from_b64_invalid(text: str):
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_b64(text)
    assert excinfo.value.error == MALFORMED_INPUT


def test_b58_round_trip():
    mh = multihash_codec.new(DATA, "sha2-256")
    assert Multihash.from_b58(mh.b58_string()) == mh
    with pytest.raises(MultihashError) as excinfo:
        Multihash.from_b58("0OIl")
    assert excinfo.value.error == MALFORMED_INPUT
