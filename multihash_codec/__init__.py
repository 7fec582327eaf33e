"""Self-describing digest (multihash) codec."""

from . import const, encoding, registry, varint
from .errors import MultihashError
from .multihash import Multihash, decode, decode_hex, decode_multibase, new
from .registry import default_length, get_registry, name_of, resolve_by_name

__all__ = [
    "const",
    "decode",
    "decode_hex",
    "decode_multibase",
    "default_length",
    "encoding",
    "get_registry",
    "Multihash",
    "MultihashError",
    "name_of",
    "new",
    "registry",
    "resolve_by_name",
    "varint",
]
