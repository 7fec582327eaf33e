"""Hash function registry and digest dispatch.

The registry maps function codes to canonical names, default digest lengths
and digest providers. It is built once per process, on first use, and is
read-only afterwards.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from .const import ALIASES, FIXED_LENGTHS, FIXED_NAMES, PARAMETRIC_FAMILIES
from .errors import UNKNOWN_FUNCTION, MultihashError
from .providers import FAMILY_PROVIDERS, FIXED_PROVIDERS, DigestFn

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HashRange:
    """A contiguous range of codes for a variable-output hash family."""

    family: str
    min_code: int
    max_code: int

    def __contains__(self, code: int) -> bool:
        return self.min_code <= code <= self.max_code

    @property
    def max_length(self) -> int:
        return length_for(self.max_code, self)


@dataclass(frozen=True)
class RegistryEntry:
    """A registered hash function."""

    code: int
    name: str
    default_length: int
    parametric: bool = False


def length_for(code: int, hash_range: HashRange) -> int:
    """Derive the digest length in bytes for a member of a parametric range."""
    if code not in hash_range:
        raise ValueError(
            f"Code {code:#x} outside of {hash_range.family} range "
            f"{hash_range.min_code:#x}..{hash_range.max_code:#x}"
        )
    return code - hash_range.min_code + 1


RANGES: tuple[HashRange, ...] = tuple(
    HashRange(family, int(lo), int(hi)) for family, lo, hi in PARAMETRIC_FAMILIES
)


def range_of(code: int) -> Optional[HashRange]:
    """Find the parametric range containing a code, if any."""
    for hash_range in RANGES:
        if code in hash_range:
            return hash_range
    return None


@dataclass(frozen=True)
class Registry:
    """Immutable lookup tables for all registered hash functions."""

    by_code: Mapping[int, RegistryEntry]
    names: Mapping[str, int]
    aliases: Mapping[str, int]
    providers: Mapping[int, DigestFn]

    def entries(self) -> Iterator[RegistryEntry]:
        """Iterate the registered entries in code order."""
        for code in sorted(self.by_code):
            yield self.by_code[code]

    def resolve_by_name(self, name: str) -> Optional[int]:
        """Look up a code by canonical name or alias (exact match)."""
        code = self.names.get(name)
        if code is None:
            code = self.aliases.get(name)
        return code

    def default_length(self, code: int) -> Optional[int]:
        entry = self.by_code.get(code)
        return entry.default_length if entry else None

    def name_of(self, code: int) -> Optional[str]:
        entry = self.by_code.get(code)
        return entry.name if entry else None

    def is_parametric(self, code: int) -> bool:
        entry = self.by_code.get(code)
        return bool(entry and entry.parametric)

    def compute(self, code: int, data: bytes, out_length: int) -> bytes:
        """Compute the digest of `data` for a code, `out_length` bytes long.

        Raises:
            MultihashError: if the code has no provider

        """
        provider = self.providers.get(code)
        if not provider:
            raise MultihashError(
                UNKNOWN_FUNCTION, f"No digest provider for code {code:#x}"
            )
        digest = provider(bytes(data), out_length)
        if len(digest) != out_length:
            raise ValueError(
                f"Provider for {code:#x} returned {len(digest)} bytes, "
                f"expected {out_length}"
            )
        return digest

    def compute_into(
        self,
        code: int,
        data: bytes,
        out_length: int,
        out: bytearray,
        offset: int,
    ):
        """Compute a digest and write it into `out` starting at `offset`."""
        if offset + out_length > len(out):
            raise ValueError("Destination buffer too small for digest")
        out[offset : offset + out_length] = self.compute(code, data, out_length)


def _build() -> Registry:
    by_code: dict[int, RegistryEntry] = {}
    names: dict[str, int] = {}
    providers: dict[int, DigestFn] = {}

    for code, name in FIXED_NAMES.items():
        by_code[int(code)] = RegistryEntry(int(code), name, FIXED_LENGTHS[code])
        names[name] = int(code)
        providers[int(code)] = FIXED_PROVIDERS[code]

    for hash_range in RANGES:
        provider = FAMILY_PROVIDERS[hash_range.family]
        for code in range(hash_range.min_code, hash_range.max_code + 1):
            n = length_for(code, hash_range)
            name = f"{hash_range.family}-{n * 8}"
            if name in names:
                raise RuntimeError(f"Duplicate hash function name: {name}")
            by_code[code] = RegistryEntry(code, name, n, parametric=True)
            names[name] = code
            providers[code] = provider

    aliases = {alias: int(code) for alias, code in ALIASES.items()}
    log.debug(
        "Built multihash registry: %d functions, %d aliases",
        len(by_code),
        len(aliases),
    )
    return Registry(
        by_code=MappingProxyType(by_code),
        names=MappingProxyType(names),
        aliases=MappingProxyType(aliases),
        providers=MappingProxyType(providers),
    )


_registry: Optional[Registry] = None
_registry_lock = threading.Lock()


def initialize() -> Registry:
    """Build the registry if needed; safe to call repeatedly and concurrently."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = _build()
    return _registry


def get_registry() -> Registry:
    """Access the process-wide registry, initializing it on first use."""
    return _registry or initialize()


def resolve_by_name(name: str) -> Optional[int]:
    """Resolve a hash function name to its code."""
    return get_registry().resolve_by_name(name)


def default_length(code: int) -> Optional[int]:
    """Get the default digest length for a code."""
    return get_registry().default_length(code)


def name_of(code: int) -> Optional[str]:
    """Get the canonical name for a code."""
    return get_registry().name_of(code)


def compute(code: int, data: bytes, out_length: int) -> bytes:
    """Compute a digest for a code using the registered provider."""
    return get_registry().compute(code, data, out_length)
