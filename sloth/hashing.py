"""
Sloth VDF Hash Capability

One-shot hash functions (bytes -> fixed-length digest) and the encodings
that move field elements in and out of them.
"""

from __future__ import annotations
import hashlib
import logging
from typing import Callable, Dict, Union

from Crypto.Hash import keccak

from sloth.constants import DEFAULT_HASH
from sloth.errors import ConfigurationError

logger = logging.getLogger(__name__)

HashFunction = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """SHA-256 digest (32 bytes)."""
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """SHA3-256 digest (32 bytes)."""
    return hashlib.sha3_256(data).digest()


def blake2b(data: bytes) -> bytes:
    """BLAKE2b digest truncated to 32 bytes."""
    return hashlib.blake2b(data, digest_size=32).digest()


def keccak256(data: bytes) -> bytes:
    """Original Keccak-256 (pre-FIPS padding), as used by Ethereum."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


HASH_FUNCTIONS: Dict[str, HashFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b": blake2b,
    "keccak256": keccak256,
}


def get_hash_function(choice: Union[str, HashFunction, None] = None) -> HashFunction:
    """
    Resolve a hash capability.

    Args:
        choice: Registered name, a callable, or None for the default

    Returns:
        Callable mapping bytes to a digest

    Raises:
        ConfigurationError: Unknown name or non-callable value
    """
    if choice is None:
        choice = DEFAULT_HASH

    if isinstance(choice, str):
        try:
            return HASH_FUNCTIONS[choice.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown hash function {choice!r} "
                f"(available: {', '.join(sorted(HASH_FUNCTIONS))})"
            ) from None

    if not callable(choice):
        raise ConfigurationError(f"Hash function must be callable, got {type(choice).__name__}")

    return choice


def hash_name(func: HashFunction) -> str:
    """Registered name of a hash function, or its qualified name for custom ones."""
    for name, registered in HASH_FUNCTIONS.items():
        if registered is func:
            return name
    return getattr(func, "__qualname__", repr(func))


def element_to_bytes(x: int) -> bytes:
    """
    Minimal big-endian unsigned encoding.

    Zero encodes as the empty byte string.
    """
    x = int(x)
    return x.to_bytes((x.bit_length() + 7) // 8, "big")


def digest_to_element(digest: bytes, p: int) -> int:
    """Read a digest as an unsigned big-endian integer and reduce it mod p."""
    return int.from_bytes(digest, "big") % p
