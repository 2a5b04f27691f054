"""
Sloth VDF Prime Generator

Produces domain parameters: primes p with p ≡ 3 (mod 4), for which
(p+1)/4 is a closed-form square-root exponent.

p is public, so timing variance from rejection sampling is harmless.
"""

from __future__ import annotations
import logging
import secrets
from typing import Callable

import gmpy2

from sloth.constants import MIN_PRIME_BITS, PRIMALITY_ROUNDS

logger = logging.getLogger(__name__)

RandBits = Callable[[int], int]


def is_probable_prime(n: int, rounds: int = PRIMALITY_ROUNDS) -> bool:
    """
    Probabilistic primality test (GMP, Miller-Rabin rounds after trial division).

    Error probability is at most 4^-rounds for composites.
    """
    if rounds < 1:
        raise ValueError(f"rounds must be at least 1: {rounds}")
    if n < 2:
        return False
    return bool(gmpy2.is_prime(gmpy2.mpz(n), rounds))


def random_prime(
    bits: int,
    randbits: RandBits = secrets.randbits,
    rounds: int = PRIMALITY_ROUNDS
) -> int:
    """
    Sample a random prime of exactly `bits` bits.

    Candidates get their top bit forced (exact length) and their low bit
    forced (odd), then are kept only if they pass the primality test.

    Args:
        bits: Bit length of the result
        randbits: Random source, secrets.randbits unless testing
        rounds: Primality test rounds

    Returns:
        Random prime with bit_length() == bits
    """
    if bits < MIN_PRIME_BITS:
        raise ValueError(f"bits must be at least {MIN_PRIME_BITS}: {bits}")

    top = 1 << (bits - 1)
    while True:
        candidate = randbits(bits) | top | 1
        if is_probable_prime(candidate, rounds):
            return candidate


def generate_prime(
    bits: int,
    randbits: RandBits = secrets.randbits,
    rounds: int = PRIMALITY_ROUNDS
) -> int:
    """
    Generate a Sloth domain parameter.

    Draws random primes until one is congruent to 3 (mod 4). About half of
    all odd primes qualify, so two draws are expected.

    Args:
        bits: Bit length of p
        randbits: Random source; its failures propagate unchanged
        rounds: Primality test rounds

    Returns:
        Prime p with p.bit_length() == bits and p % 4 == 3
    """
    rejected = 0
    while True:
        p = random_prime(bits, randbits, rounds)
        if p % 4 == 3:
            logger.info(f"Found {bits}-bit prime ≡ 3 (mod 4) after {rejected} rejected candidates")
            return p

        rejected += 1
        logger.debug(f"Rejected prime candidate ≡ 1 (mod 4) ({rejected})")
