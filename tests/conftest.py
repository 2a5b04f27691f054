"""
Sloth VDF Test Fixtures
"""

import random

import pytest

from sloth.permutation import SlothPermutation
from sloth.primes import generate_prime
from sloth.vdf import SlothVDF

# 2^64 - 189
FIXED_PRIME = 18446744073709551427
FIXED_ITERATIONS = 1000
ZOO_INPUT = b"A random zoo: sloth, unicorn, and trx"


@pytest.fixture(scope="session")
def fixed_prime() -> int:
    """Fixed 64-bit test prime."""
    return FIXED_PRIME


@pytest.fixture(scope="session")
def zoo_input() -> bytes:
    """Input message used across the VDF tests."""
    return ZOO_INPUT


@pytest.fixture(scope="session")
def sloth_vdf() -> SlothVDF:
    """Shared instance over the fixed prime, 1000 iterations."""
    return SlothVDF(FIXED_PRIME, FIXED_ITERATIONS)


@pytest.fixture(scope="session")
def zoo_proof(sloth_vdf, zoo_input):
    """(digest, witness) for the zoo input."""
    return sloth_vdf.compute(zoo_input)


@pytest.fixture
def tiny_engine() -> SlothPermutation:
    """Engine over p = 7, small enough to enumerate."""
    return SlothPermutation(7)


@pytest.fixture(scope="session")
def random_primes():
    """Freshly generated primes of several sizes."""
    return [generate_prime(bits) for bits in (16, 32, 64, 128, 256)]


@pytest.fixture
def rng() -> random.Random:
    """Deterministic RNG for picking field elements."""
    return random.Random(0x5107)
