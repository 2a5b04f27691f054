"""
Sloth Verifiable Delay Function

A slow, strictly sequential permutation over F_p (p ≡ 3 mod 4) whose
inverse checks the result.

    vdf = SlothVDF(generate_prime(256), 100_000)
    digest, witness = vdf.compute(b"input")
    vdf.verify(b"input", digest, witness)
"""

__version__ = "0.1.0"

from sloth.errors import (
    SlothError,
    ConfigurationError,
    InvalidIterationsError,
    NotPrimeError,
    PrimeCongruenceError,
    UsageError,
    MalformedWitnessError,
    ProofMismatchError,
    HashMismatchError,
    VerificationFailedError,
    ComputationCancelledError,
)
from sloth.primes import generate_prime, random_prime, is_probable_prime
from sloth.permutation import SlothPermutation
from sloth.vdf import SlothVDF, SlothProof

__all__ = [
    # VDF
    "SlothVDF",
    "SlothProof",
    "SlothPermutation",
    # Domain parameters
    "generate_prime",
    "random_prime",
    "is_probable_prime",
    # Errors
    "SlothError",
    "ConfigurationError",
    "InvalidIterationsError",
    "NotPrimeError",
    "PrimeCongruenceError",
    "UsageError",
    "MalformedWitnessError",
    "ProofMismatchError",
    "HashMismatchError",
    "VerificationFailedError",
    "ComputationCancelledError",
    "__version__",
]
