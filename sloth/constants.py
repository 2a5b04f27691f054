"""
Sloth VDF Constants

All tunable defaults defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# DOMAIN PARAMETERS
# ==============================================================================

DEFAULT_PRIME_BITS: Final[int] = 256            # Production prime size
TESTING_PRIME_BITS: Final[int] = 64             # Fast primes for tests/demo
MIN_PRIME_BITS: Final[int] = 2                  # Smallest size holding a prime ≡ 3 (mod 4)
PRIMALITY_ROUNDS: Final[int] = 20               # Miller-Rabin rounds, error <= 4^-20

# ==============================================================================
# DELAY PARAMETERS
# ==============================================================================

DEFAULT_ITERATIONS: Final[int] = 100_000        # Demo delay
TESTING_ITERATIONS: Final[int] = 1_000
PROGRESS_INTERVAL: Final[int] = 10_000          # Iterations between progress callbacks
CALIBRATION_ITERATIONS: Final[int] = 2_000      # Sample size for iteration estimates

# ==============================================================================
# HASHING
# ==============================================================================

DEFAULT_HASH: Final[str] = "sha256"

# ==============================================================================
# DEMO
# ==============================================================================

DEMO_INPUT: Final[str] = "hello verifiable delay functions"
DEMO_WRONG_INPUT: Final[str] = "this is not the correct input"
