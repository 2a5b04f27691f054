"""
Sloth VDF Exceptions

Every failure surfaced by the library derives from SlothError so callers
can tell a failed proof apart from a programming mistake.
"""


class SlothError(Exception):
    """Base Sloth VDF error."""
    pass


# ============================================================================
# CONSTRUCTION
# ============================================================================

class ConfigurationError(SlothError):
    """Invalid domain parameters or instance settings."""
    pass


class InvalidIterationsError(ConfigurationError):
    """Iteration count is not a positive integer."""
    pass


class NotPrimeError(ConfigurationError):
    """Modulus failed the primality test."""
    pass


class PrimeCongruenceError(ConfigurationError):
    """Modulus is prime but not congruent to 3 (mod 4)."""
    pass


# ============================================================================
# CALL TIME
# ============================================================================

class UsageError(SlothError):
    """Required argument missing."""
    pass


class MalformedWitnessError(SlothError):
    """Witness is not a field element, or a proof could not be decoded."""
    pass


class ProofMismatchError(SlothError):
    """Proof does not check out."""
    pass


class HashMismatchError(ProofMismatchError):
    """Digest is not the hash of the presented witness."""
    pass


class VerificationFailedError(ProofMismatchError):
    """Reversed witness does not match the seed derived from the input."""
    pass


class ComputationCancelledError(SlothError):
    """Sequential loop stopped by the caller's cancel event."""
    pass
