"""
Sloth Verifiable Delay Function

Compute applies tau = rho . sigma l times to a seed derived from the input
and publishes hash(witness). Verify walks the witness back with tau^-1 and
compares against the seed.

Properties:
- Sequential: every step consumes the previous step's output
- Non-parallelizable: each step is a full modular exponentiation
- Verifiable: tau^-1 is a single squaring, so checking is cheaper per step

Reference: "A random zoo: sloth, unicorn, and trx" - A. Lenstra, B. Wesolowski, 2015
"""

from __future__ import annotations
import hmac
import logging
import struct
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Union

from gmpy2 import mpz

from sloth.constants import (
    CALIBRATION_ITERATIONS,
    PRIMALITY_ROUNDS,
    PROGRESS_INTERVAL,
)
from sloth.errors import (
    ComputationCancelledError,
    ConfigurationError,
    HashMismatchError,
    InvalidIterationsError,
    MalformedWitnessError,
    NotPrimeError,
    PrimeCongruenceError,
    ProofMismatchError,
    SlothError,
    UsageError,
    VerificationFailedError,
)
from sloth.hashing import (
    HashFunction,
    digest_to_element,
    element_to_bytes,
    get_hash_function,
    hash_name,
)
from sloth.permutation import SlothPermutation
from sloth.primes import generate_prime, is_probable_prime

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def _check_input(data) -> None:
    if data is None:
        raise UsageError("input cannot be None")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise UsageError(f"input must be bytes, got {type(data).__name__}")


# ============================================================================
# PROOF STRUCTURE
# ============================================================================

@dataclass(frozen=True)
class SlothProof:
    """Sloth output container with serialization."""
    digest: bytes             # g = hash(w_l)
    witness: int              # w_l
    iterations: int           # l
    compute_time_ms: int = field(default=0, compare=False)  # Wall-clock time of the forward run

    def serialize(self) -> bytes:
        """Serialize proof to bytes."""
        witness_bytes = element_to_bytes(self.witness)

        data = bytearray()
        data.extend(struct.pack('<Q', self.iterations))
        data.extend(struct.pack('<I', self.compute_time_ms))
        data.extend(struct.pack('<H', len(self.digest)))
        data.extend(self.digest)
        data.extend(struct.pack('<H', len(witness_bytes)))
        data.extend(witness_bytes)
        return bytes(data)

    @classmethod
    def deserialize(cls, data: bytes) -> 'SlothProof':
        """
        Deserialize proof from bytes.

        Raises:
            MalformedWitnessError: Truncated or oversized input
        """
        try:
            offset = 0

            iterations = struct.unpack_from('<Q', data, offset)[0]
            offset += 8

            compute_time_ms = struct.unpack_from('<I', data, offset)[0]
            offset += 4

            digest_len = struct.unpack_from('<H', data, offset)[0]
            offset += 2
            digest = bytes(data[offset:offset + digest_len])
            offset += digest_len

            witness_len = struct.unpack_from('<H', data, offset)[0]
            offset += 2
            witness_bytes = bytes(data[offset:offset + witness_len])
            offset += witness_len
        except struct.error as e:
            raise MalformedWitnessError(f"Truncated proof: {e}") from e

        if len(digest) != digest_len or len(witness_bytes) != witness_len:
            raise MalformedWitnessError("Truncated proof")
        if offset != len(data):
            raise MalformedWitnessError(f"Trailing bytes in proof: {len(data) - offset}")

        return cls(
            digest=digest,
            witness=int.from_bytes(witness_bytes, 'big'),
            iterations=iterations,
            compute_time_ms=compute_time_ms,
        )

    def hex(self) -> str:
        """Hex of the digest."""
        return self.digest.hex()


# ============================================================================
# VDF
# ============================================================================

class SlothVDF:
    """
    Sloth VDF instance over a validated prime.

    Immutable after construction, so concurrent compute/verify calls on
    one instance need no locking; every call owns its own accumulator.
    """

    __slots__ = ("_prime", "_iterations", "_hash", "_engine")

    def __init__(
        self,
        prime: int,
        iterations: int,
        hash_func: Union[str, HashFunction, None] = None,
        rounds: int = PRIMALITY_ROUNDS
    ):
        """
        Validate domain parameters and precompute (p+1)/4.

        Args:
            prime: Modulus p, prime and ≡ 3 (mod 4)
            iterations: Delay parameter l, positive
            hash_func: Registered hash name or callable (default SHA-256)
            rounds: Primality test rounds

        Raises:
            InvalidIterationsError: iterations not a positive integer
            NotPrimeError: prime fails the primality test
            PrimeCongruenceError: prime % 4 != 3
            ConfigurationError: unknown hash function or rounds < 1
        """
        if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds < 1:
            raise ConfigurationError(f"rounds must be at least 1: {rounds!r}")

        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
            raise InvalidIterationsError(f"iterations must be positive: {iterations!r}")

        if isinstance(prime, bool) or not isinstance(prime, (int, mpz)):
            raise NotPrimeError(f"p must be an integer: {prime!r}")
        prime = int(prime)

        if not is_probable_prime(prime, rounds):
            raise NotPrimeError(f"p is not a prime number: {prime}")
        if prime % 4 != 3:
            raise PrimeCongruenceError(f"p must be congruent to 3 (mod 4), got {prime % 4}")

        object.__setattr__(self, "_prime", prime)
        object.__setattr__(self, "_iterations", iterations)
        object.__setattr__(self, "_hash", get_hash_function(hash_func))
        object.__setattr__(self, "_engine", SlothPermutation(prime))

        logger.info(
            f"Sloth VDF initialized: {prime.bit_length()}-bit prime, "
            f"{iterations:,} iterations, {hash_name(self._hash)}"
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def generate(
        cls,
        bits: int,
        iterations: int,
        hash_func: Union[str, HashFunction, None] = None,
        rounds: int = PRIMALITY_ROUNDS
    ) -> 'SlothVDF':
        """Create an instance over a freshly generated bits-bit prime."""
        return cls(generate_prime(bits, rounds=rounds), iterations, hash_func, rounds)

    @property
    def prime(self) -> int:
        return self._prime

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def hash_func(self) -> HashFunction:
        return self._hash

    @property
    def sqrt_exp(self) -> int:
        return self._engine.sqrt_exp

    @property
    def engine(self) -> SlothPermutation:
        return self._engine

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _seed(self, data: bytes) -> int:
        """w_0 = int(hash(data)) mod p."""
        return digest_to_element(self._hash(bytes(data)), self._prime)

    def _witness_digest(self, witness: int) -> bytes:
        return self._hash(element_to_bytes(witness))

    # ------------------------------------------------------------------
    # compute
    # ------------------------------------------------------------------

    def compute(
        self,
        data: bytes,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> Tuple[bytes, int]:
        """
        Evaluate the VDF.

        This is the sequential computation; each step needs the previous
        output.

        Args:
            data: Input bytes
            progress_callback: Optional callback(current, total)
            cancel_event: Optional event checked between iterations

        Returns:
            Tuple of (digest, witness)

        Raises:
            UsageError: data is None or not bytes-like
            ComputationCancelledError: cancel_event was set
        """
        _check_input(data)

        tau = self._engine.tau
        total = self._iterations

        w = mpz(self._seed(data))
        for i in range(total):
            if cancel_event is not None and cancel_event.is_set():
                raise ComputationCancelledError(f"Cancelled after {i:,}/{total:,} iterations")

            w = tau(w)

            if progress_callback and (i + 1) % PROGRESS_INTERVAL == 0:
                progress_callback(i + 1, total)

        witness = int(w)
        return self._witness_digest(witness), witness

    def prove(
        self,
        data: bytes,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> SlothProof:
        """compute() packaged as a SlothProof with its elapsed time."""
        start = time.perf_counter()
        digest, witness = self.compute(data, progress_callback, cancel_event)
        elapsed = time.perf_counter() - start

        logger.info(f"Sloth computation complete: {self._iterations:,} iterations in {elapsed:.3f}s")

        return SlothProof(
            digest=digest,
            witness=witness,
            iterations=self._iterations,
            compute_time_ms=int(elapsed * 1000),
        )

    # ------------------------------------------------------------------
    # verify
    # ------------------------------------------------------------------

    def verify(self, data: bytes, digest: bytes, witness: int) -> bool:
        """
        Verify a (digest, witness) pair against the input.

        Args:
            data: Original input
            digest: Digest returned by compute
            witness: Witness returned by compute

        Returns:
            True if the proof is valid

        Raises:
            UsageError: Any argument is None, or data or digest is not bytes
            MalformedWitnessError: witness is not in [0, p-1]
            HashMismatchError: digest != hash(witness)
            VerificationFailedError: tau^-l(witness) != seed(data)
        """
        _check_input(data)
        if digest is None:
            raise UsageError("digest cannot be None")
        if witness is None:
            raise UsageError("witness cannot be None")
        if not isinstance(digest, (bytes, bytearray, memoryview)):
            raise UsageError(f"digest must be bytes, got {type(digest).__name__}")

        if isinstance(witness, bool) or not isinstance(witness, (int, mpz)):
            raise MalformedWitnessError(f"witness must be an integer, got {type(witness).__name__}")
        witness = int(witness)
        if witness < 0 or witness >= self._prime:
            raise MalformedWitnessError("witness must be in the range [0, p-1]")

        # Cheap check first: does the witness belong to this digest at all
        if not hmac.compare_digest(bytes(digest), self._witness_digest(witness)):
            raise HashMismatchError("hash of witness does not match provided digest")

        tau_inverse = self._engine.tau_inverse
        w = mpz(witness)
        for _ in range(self._iterations):
            w = tau_inverse(w)

        expected = self._seed(data)
        if w != expected:
            raise VerificationFailedError(
                f"reversed witness {int(w):#x} does not match initial value {expected:#x}"
            )

        return True

    def verify_proof(self, data: bytes, proof: SlothProof) -> bool:
        """Verify a SlothProof produced by prove() or deserialized from bytes."""
        if proof is None:
            raise UsageError("proof cannot be None")
        if proof.iterations != self._iterations:
            raise VerificationFailedError(
                f"proof made with {proof.iterations:,} iterations, instance uses {self._iterations:,}"
            )
        return self.verify(data, proof.digest, proof.witness)

    def is_valid(self, data: bytes, digest: bytes, witness: int) -> bool:
        """verify() that reports failure as False instead of raising."""
        try:
            return self.verify(data, digest, witness)
        except ProofMismatchError as e:
            logger.debug(f"Sloth verification failed: {e}")
            return False
        except SlothError as e:
            logger.warning(f"Sloth proof rejected: {e}")
            return False

    # ------------------------------------------------------------------
    # calibration
    # ------------------------------------------------------------------

    def estimate_iterations(
        self,
        target_seconds: float,
        sample_iterations: int = CALIBRATION_ITERATIONS
    ) -> int:
        """
        Estimate the iteration count whose compute takes target_seconds.

        Times sample_iterations forward steps and extrapolates linearly.
        """
        if target_seconds <= 0:
            raise ValueError(f"target_seconds must be positive: {target_seconds}")
        if sample_iterations <= 0:
            raise ValueError(f"sample_iterations must be positive: {sample_iterations}")

        tau = self._engine.tau
        w = mpz(self._seed(b"sloth_calibration"))

        start = time.perf_counter()
        for _ in range(sample_iterations):
            w = tau(w)
        elapsed = time.perf_counter() - start

        ips = sample_iterations / max(elapsed, 1e-9)
        estimate = max(1, int(ips * target_seconds))

        logger.info(f"Calibration: {ips:,.0f} iter/sec, {estimate:,} iterations for {target_seconds}s")
        return estimate

    def __repr__(self) -> str:
        return (
            f"SlothVDF(bits={self._prime.bit_length()}, iterations={self._iterations}, "
            f"hash={hash_name(self._hash)})"
        )
