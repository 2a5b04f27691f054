"""
Sloth Permutation Engine

The forward step tau = rho . sigma and its inverse over F_p, p ≡ 3 (mod 4).

- sigma: neighbour swap (1,2), (3,4), ..., (p-2, p-1), fixing 0
- rho:   modular square root; the parity of the chosen root records
         whether the argument was a residue (even) or a non-residue (odd)

rho costs one exponentiation by (p+1)/4, rho^-1 one squaring. Neither
step can be batched or skipped, so l applications take l sequential steps.
"""

import logging

# GMP is REQUIRED for the field arithmetic
try:
    from gmpy2 import mpz, powmod, jacobi, bit_test
except ImportError:
    raise ImportError(
        "gmpy2 (GMP bindings) required for Sloth field arithmetic. "
        "Install with: pip install gmpy2"
    )

logger = logging.getLogger(__name__)


class SlothPermutation:
    """
    Permutation engine bound to one prime.

    Holds no mutable state; one instance may serve any number of threads.
    The prime is assumed validated by the caller (see SlothVDF).
    """

    __slots__ = ("_p", "_sqrt_exp")

    def __init__(self, p: int):
        p = mpz(p)
        if p < 3 or p % 4 != 3:
            raise ValueError(f"modulus must be ≡ 3 (mod 4): {p}")

        object.__setattr__(self, "_p", p)
        object.__setattr__(self, "_sqrt_exp", (p + 1) // 4)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def p(self) -> int:
        return int(self._p)

    @property
    def sqrt_exp(self) -> int:
        """(p+1)/4, the principal square-root exponent."""
        return int(self._sqrt_exp)

    def _element(self, x) -> mpz:
        x = mpz(x)
        if x < 0 or x >= self._p:
            raise ValueError(f"not a field element mod {self._p}: {x}")
        return x

    # ------------------------------------------------------------------
    # sigma
    # ------------------------------------------------------------------

    def sigma(self, x) -> mpz:
        """Swap x with its neighbour: even x -> x-1, odd x -> x+1, 0 -> 0."""
        x = self._element(x)
        if x == 0:
            return x
        if not bit_test(x, 0):
            return x - 1
        # odd x <= p-2, so x+1 <= p-1 stays reduced
        return x + 1

    def sigma_inverse(self, x) -> mpz:
        """sigma is an involution."""
        return self.sigma(x)

    # ------------------------------------------------------------------
    # rho
    # ------------------------------------------------------------------

    def rho(self, x) -> mpz:
        """
        Parity-selected square root.

        Residue x:      the even root of x.
        Non-residue x:  the odd root of -x (p ≡ 3 mod 4 makes -x a residue).
        x = 0:          0.
        """
        x = self._element(x)
        symbol = jacobi(x, self._p)

        if symbol == 0:
            return x

        if symbol == 1:
            root = powmod(x, self._sqrt_exp, self._p)
            want_odd = False
        else:
            root = powmod(self._p - x, self._sqrt_exp, self._p)
            want_odd = True

        # exactly one of root, p-root is odd because p is odd
        if bool(bit_test(root, 0)) == want_odd:
            return root
        return self._p - root

    def rho_inverse(self, y) -> mpz:
        """y^2 for even y, -y^2 for odd y."""
        y = self._element(y)
        square = powmod(y, 2, self._p)
        if not bit_test(y, 0):
            return square
        return (-square) % self._p

    # ------------------------------------------------------------------
    # tau
    # ------------------------------------------------------------------

    def tau(self, x) -> mpz:
        """Forward step: rho(sigma(x))."""
        return self.rho(self.sigma(x))

    def tau_inverse(self, y) -> mpz:
        """Inverse step: sigma(rho^-1(y))."""
        return self.sigma_inverse(self.rho_inverse(y))

    def __repr__(self) -> str:
        return f"SlothPermutation(p={self.p:#x})"
