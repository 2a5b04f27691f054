"""
Sloth Permutation Engine Tests
"""

import pytest
from gmpy2 import jacobi

from sloth.permutation import SlothPermutation

# p = 7: residues {1, 2, 4}, non-residues {3, 5, 6}
SIGMA_7 = {0: 0, 1: 2, 2: 1, 3: 4, 4: 3, 5: 6, 6: 5}
RHO_7 = {0: 0, 1: 6, 2: 4, 3: 5, 4: 2, 5: 3, 6: 1}


class TestConstruction:
    """Tests for engine construction."""

    def test_sqrt_exponent(self, fixed_prime):
        """Test (p+1)/4 is precomputed."""
        engine = SlothPermutation(fixed_prime)
        assert engine.p == fixed_prime
        assert engine.sqrt_exp == (fixed_prime + 1) // 4

    def test_rejects_wrong_congruence(self):
        """Test modulus ≡ 1 (mod 4) is refused."""
        with pytest.raises(ValueError):
            SlothPermutation(13)

    def test_immutable(self, tiny_engine):
        """Test attributes cannot be reassigned."""
        with pytest.raises(AttributeError):
            tiny_engine._p = 11

    def test_rejects_out_of_range(self, tiny_engine):
        """Test arguments outside [0, p-1] are refused."""
        with pytest.raises(ValueError):
            tiny_engine.tau(7)
        with pytest.raises(ValueError):
            tiny_engine.tau_inverse(-1)


class TestSigma:
    """Tests for the neighbour swap."""

    def test_table(self, tiny_engine):
        """Test sigma over all of F_7."""
        for x, expected in SIGMA_7.items():
            assert tiny_engine.sigma(x) == expected

    def test_zero_fixed(self, fixed_prime):
        """Test 0 is a fixed point and p-1 pairs with p-2."""
        engine = SlothPermutation(fixed_prime)
        assert engine.sigma(0) == 0
        assert engine.sigma(fixed_prime - 1) == fixed_prime - 2
        assert engine.sigma(fixed_prime - 2) == fixed_prime - 1

    def test_involution(self, random_primes, rng):
        """Test sigma(sigma(x)) == x."""
        for p in random_primes:
            engine = SlothPermutation(p)
            for _ in range(50):
                x = rng.randrange(p)
                assert engine.sigma_inverse(engine.sigma(x)) == x


class TestRho:
    """Tests for the parity-selected square root."""

    def test_table(self, tiny_engine):
        """Test rho over all of F_7."""
        for x, expected in RHO_7.items():
            assert tiny_engine.rho(x) == expected

    def test_zero(self, fixed_prime):
        """Test 0 maps to 0 both ways."""
        engine = SlothPermutation(fixed_prime)
        assert engine.rho(0) == 0
        assert engine.rho_inverse(0) == 0

    def test_residue_gets_even_root(self, fixed_prime, rng):
        """Test residues map to the even square root."""
        engine = SlothPermutation(fixed_prime)
        checked = 0
        while checked < 50:
            x = rng.randrange(1, fixed_prime)
            if jacobi(x, fixed_prime) != 1:
                continue
            y = engine.rho(x)
            assert y % 2 == 0
            assert (y * y) % fixed_prime == x
            checked += 1

    def test_non_residue_gets_odd_root(self, fixed_prime, rng):
        """Test non-residues map to the odd square root of -x."""
        engine = SlothPermutation(fixed_prime)
        checked = 0
        while checked < 50:
            x = rng.randrange(1, fixed_prime)
            if jacobi(x, fixed_prime) != -1:
                continue
            y = engine.rho(x)
            assert y % 2 == 1
            assert (y * y) % fixed_prime == fixed_prime - x
            checked += 1

    def test_rho_inverse_parity(self, tiny_engine):
        """Test rho^-1 squares even values and negates the square of odd ones."""
        assert tiny_engine.rho_inverse(2) == 4
        assert tiny_engine.rho_inverse(4) == 2
        assert tiny_engine.rho_inverse(3) == 5   # -(9 mod 7) = -2
        assert tiny_engine.rho_inverse(1) == 6

    def test_rho_is_bijection(self, tiny_engine):
        """Test rho permutes F_7."""
        images = {tiny_engine.rho(x) for x in range(7)}
        assert images == set(range(7))


class TestTau:
    """Tests for the iteration step."""

    def test_inverse_property_exhaustive(self):
        """Test tau^-1(tau(x)) == x for every element of small fields."""
        for p in (3, 7, 11, 19, 23, 31, 43, 47, 59, 67, 71, 79, 83, 103, 107, 127):
            engine = SlothPermutation(p)
            for x in range(p):
                assert engine.tau_inverse(engine.tau(x)) == x
                assert engine.tau(engine.tau_inverse(x)) == x

    @pytest.mark.timeout(60)
    def test_inverse_property_random(self, random_primes, rng):
        """Test tau^-1(tau(x)) == x on random elements of random primes."""
        for p in random_primes:
            engine = SlothPermutation(p)
            samples = [0, 1, 2, p - 2, p - 1] + [rng.randrange(p) for _ in range(200)]
            for x in samples:
                assert engine.tau_inverse(engine.tau(x)) == x

    def test_tau_composition(self, tiny_engine):
        """Test tau is rho after sigma."""
        for x in range(7):
            assert tiny_engine.tau(x) == RHO_7[SIGMA_7[x]]

    def test_known_step(self, fixed_prime):
        """Test one step from the zoo seed."""
        engine = SlothPermutation(fixed_prime)
        assert engine.tau(10541214805933966869) == 3922990843091613768
