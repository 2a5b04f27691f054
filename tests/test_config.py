"""
Sloth Configuration Tests
"""

import pytest

from sloth.config import LogConfig, SlothConfig, VDFConfig
from sloth.constants import DEFAULT_ITERATIONS, DEFAULT_PRIME_BITS
from sloth.errors import NotPrimeError


class TestDefaults:
    """Tests for default configurations."""

    def test_default(self):
        """Test production defaults."""
        config = SlothConfig.default()
        assert config.vdf.prime_bits == DEFAULT_PRIME_BITS
        assert config.vdf.iterations == DEFAULT_ITERATIONS
        assert config.vdf.hash_name == "sha256"
        assert config.validate() == []

    def test_testing(self):
        """Test small testing defaults."""
        config = SlothConfig.default_testing()
        assert config.vdf.prime_bits == 64
        assert config.vdf.iterations == 1000
        assert config.validate() == []


class TestValidation:
    """Tests for configuration validation."""

    def test_collects_errors(self):
        """Test every problem is reported."""
        config = SlothConfig(
            vdf=VDFConfig(prime_bits=1, iterations=0, hash_name="md5", primality_rounds=0, prime="zz"),
            log=LogConfig(level="LOUD"),
        )
        errors = config.validate()
        assert len(errors) == 6

    def test_prime_literals(self):
        """Test decimal and hex primes parse."""
        assert VDFConfig(prime="0xFFFFFFFFFFFFFF43").prime_value() == 18446744073709551427
        assert VDFConfig(prime="18446744073709551427").prime_value() == 18446744073709551427
        assert VDFConfig().prime_value() is None

    def test_integer_prime(self):
        """Test an integer prime is used as-is."""
        config = SlothConfig(vdf=VDFConfig(prime=18446744073709551427, iterations=5))
        assert config.vdf.prime_value() == 18446744073709551427
        assert config.validate() == []
        assert config.build_vdf().prime == 18446744073709551427

    def test_mistyped_values(self):
        """Test wrongly typed values are reported, not raised."""
        config = SlothConfig(
            vdf=VDFConfig(prime_bits="64", iterations="five", hash_name=None, primality_rounds=1.5, prime=True),
            log=LogConfig(level=10),
        )
        assert len(config.validate()) == 6


class TestPersistence:
    """Tests for JSON save/load."""

    def test_round_trip(self, tmp_path):
        """Test saved configs load back equal."""
        config = SlothConfig.default_testing()
        config.vdf.prime = "0xFFFFFFFFFFFFFF43"
        config.log.file = str(tmp_path / "sloth.log")

        path = tmp_path / "sloth.json"
        config.save(str(path))
        loaded = SlothConfig.load(str(path))

        assert loaded == config
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file(self, tmp_path):
        """Test missing sections fall back to defaults."""
        path = tmp_path / "partial.json"
        path.write_text('{"vdf": {"iterations": 42}}')

        loaded = SlothConfig.load(str(path))
        assert loaded.vdf.iterations == 42
        assert loaded.vdf.prime_bits == DEFAULT_PRIME_BITS
        assert loaded.log == LogConfig()


class TestBuild:
    """Tests for building instances from configuration."""

    def test_fixed_prime(self, fixed_prime):
        """Test a configured prime is used as-is."""
        config = SlothConfig.default_testing()
        config.vdf.prime = str(fixed_prime)
        vdf = config.build_vdf()
        assert vdf.prime == fixed_prime
        assert vdf.iterations == 1000

    def test_generated_prime(self):
        """Test a prime is generated when none is configured."""
        config = SlothConfig.default_testing()
        config.vdf.prime_bits = 32
        vdf = config.build_vdf()
        assert vdf.prime.bit_length() == 32
        assert vdf.prime % 4 == 3

    def test_configured_prime_revalidated(self):
        """Test a bad configured prime fails construction."""
        config = SlothConfig.default_testing()
        config.vdf.prime = "9"
        with pytest.raises(NotPrimeError):
            config.build_vdf()
