"""
Sloth VDF Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Union

from sloth.constants import (
    DEFAULT_HASH,
    DEFAULT_ITERATIONS,
    DEFAULT_PRIME_BITS,
    MIN_PRIME_BITS,
    PRIMALITY_ROUNDS,
    TESTING_ITERATIONS,
    TESTING_PRIME_BITS,
)
from sloth.hashing import HASH_FUNCTIONS
from sloth.vdf import SlothVDF

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class VDFConfig:
    """Domain and delay parameters."""
    prime_bits: int = DEFAULT_PRIME_BITS
    iterations: int = DEFAULT_ITERATIONS
    hash_name: str = DEFAULT_HASH
    primality_rounds: int = PRIMALITY_ROUNDS
    prime: Optional[Union[str, int]] = None  # Fixed prime, integer or decimal/0x-hex string; generated when None

    def prime_value(self) -> Optional[int]:
        """Parse the fixed prime, if any."""
        if self.prime is None:
            return None
        if isinstance(self.prime, bool):
            raise TypeError(f"prime must be an integer or string, got {self.prime!r}")
        if isinstance(self.prime, int):
            return self.prime
        return int(self.prime, 0)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class SlothConfig:
    """
    Complete configuration.

    All settings for building and running a Sloth VDF instance.
    """
    vdf: VDFConfig = field(default_factory=VDFConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not _is_int(self.vdf.prime_bits) or self.vdf.prime_bits < MIN_PRIME_BITS:
            errors.append(f"prime_bits must be an integer of at least {MIN_PRIME_BITS}: {self.vdf.prime_bits!r}")

        if not _is_int(self.vdf.iterations) or self.vdf.iterations < 1:
            errors.append(f"iterations must be a positive integer: {self.vdf.iterations!r}")

        if not isinstance(self.vdf.hash_name, str) or self.vdf.hash_name.lower() not in HASH_FUNCTIONS:
            errors.append(f"Unknown hash function: {self.vdf.hash_name!r}")

        if not _is_int(self.vdf.primality_rounds) or self.vdf.primality_rounds < 1:
            errors.append(f"primality_rounds must be an integer of at least 1: {self.vdf.primality_rounds!r}")

        if self.vdf.prime is not None:
            try:
                self.vdf.prime_value()
            except (TypeError, ValueError):
                errors.append(f"Invalid prime literal: {self.vdf.prime!r}")

        if not isinstance(self.log.level, str) or not isinstance(getattr(logging, self.log.level.upper(), None), int):
            errors.append(f"Invalid log level: {self.log.level!r}")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "SlothConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls()

        if "vdf" in data:
            config.vdf = VDFConfig(**data["vdf"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default(cls) -> "SlothConfig":
        """Production-sized parameters."""
        return cls()

    @classmethod
    def default_testing(cls) -> "SlothConfig":
        """Small prime and short delay for tests and demos."""
        config = cls()
        config.vdf.prime_bits = TESTING_PRIME_BITS
        config.vdf.iterations = TESTING_ITERATIONS
        config.log.level = "DEBUG"
        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "vdf": asdict(self.vdf),
            "log": asdict(self.log),
        }

    def build_vdf(self) -> SlothVDF:
        """
        Build a SlothVDF from this configuration.

        A configured prime is re-validated here like any other caller-supplied
        prime; otherwise a fresh one is generated.
        """
        prime = self.vdf.prime_value()
        if prime is None:
            return SlothVDF.generate(
                self.vdf.prime_bits,
                self.vdf.iterations,
                self.vdf.hash_name,
                self.vdf.primality_rounds,
            )
        return SlothVDF(prime, self.vdf.iterations, self.vdf.hash_name, self.vdf.primality_rounds)


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
        force=True,
    )
