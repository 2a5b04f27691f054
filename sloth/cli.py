"""
Sloth VDF demonstration driver.

Generates (or reads) a prime, runs one compute/verify cycle with timings,
then shows that a wrong input is rejected.
"""

import argparse
import sys
import time
from typing import List, Optional

from sloth.config import SlothConfig, setup_logging
from sloth.constants import DEMO_INPUT, DEMO_WRONG_INPUT
from sloth.errors import ProofMismatchError, SlothError
from sloth.hashing import HASH_FUNCTIONS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sloth VDF compute/verify demo")
    parser.add_argument("--config", metavar="PATH", help="JSON configuration file")
    parser.add_argument("--bits", type=int, help="Prime size in bits (default 256)")
    parser.add_argument("--iterations", type=int, help="Delay parameter (default 100000)")
    parser.add_argument("--prime", help="Use this prime instead of generating one (decimal or 0x-hex)")
    parser.add_argument("--hash", choices=sorted(HASH_FUNCTIONS), help="Hash function (default sha256)")
    parser.add_argument("--input", default=DEMO_INPUT, help="Message to delay")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    return parser


def load_config(args: argparse.Namespace) -> SlothConfig:
    """Config file first, command-line flags on top."""
    config = SlothConfig.load(args.config) if args.config else SlothConfig.default()
    if not args.config:
        config.log.level = "WARNING"

    if args.bits is not None:
        config.vdf.prime_bits = args.bits
    if args.iterations is not None:
        config.vdf.iterations = args.iterations
    if args.prime is not None:
        config.vdf.prime = args.prime
    if args.hash is not None:
        config.vdf.hash_name = args.hash
    if args.log_level is not None:
        config.log.level = args.log_level

    return config


def run(config: SlothConfig, message: bytes) -> None:
    """One compute/verify cycle, printed."""
    if config.vdf.prime_value() is None:
        print(f"Searching for a {config.vdf.prime_bits}-bit prime p where p ≡ 3 (mod 4)...\n")

    vdf = config.build_vdf()

    print("VDF Sloth PoC")
    print(f"Prime (p): {vdf.prime}")
    print(f"Iterations (l): {vdf.iterations}\n")
    print(f"Input message: \"{message.decode(errors='replace')}\"\n")

    print("Computing VDF... (this will take a moment)")
    start = time.perf_counter()
    digest, witness = vdf.compute(message)
    compute_time = time.perf_counter() - start

    print(f"Compute successful in {compute_time:.3f}s")
    print(f"  - Final Hash (g): {digest.hex()}")
    print(f"  - Witness    (w): {witness:x}\n")

    print("Verifying VDF...")
    start = time.perf_counter()
    verified = vdf.verify(message, digest, witness)
    verify_time = time.perf_counter() - start

    print(f"Verification result: {verified}")
    print(f"Verify successful in {verify_time:.3f}s\n")

    if verify_time > 0:
        print(f"Time comparison: Compute took {compute_time / verify_time:.2f} times longer than Verify.")

    print("\n--- Testing verification with wrong input ---")
    try:
        vdf.verify(DEMO_WRONG_INPUT.encode(), digest, witness)
        print("Verification with wrong input unexpectedly succeeded.")
    except ProofMismatchError as e:
        print(f"Verification with wrong input failed as expected: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: cannot load configuration: {e}", file=sys.stderr)
        return 1

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    setup_logging(config.log)

    try:
        run(config, args.input.encode())
    except SlothError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
