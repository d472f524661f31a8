#!/usr/bin/env python3
"""Predict the MultiSender address a factory deploys for a salt.

The factory address is either given directly or derived from the account and
nonce that deploy it. Running the same command for every target network shows
the address the instance will have on all of them.

Usage:
    python scripts/calculate_address.py --factory 0x3A1E6E96563ef2237ddFf406Dcd0A0Ea57d43CA0

    # Factory not deployed yet: derive it from the deployer's next nonce
    python scripts/calculate_address.py --deployer 0xf39F...2266 --nonce 0 --label MultiSender-v1.0.0
"""

import argparse
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from multisender.constants import DEFAULT_SALT_LABEL  # noqa: E402
from multisender.contracts.factory import compute_multi_sender_address  # noqa: E402
from multisender.contracts.multi_sender import MultiSender  # noqa: E402
from multisender.create2 import create_address, salt_from_label  # noqa: E402
from multisender.models.types import normalize_salt, to_checksum_address  # noqa: E402

logger = structlog.get_logger()


def main() -> int:
    parser = argparse.ArgumentParser(description="Calculate a MultiSender CREATE2 address")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--factory", help="Deployed factory address")
    target.add_argument("--deployer", help="Account that deploys (or deployed) the factory")
    parser.add_argument(
        "--nonce",
        type=int,
        default=0,
        help="Deployer nonce of the factory deployment (with --deployer)",
    )
    salt_group = parser.add_mutually_exclusive_group()
    salt_group.add_argument("--salt", help="32-byte salt as hex")
    salt_group.add_argument(
        "--label",
        default=DEFAULT_SALT_LABEL,
        help=f"Salt label hashed with keccak256 (default: {DEFAULT_SALT_LABEL})",
    )
    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
    )

    try:
        if args.factory:
            factory = to_checksum_address(args.factory)
        else:
            factory = to_checksum_address(create_address(args.deployer, args.nonce))
        salt = normalize_salt(args.salt) if args.salt else salt_from_label(args.label)
    except ValueError as err:
        logger.error("invalid_input", error=str(err))
        return 1

    address = to_checksum_address(compute_multi_sender_address(factory, salt))
    logger.info("address_calculated", factory=factory, salt=salt, address=address)

    print("=" * 60)
    print(f"Factory:          {factory}")
    if not args.salt:
        print(f"Salt label:       {args.label}")
    print(f"Salt:             {salt}")
    print(f"Init code hash:   0x{MultiSender.init_code_hash().hex()}")
    print(f"MultiSender:      {address}")
    print("=" * 60)
    print("Same factory address and salt give the same MultiSender address on every network.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
