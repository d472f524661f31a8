"""Protocol constants for the batch-transfer contracts.

Centralizes limits, fee units and deployment defaults.
"""

# The all-zero address: invalid as a recipient or token, and the token
# reference used for native currency in EmergencyWithdraw events
ZERO_ADDRESS = "0x" + "00" * 20

# Maximum recipients per batch call. Keeps a batch inside the per-call
# execution budget; it also bounds the index arithmetic in the payout loops.
MAX_RECIPIENTS = 200

# Fee percentages are expressed in hundredths of a percent:
# 10 = 0.1%, 100 = 1%.
FEE_SCALE = 10_000
MAX_FEE_PERCENTAGE = 100
DEFAULT_FEE_PERCENTAGE = 10

# Leading byte of the CREATE2 preimage (EIP-1014)
CREATE2_PREFIX = b"\xff"

# Salt label used by the deployment tooling for the canonical instance
DEFAULT_SALT_LABEL = "MultiSender-v1.0.0"

# Local development chain id (Hardhat / Anvil default)
DEFAULT_CHAIN_ID = 31337

# 1 ether in wei
ETHER = 10**18

__all__ = [
    "CREATE2_PREFIX",
    "DEFAULT_CHAIN_ID",
    "DEFAULT_FEE_PERCENTAGE",
    "DEFAULT_SALT_LABEL",
    "ETHER",
    "FEE_SCALE",
    "MAX_FEE_PERCENTAGE",
    "MAX_RECIPIENTS",
    "ZERO_ADDRESS",
]
