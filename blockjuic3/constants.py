"""Constants shared across the blockjuic3 plugin."""

# Public Base RPC, overridden by BASE_RPC_URL
DEFAULT_BASE_RPC_URL = "https://mainnet.base.org"

# Price oracle (DefiLlama coins API)
DEFAULT_PRICE_ORACLE_URL = "https://coins.llama.fi"
PRICE_ORACLE_SERVICE_NAME = "defillama"

# Multicall3 is deployed at the same address on every supported chain
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

# Block tag used for single-block snapshots
LATEST_BLOCK = "latest"

# Used when a token has no decimals
DEFAULT_DECIMALS = 18

NO_SWAPS_FOUND = "No swaps found"
