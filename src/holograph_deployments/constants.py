"""Configuration constants for holograph-deployments library."""

# Name of the local development network in networks.json
LOCAL_NETWORK = "local"

# Token id probed by the sample mint script
# Non-local networks prefix token ids with the chain's 32-bit Holograph id
LOCAL_SAMPLE_TOKEN_ID = 1
REMOTE_SAMPLE_TOKEN_ID = 0xFFFFFFFE00000000000000000000000000000000000000000000000000000001

SAMPLE_TOKEN_URI = "https://sample.url/my.jpg"

# Contracts whose ABIs are merged into the sample mint contract handle
SAMPLE_ERC721 = "SampleERC721"
HOLOGRAPHER = "Holographer"
HOLOGRAPH_ERC721 = "HolographERC721"
HOLOGRAPH_GENESIS = "HolographGenesis"

# Fixed gas used by the sample mint script
SAMPLE_MINT_GAS = 1_000_000

DEFAULT_GAS_LIMIT_MULTIPLIER = 1.3

# Deploy function of the genesis factory contract
GENESIS_DEPLOY_SIGNATURE = "deploy(uint256,bytes12,bytes,bytes)"
GENESIS_DEPLOY_TYPES = ["uint256", "bytes12", "bytes", "bytes"]

# Number of trailing deployment salt bytes appended to the deployer address
GENESIS_SALT_BYTES = 12

# Default royalty basis points of collection contracts (1000 == 10%)
DEFAULT_CONTRACT_BPS = 1000
