"""
Constants and enums for the R2 money bot.

Token and contract addresses, method selectors and network parameters of the
deployed Sepolia contract set. None of these are discovered at runtime.
"""

from enum import Enum

from web3 import Web3

# Network
RPC_URL = "https://ethereum-sepolia-rpc.publicnode.com"
CHAIN_ID = 11155111
NETWORK_NAME = "sepolia"
EXPLORER_URL = "https://sepolia.etherscan.io"

# Tokens
USDC_ADDRESS = Web3.to_checksum_address("0xef84994ef411c4981328ffce5fda41cd3803fae4")
R2USD_ADDRESS = Web3.to_checksum_address("0x20c54c5f742f123abb49a982bfe0af47edb38756")
SR2USD_ADDRESS = Web3.to_checksum_address("0xbd6b25c4132f09369c354bee0f7be777d7d434fa")

# Contracts
USDC_TO_R2USD_CONTRACT = Web3.to_checksum_address(
    "0x20c54c5f742f123abb49a982bfe0af47edb38756"
)
R2USD_TO_USDC_CONTRACT = Web3.to_checksum_address(
    "0x07abd582df3d3472aa687a0489729f9f0424b1e3"
)
STAKE_R2USD_CONTRACT = Web3.to_checksum_address(
    "0xbd6b25c4132f09369c354bee0f7be777d7d434fa"
)

# Method selectors
USDC_TO_R2USD_SELECTOR = "0x095e7a95"
R2USD_TO_USDC_SELECTOR = "0x3df02124"
STAKE_R2USD_SELECTOR = "0x1a5f0f00"

# Swap-out minimum output, as a percentage of the input amount
SWAP_OUT_MIN_OUTPUT_PCT = 97

# Zero tail appended to the stake call (288 bytes == 576 hex characters)
STAKE_ZERO_TAIL_BYTES = 288

# Gas defaults
DEFAULT_MAX_FEE_GWEI = "50"
DEFAULT_PRIORITY_FEE_GWEI = "2"
DEFAULT_APPROVAL_GAS_LIMIT = 100_000
DEFAULT_SWAP_GAS_LIMIT = 500_000
DEFAULT_STAKE_GAS_LIMIT = 100_000

# Credentials and transport
PRIVATE_KEY_ENV_PREFIX = "PRIVATE_KEY_"
PROXIES_FILE = "proxies.txt"
RPC_TIMEOUT_SEC = 30
RECEIPT_TIMEOUT_SEC = 600

# Operator prompts
BACK_SENTINEL = "back"
SKIP_SENTINEL = "skip"
ALL_WALLETS = "all"


class TokenSymbol(Enum):
    """Tokens handled by the bot."""

    ETH = "ETH"
    USDC = "USDC"
    R2USD = "R2USD"
    SR2USD = "sR2USD"


class MethodKind(Enum):
    """Fixed contract methods the calldata builder can encode."""

    SWAP_USDC_TO_R2USD = "swap_usdc_to_r2usd"
    SWAP_R2USD_TO_USDC = "swap_r2usd_to_usdc"
    STAKE_R2USD = "stake_r2usd"


class GasLimitKind(Enum):
    """Operation kinds that carry their own gas limit."""

    APPROVAL = "approval"
    SWAP = "swap"
    STAKE = "stake"


class ActionKind(Enum):
    """Actions the batch runner can repeat."""

    SWAP_IN = "swap_in"
    SWAP_OUT = "swap_out"
    STAKE = "stake"
    AUTO_SEQUENCE = "auto_sequence"
    SHOW_BALANCES = "show_balances"


TOKEN_ADDRESSES = {
    TokenSymbol.USDC: USDC_ADDRESS,
    TokenSymbol.R2USD: R2USD_ADDRESS,
    TokenSymbol.SR2USD: SR2USD_ADDRESS,
}
