"""
Gas fee estimation for EIP-1559 transactions.

Fees always come from the GasSettings passed in. The network base fee is
only consulted to warn when the configured max fee is below it; failing to
read it never blocks a transaction.
"""

from dataclasses import dataclass

from web3 import Web3

from .config import GasSettings
from .utils import get_logger, run_sync
from .wallet import WalletAccount

logger = get_logger(__name__)


@dataclass(frozen=True)
class GasFees:
    """Fee pair attached to a transaction, in wei."""

    max_fee_per_gas: int
    max_priority_fee_per_gas: int

    def as_tx_params(self) -> dict:
        return {
            "maxFeePerGas": self.max_fee_per_gas,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
        }


def fees_from_settings(settings: GasSettings) -> GasFees:
    """Convert the configured gwei values to wei."""
    return GasFees(
        max_fee_per_gas=int(Web3.to_wei(settings.max_fee, "gwei")),
        max_priority_fee_per_gas=int(Web3.to_wei(settings.priority_fee, "gwei")),
    )


class GasFeeEstimator:
    """Resolves the fee pair for a transaction."""

    async def estimate(self, account: WalletAccount, settings: GasSettings) -> GasFees:
        fees = fees_from_settings(settings)

        try:
            block = await run_sync(account.web3.eth.get_block, "latest")
            base_fee = block.get("baseFeePerGas")
        except Exception as e:
            logger.warning(
                f"⚠️ Failed to read network fee data, using configured settings: {e}"
            )
            return fees

        if base_fee is not None:
            logger.debug(
                f"Network base fee: {Web3.from_wei(base_fee, 'gwei')} gwei, "
                f"configured max fee: {settings.max_fee_gwei} gwei"
            )
            if base_fee > fees.max_fee_per_gas:
                logger.warning(
                    f"⚠️ Configured max fee {settings.max_fee_gwei} gwei is below the "
                    f"current base fee {Web3.from_wei(base_fee, 'gwei')} gwei; "
                    "the transaction may stay pending"
                )
        return fees
