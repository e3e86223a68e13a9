"""
Auto sequence: swap USDC to R2USD, then stake the R2USD received.

The stake amount is the wallet's whole R2USD balance read after the swap,
never the USDC amount that went in.
"""

from decimal import Decimal

from .balances import BalanceReader
from .config import GasSettings
from .constants import ActionKind, TokenSymbol
from .executor import ActionExecutor
from .types import ExecutionResult
from .utils import format_amount, get_logger
from .wallet import WalletAccount

logger = get_logger(__name__)


class AutoSequence:
    """Composes swap-in and stake into one unit of work."""

    def __init__(self, executor: ActionExecutor, balance_reader: BalanceReader):
        self.executor = executor
        self.balance_reader = balance_reader

    async def run(
        self, account: WalletAccount, amount: Decimal, settings: GasSettings
    ) -> ExecutionResult:
        """
        Swap `amount` USDC and stake the resulting R2USD balance.

        Returns:
            Successful result only if both the swap and the stake succeed;
            a failed swap means no stake is attempted
        """
        logger.info(
            f"Starting auto sequence: Swap {amount} USDC → R2USD, then stake R2USD"
        )

        swap_result = await self.executor.swap_in(account, amount, settings)
        if not swap_result.success:
            logger.error("❌ Auto sequence failed at swap step")
            return ExecutionResult(
                success=False,
                action=ActionKind.AUTO_SEQUENCE,
                wallet=account.address,
                amount=amount,
                tx_hash=swap_result.tx_hash,
                error=f"swap step failed: {swap_result.error}",
            )

        logger.info("✅ Swap completed successfully, proceeding to stake")
        r2usd_balance = await self.balance_reader.get_balance(
            account, TokenSymbol.R2USD
        )
        logger.info(f"💰 Current R2USD balance: {format_amount(r2usd_balance)}")

        if r2usd_balance <= 0:
            logger.error("❌ Auto sequence failed: no R2USD balance to stake")
            return ExecutionResult(
                success=False,
                action=ActionKind.AUTO_SEQUENCE,
                wallet=account.address,
                amount=amount,
                tx_hash=swap_result.tx_hash,
                error="no R2USD balance to stake after swap",
            )

        stake_result = await self.executor.stake(account, r2usd_balance, settings)
        if not stake_result.success:
            logger.error("❌ Auto sequence failed at stake step")
            return ExecutionResult(
                success=False,
                action=ActionKind.AUTO_SEQUENCE,
                wallet=account.address,
                amount=amount,
                tx_hash=stake_result.tx_hash,
                error=f"stake step failed: {stake_result.error}",
            )

        logger.info("✅ Auto sequence completed successfully!")
        return ExecutionResult(
            success=True,
            action=ActionKind.AUTO_SEQUENCE,
            wallet=account.address,
            amount=amount,
            tx_hash=stake_result.tx_hash,
        )
