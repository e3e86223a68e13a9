"""
Batch runner: repeat one action across wallets, strictly in sequence.

Wallets are processed one after another and repetitions within a wallet run
in order. A failed attempt is logged and the next one starts; nothing below
this level stops the batch.
"""

from decimal import Decimal
from typing import Callable, Optional, Sequence

from .balances import BalanceReader
from .config import GasSettings
from .constants import ActionKind
from .display import balances_table
from .executor import ACTION_SPECS, ActionExecutor
from .sequence import AutoSequence
from .types import BatchReport, ExecutionResult
from .utils import format_duration, get_current_timestamp, get_logger, sentence_case
from .wallet import WalletAccount

logger = get_logger(__name__)

ACTION_LABELS = {
    ActionKind.SWAP_IN: "USDC to R2USD swap",
    ActionKind.SWAP_OUT: "R2USD to USDC swap",
    ActionKind.STAKE: "staking transaction",
    ActionKind.AUTO_SEQUENCE: "auto sequence",
    ActionKind.SHOW_BALANCES: "balance check",
}


class BatchRunner:
    """Drives N repetitions of an action for each selected wallet."""

    def __init__(
        self,
        executor: ActionExecutor,
        sequence: AutoSequence,
        balance_reader: BalanceReader,
        output: Callable[[str], None] = print,
    ):
        self.executor = executor
        self.sequence = sequence
        self.balance_reader = balance_reader
        self.output = output

    async def run_once(
        self,
        action: ActionKind,
        account: WalletAccount,
        amount: Optional[Decimal],
        settings: GasSettings,
    ) -> ExecutionResult:
        """Run a single attempt of `action`; never raises."""
        try:
            if action is ActionKind.AUTO_SEQUENCE:
                return await self.sequence.run(account, amount, settings)
            if action is ActionKind.SHOW_BALANCES:
                balances = await self.balance_reader.get_balances(account)
                self.output(f"\nWallet: {account.address}")
                self.output(balances_table(balances))
                return ExecutionResult(
                    success=True, action=action, wallet=account.address
                )
            return await self.executor.execute(action, account, amount, settings)
        except Exception as e:
            logger.exception(
                f"❌ {ACTION_LABELS[action]} crashed for {account.address}: {e}"
            )
            return ExecutionResult(
                success=False,
                action=action,
                wallet=account.address,
                amount=amount,
                error=str(e),
            )

    async def run(
        self,
        accounts: Sequence[WalletAccount],
        action: ActionKind,
        amount: Optional[Decimal],
        repetitions: int,
        settings: GasSettings,
    ) -> BatchReport:
        """
        Execute `action` `repetitions` times for every wallet.

        Args:
            accounts: Wallets in processing order
            action: Action to repeat
            amount: Amount per attempt in input-token units (unused for balances)
            repetitions: Attempts per wallet
            settings: Gas settings for every attempt of this batch

        Returns:
            BatchReport with per-wallet attempt and success counts
        """
        if repetitions <= 0:
            raise ValueError(f"repetitions must be positive, got {repetitions}")

        label = ACTION_LABELS[action]
        unit = ""
        if action in ACTION_SPECS:
            unit = f" {ACTION_SPECS[action].input_token.value}"
        elif action is ActionKind.AUTO_SEQUENCE:
            unit = " USDC"

        report = BatchReport(action=action, repetitions=repetitions)
        start_time = get_current_timestamp()

        for account in accounts:
            logger.info(f"Processing wallet: {account.address}")
            report.attempts[account.address] = 0
            report.successes[account.address] = 0

            for i in range(1, repetitions + 1):
                progress = f"[{i}/{repetitions}]"
                if amount is not None:
                    logger.info(f"{progress} Executing {label} (Amount: {amount}{unit})")
                else:
                    logger.info(f"{progress} Executing {label}")

                result = await self.run_once(action, account, amount, settings)
                report.results.append(result)
                report.attempts[account.address] += 1

                if result.success:
                    report.successes[account.address] += 1
                    logger.info(
                        f"✅ {progress} {sentence_case(label)} completed successfully!"
                    )
                else:
                    logger.error(
                        f"❌ {progress} {sentence_case(label)} failed. "
                        "Continuing to next transaction."
                    )

            logger.info(
                f"✅ Completed {report.attempts[account.address]} {label}(s) "
                f"for wallet {account.address}."
            )

        elapsed = get_current_timestamp() - start_time
        logger.info(
            f"Batch finished: {report.total_successes}/{report.total_attempts} "
            f"succeeded across {len(report.attempts)} wallet(s) "
            f"in {format_duration(elapsed)}"
        )
        return report
