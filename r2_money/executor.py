"""
Action executors for the swap-in, swap-out and stake operations.

Every action follows the same approve-then-act protocol:

1. Read the input token balance; fail without submitting if it is short
2. Ensure the target contract's allowance, approving the exact amount if needed
3. Build the method calldata
4. Resolve fees and submit with the operation's gas limit
5. Wait for the receipt; a reverted receipt is a failure
6. Re-read and log the balances of both tokens involved

Executors never raise: every error is logged and returned as a failed
ExecutionResult so a batch can move on to the next attempt.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .allowance import AllowanceManager
from .balances import BalanceReader
from .calldata import CalldataBuilder, min_output_for
from .config import GasSettings
from .constants import (
    R2USD_TO_USDC_CONTRACT,
    STAKE_R2USD_CONTRACT,
    TOKEN_ADDRESSES,
    USDC_TO_R2USD_CONTRACT,
    ActionKind,
    GasLimitKind,
    MethodKind,
    TokenSymbol,
)
from .exceptions import InsufficientBalanceError, R2MoneyError, TransactionError
from .gas import GasFeeEstimator
from .transactions import TransactionSender
from .types import ContractEndpoint, ExecutionResult
from .utils import (
    format_amount,
    from_base_units,
    get_logger,
    sentence_case,
    to_base_units,
    tx_link,
)
from .wallet import WalletAccount

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionSpec:
    """Static description of one executable action."""

    action: ActionKind
    label: str
    input_token: TokenSymbol
    output_token: TokenSymbol
    endpoint: ContractEndpoint
    method: MethodKind
    gas_kind: GasLimitKind


ACTION_SPECS = {
    ActionKind.SWAP_IN: ActionSpec(
        action=ActionKind.SWAP_IN,
        label="USDC to R2USD swap",
        input_token=TokenSymbol.USDC,
        output_token=TokenSymbol.R2USD,
        endpoint=ContractEndpoint("USDC -> R2USD swap", USDC_TO_R2USD_CONTRACT),
        method=MethodKind.SWAP_USDC_TO_R2USD,
        gas_kind=GasLimitKind.SWAP,
    ),
    ActionKind.SWAP_OUT: ActionSpec(
        action=ActionKind.SWAP_OUT,
        label="R2USD to USDC swap",
        input_token=TokenSymbol.R2USD,
        output_token=TokenSymbol.USDC,
        endpoint=ContractEndpoint("R2USD -> USDC swap", R2USD_TO_USDC_CONTRACT),
        method=MethodKind.SWAP_R2USD_TO_USDC,
        gas_kind=GasLimitKind.SWAP,
    ),
    ActionKind.STAKE: ActionSpec(
        action=ActionKind.STAKE,
        label="R2USD staking",
        input_token=TokenSymbol.R2USD,
        output_token=TokenSymbol.SR2USD,
        endpoint=ContractEndpoint("R2USD -> sR2USD stake", STAKE_R2USD_CONTRACT),
        method=MethodKind.STAKE_R2USD,
        gas_kind=GasLimitKind.STAKE,
    ),
}


def _failure(
    action: ActionKind,
    account: WalletAccount,
    amount: Decimal,
    error: Exception,
    tx_hash: Optional[str] = None,
) -> ExecutionResult:
    return ExecutionResult(
        success=False,
        action=action,
        wallet=account.address,
        amount=amount,
        tx_hash=tx_hash,
        error=str(error),
    )


class ActionExecutor:
    """
    Executes single swap and stake actions for one wallet.

    Collaborators are injected so tests can replace the network-facing parts.
    """

    def __init__(
        self,
        balance_reader: BalanceReader,
        allowance_manager: AllowanceManager,
        calldata_builder: CalldataBuilder,
        gas_estimator: GasFeeEstimator,
        sender: TransactionSender,
    ):
        self.balance_reader = balance_reader
        self.allowance_manager = allowance_manager
        self.calldata_builder = calldata_builder
        self.gas_estimator = gas_estimator
        self.sender = sender

    async def swap_in(
        self, account: WalletAccount, amount: Decimal, settings: GasSettings
    ) -> ExecutionResult:
        """Swap USDC for R2USD."""
        return await self.execute(ActionKind.SWAP_IN, account, amount, settings)

    async def swap_out(
        self, account: WalletAccount, amount: Decimal, settings: GasSettings
    ) -> ExecutionResult:
        """Swap R2USD back to USDC with a 3% minimum-output tolerance."""
        return await self.execute(ActionKind.SWAP_OUT, account, amount, settings)

    async def stake(
        self, account: WalletAccount, amount: Decimal, settings: GasSettings
    ) -> ExecutionResult:
        """Stake R2USD for sR2USD."""
        return await self.execute(ActionKind.STAKE, account, amount, settings)

    async def execute(
        self,
        action: ActionKind,
        account: WalletAccount,
        amount: Decimal,
        settings: GasSettings,
    ) -> ExecutionResult:
        """
        Run one action end to end.

        Args:
            action: SWAP_IN, SWAP_OUT or STAKE
            account: Acting wallet
            amount: Input amount in token units
            settings: Gas settings for every transaction of this attempt

        Returns:
            ExecutionResult; success only if the action transaction was mined
            without revert
        """
        spec = ACTION_SPECS[action]
        symbol_in = spec.input_token.value
        try:
            tx_hash = await self._execute(spec, account, amount, settings)
        except InsufficientBalanceError as e:
            logger.error(f"❌ {e}")
            return _failure(action, account, amount, e)
        except TransactionError as e:
            link = ""
            if e.tx_hash:
                link = f" ({tx_link(e.tx_hash, self.sender.explorer_url)})"
            logger.error(
                f"❌ Failed {spec.label} of {amount} {symbol_in} for "
                f"{account.address}: {e}{link}"
            )
            return _failure(action, account, amount, e, tx_hash=e.tx_hash)
        except R2MoneyError as e:
            logger.error(
                f"❌ Failed {spec.label} of {amount} {symbol_in} for "
                f"{account.address}: {e}"
            )
            return _failure(action, account, amount, e)
        except Exception as e:
            logger.exception(
                f"❌ Unexpected error during {spec.label} of {amount} {symbol_in} "
                f"for {account.address}: {e}"
            )
            return _failure(action, account, amount, e)

        await self._log_balances(account, spec)
        return ExecutionResult(
            success=True,
            action=action,
            wallet=account.address,
            amount=amount,
            tx_hash=tx_hash,
        )

    async def _execute(
        self,
        spec: ActionSpec,
        account: WalletAccount,
        amount: Decimal,
        settings: GasSettings,
    ) -> str:
        symbol_in = spec.input_token.value
        token_address = TOKEN_ADDRESSES[spec.input_token]

        balance = await self.balance_reader.get_balance(account, spec.input_token)
        logger.info(f"💰 Current {symbol_in} balance: {format_amount(balance)}")
        if balance < amount:
            raise InsufficientBalanceError(
                f"Insufficient {symbol_in} balance for {account.address}. "
                f"You have {format_amount(balance)} {symbol_in} but the "
                f"{spec.label} needs {amount} {symbol_in}.",
                token=symbol_in,
                available=balance,
                requested=amount,
            )

        decimals = await self.balance_reader.get_decimals(account, token_address)
        amount_base = to_base_units(amount, decimals)

        await self.allowance_manager.ensure_allowance(
            account,
            token_address,
            spec.endpoint.address,
            amount_base,
            decimals,
            settings,
        )

        data = self.calldata_builder.build(spec.method, account.address, amount_base)
        if spec.action is ActionKind.SWAP_OUT:
            min_output = from_base_units(min_output_for(amount_base), decimals)
            logger.info(
                f"🔄 Swapping {amount} {symbol_in}, expecting at least "
                f"{format_amount(min_output)} {spec.output_token.value}"
            )
        logger.debug(f"Constructed data: {data.hex()}")

        logger.info(f"Executing {spec.label} of {amount} {symbol_in}...")
        fees = await self.gas_estimator.estimate(account, settings)
        tx_hash = await self.sender.submit(
            account,
            to=spec.endpoint.address,
            data=data,
            gas_limit=settings.gas_limit(spec.gas_kind),
            fees=fees,
        )
        logger.info(f"✅ {sentence_case(spec.label)} confirmed: {tx_hash}")
        return tx_hash

    async def _log_balances(self, account: WalletAccount, spec: ActionSpec) -> None:
        for symbol in (spec.input_token, spec.output_token):
            balance = await self.balance_reader.get_balance(account, symbol)
            logger.info(f"💰 New {symbol.value} balance: {format_amount(balance)}")
