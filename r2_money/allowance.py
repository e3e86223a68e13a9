"""
Allowance manager: approve-then-act support for the action executors.

The allowance is read first and an approval is submitted only when it falls
short. Approvals are for the exact amount requested, never unlimited.
"""

from web3 import Web3

from .balances import BalanceReader
from .config import GasSettings
from .constants import GasLimitKind
from .exceptions import AllowanceError
from .gas import GasFeeEstimator
from .transactions import TransactionSender
from .utils import from_base_units, get_logger, run_sync
from .wallet import WalletAccount

logger = get_logger(__name__)


class AllowanceManager:
    """Ensures a spender may move a wallet's tokens before an action."""

    def __init__(
        self,
        balance_reader: BalanceReader,
        gas_estimator: GasFeeEstimator,
        sender: TransactionSender,
    ):
        self.balance_reader = balance_reader
        self.gas_estimator = gas_estimator
        self.sender = sender

    async def get_allowance(
        self, account: WalletAccount, token_address: str, spender: str
    ) -> int:
        contract = self.balance_reader.token_contract(account, token_address)
        return int(
            await run_sync(
                contract.functions.allowance(
                    account.address, Web3.to_checksum_address(spender)
                ).call
            )
        )

    async def ensure_allowance(
        self,
        account: WalletAccount,
        token_address: str,
        spender: str,
        amount: int,
        decimals: int,
        settings: GasSettings,
    ) -> bool:
        """
        Make sure `spender` may transfer at least `amount` base units.

        Args:
            account: Token owner
            token_address: Token to approve
            spender: Contract that will pull the tokens
            amount: Required allowance in base units
            decimals: Token decimals, for log messages
            settings: Gas settings for the approval transaction

        Returns:
            True if no approval was needed or the approval was mined without revert

        Raises:
            AllowanceError: If the allowance could not be read or the approval failed
        """
        try:
            current = await self.get_allowance(account, token_address, spender)
        except Exception as e:
            raise AllowanceError(
                f"Failed to read allowance of {spender} on {token_address} "
                f"for {account.address}: {e}",
                token=token_address,
                spender=spender,
            ) from e

        logger.info(
            f"Current allowance for {spender}: {from_base_units(current, decimals)}"
        )
        if current >= amount:
            logger.info("Sufficient allowance already exists")
            return True

        human_amount = from_base_units(amount, decimals)
        logger.info(f"Approving {human_amount} tokens for spending by {spender}...")
        try:
            contract = self.balance_reader.token_contract(account, token_address)
            data = contract.encode_abi(
                "approve", args=[Web3.to_checksum_address(spender), amount]
            )
            fees = await self.gas_estimator.estimate(account, settings)
            tx_hash = await self.sender.submit(
                account,
                to=Web3.to_checksum_address(token_address),
                data=data,
                gas_limit=settings.gas_limit(GasLimitKind.APPROVAL),
                fees=fees,
            )
        except Exception as e:
            raise AllowanceError(
                f"Approval of {human_amount} for {spender} failed: {e}",
                token=token_address,
                spender=spender,
                details={"tx_hash": getattr(e, "tx_hash", None)},
            ) from e

        logger.info(f"✅ Approval confirmed: {tx_hash}")
        return True
