"""
Transaction submission and confirmation.

Handles:
- EIP-1559 parameter building (pending nonce, chain id, fees, gas limit)
- Local signing and raw submission
- Receipt wait and revert detection
"""

from typing import Any, Dict, Optional

from web3 import Web3
from web3.exceptions import TimeExhausted

from .exceptions import TransactionError, TransactionRevertedError
from .gas import GasFees
from .utils import get_logger, run_sync, tx_link
from .wallet import WalletAccount

logger = get_logger(__name__)


class TransactionSender:
    """Signs, submits and confirms transactions for a wallet."""

    def __init__(self, chain_id: int, explorer_url: str, receipt_timeout_sec: int):
        self.chain_id = chain_id
        self.explorer_url = explorer_url
        self.receipt_timeout_sec = receipt_timeout_sec

    async def base_params(
        self, account: WalletAccount, gas_limit: int, fees: GasFees
    ) -> Dict[str, Any]:
        """Transaction fields shared by every submission."""
        nonce = await run_sync(
            account.web3.eth.get_transaction_count, account.address, "pending"
        )
        params = {
            "from": account.address,
            "value": 0,
            "gas": gas_limit,
            "nonce": nonce,
            "chainId": self.chain_id,
            "type": 2,
        }
        params.update(fees.as_tx_params())
        return params

    async def send(self, account: WalletAccount, tx: Dict[str, Any]) -> str:
        """
        Sign and submit a transaction.

        Returns:
            Transaction hash as 0x-prefixed hex

        Raises:
            TransactionError: If signing or submission fails
        """
        try:
            signed_tx = account.signer.sign_transaction(tx)
            tx_hash = await run_sync(
                account.web3.eth.send_raw_transaction, signed_tx.raw_transaction
            )
        except Exception as e:
            raise TransactionError(
                f"Failed to submit transaction from {account.address} "
                f"to {tx.get('to')}: {e}",
                details={"to": tx.get("to"), "from": account.address},
            ) from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info(f"Check on explorer: {tx_link(tx_hash_hex, self.explorer_url)}")
        return tx_hash_hex

    async def wait_for_success(
        self, account: WalletAccount, tx_hash: str, timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Wait for the receipt and require a success status.

        Raises:
            TransactionError: If no receipt arrives in time or the wait fails
            TransactionRevertedError: If the transaction was mined but reverted
        """
        timeout = timeout or self.receipt_timeout_sec
        try:
            receipt = await run_sync(
                account.web3.eth.wait_for_transaction_receipt, tx_hash, timeout
            )
        except TimeExhausted as e:
            raise TransactionError(
                f"Transaction {tx_hash} not confirmed after {timeout}s", tx_hash=tx_hash
            ) from e
        except Exception as e:
            raise TransactionError(
                f"Failed waiting for transaction {tx_hash}: {e}", tx_hash=tx_hash
            ) from e

        if receipt.get("status") != 1:
            raise TransactionRevertedError(
                f"Transaction {tx_hash} failed. The contract reverted the execution.",
                tx_hash=tx_hash,
                details={"block": receipt.get("blockNumber")},
            )
        logger.debug(
            f"Transaction {tx_hash} mined in block {receipt.get('blockNumber')} "
            f"(gas used: {receipt.get('gasUsed')})"
        )
        return receipt

    async def submit(
        self,
        account: WalletAccount,
        to: str,
        data: bytes,
        gas_limit: int,
        fees: GasFees,
    ) -> str:
        """Send a contract call and wait until it is mined without revert."""
        tx = await self.base_params(account, gas_limit, fees)
        tx["to"] = to
        tx["data"] = data
        tx_hash = await self.send(account, tx)
        await self.wait_for_success(account, tx_hash)
        return tx_hash
