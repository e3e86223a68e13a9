"""
Balance reader for native ETH and the bot's tokens.

Reads never raise: a failed query is logged and reported as a zero balance,
so one bad call does not abort a balance table or a pre-check.
"""

from decimal import Decimal

from web3 import Web3

from .abi import ERC20_ABI
from .constants import TOKEN_ADDRESSES, TokenSymbol
from .types import WalletBalances
from .utils import from_base_units, get_logger, run_sync
from .wallet import WalletAccount

logger = get_logger(__name__)

ZERO = Decimal(0)


class BalanceReader:
    """Reads balances and decimals for a wallet."""

    def token_contract(self, account: WalletAccount, token_address: str):
        return account.web3.eth.contract(
            address=Web3.to_checksum_address(token_address), abi=ERC20_ABI
        )

    async def get_decimals(self, account: WalletAccount, token_address: str) -> int:
        """
        Fetch a token's decimals from chain.

        Unlike the balance reads this raises on failure; callers that need
        the precision for a transaction must not guess it.
        """
        contract = self.token_contract(account, token_address)
        return int(await run_sync(contract.functions.decimals().call))

    async def get_token_balance(
        self, account: WalletAccount, token_address: str
    ) -> Decimal:
        """Token balance in token units, or zero if the query fails."""
        try:
            contract = self.token_contract(account, token_address)
            raw_balance = await run_sync(
                contract.functions.balanceOf(account.address).call
            )
            decimals = await run_sync(contract.functions.decimals().call)
            return from_base_units(raw_balance, int(decimals))
        except Exception as e:
            logger.error(
                f"❌ Failed to check balance for token {token_address} "
                f"(wallet {account.address}): {e}"
            )
            return ZERO

    async def get_eth_balance(self, account: WalletAccount) -> Decimal:
        """Native balance in ether, or zero if the query fails."""
        try:
            balance_wei = await run_sync(account.web3.eth.get_balance, account.address)
            return from_base_units(balance_wei, 18)
        except Exception as e:
            logger.error(f"❌ Failed to check ETH balance for {account.address}: {e}")
            return ZERO

    async def get_balance(self, account: WalletAccount, symbol: TokenSymbol) -> Decimal:
        """Balance of one of the bot's tokens by symbol."""
        if symbol is TokenSymbol.ETH:
            return await self.get_eth_balance(account)
        return await self.get_token_balance(account, TOKEN_ADDRESSES[symbol])

    async def get_balances(self, account: WalletAccount) -> WalletBalances:
        """All four balances of one wallet, read one after another."""
        return WalletBalances(
            address=account.address,
            eth=await self.get_eth_balance(account),
            usdc=await self.get_balance(account, TokenSymbol.USDC),
            r2usd=await self.get_balance(account, TokenSymbol.R2USD),
            sr2usd=await self.get_balance(account, TokenSymbol.SR2USD),
        )
