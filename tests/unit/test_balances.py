"""Tests for the balance reader."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from r2_money.balances import BalanceReader
from r2_money.constants import R2USD_ADDRESS, TokenSymbol
from r2_money.types import WalletBalances



def token_web3(raw_balance=1_500_000, decimals=6, eth_wei=2 * 10**18):
    web3 = Mock()
    functions = web3.eth.contract.return_value.functions
    functions.balanceOf.return_value.call.return_value = raw_balance
    functions.decimals.return_value.call.return_value = decimals
    web3.eth.get_balance.return_value = eth_wei
    return web3


@pytest.mark.asyncio
class TestBalanceReader:
    async def test_token_balance_scaled_by_decimals(self, wallet_factory):
        wallet = wallet_factory(web3=token_web3())
        balance = await BalanceReader().get_token_balance(wallet, R2USD_ADDRESS)

        assert balance == Decimal("1.5")
        contract_kwargs = wallet.web3.eth.contract.call_args.kwargs
        assert contract_kwargs["address"] == R2USD_ADDRESS
        wallet.web3.eth.contract.return_value.functions.balanceOf.assert_called_with(
            wallet.address
        )

    async def test_token_balance_failure_reports_zero(self, wallet_factory):
        web3 = token_web3()
        web3.eth.contract.return_value.functions.balanceOf.return_value.call.side_effect = (
            ConnectionError("rpc down")
        )
        wallet = wallet_factory(web3=web3)

        assert await BalanceReader().get_token_balance(wallet, R2USD_ADDRESS) == 0

    async def test_eth_balance(self, wallet_factory):
        wallet = wallet_factory(web3=token_web3(eth_wei=123 * 10**15))
        assert await BalanceReader().get_eth_balance(wallet) == Decimal("0.123")

    async def test_eth_balance_failure_reports_zero(self, wallet_factory):
        web3 = token_web3()
        web3.eth.get_balance.side_effect = TimeoutError("timeout")
        wallet = wallet_factory(web3=web3)

        assert await BalanceReader().get_eth_balance(wallet) == 0

    async def test_get_decimals_raises_on_failure(self, wallet_factory):
        web3 = token_web3()
        web3.eth.contract.return_value.functions.decimals.return_value.call.side_effect = (
            ConnectionError("rpc down")
        )
        wallet = wallet_factory(web3=web3)

        with pytest.raises(ConnectionError):
            await BalanceReader().get_decimals(wallet, R2USD_ADDRESS)

    async def test_get_balance_by_symbol(self, wallet_factory):
        wallet = wallet_factory(web3=token_web3(raw_balance=5_000_000))
        reader = BalanceReader()

        assert await reader.get_balance(wallet, TokenSymbol.USDC) == Decimal(5)
        assert await reader.get_balance(wallet, TokenSymbol.ETH) == Decimal(2)

    async def test_get_balances(self, wallet_factory):
        wallet = wallet_factory(web3=token_web3(raw_balance=2_500_000))
        balances = await BalanceReader().get_balances(wallet)

        assert balances == WalletBalances(
            address=wallet.address,
            eth=Decimal(2),
            usdc=Decimal("2.5"),
            r2usd=Decimal("2.5"),
            sr2usd=Decimal("2.5"),
        )
