"""Shared fixtures for the R2 money bot tests."""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from eth_account import Account

from r2_money.config import GasSettings
from r2_money.gas import GasFees
from r2_money.wallet import WalletAccount

TEST_PRIVATE_KEY = "0x" + "1" * 64
SECOND_PRIVATE_KEY = "0x" + "2" * 64
EXPLORER = "https://sepolia.etherscan.io"


def make_wallet(private_key: str = TEST_PRIVATE_KEY, web3=None) -> WalletAccount:
    signer = Account.from_key(private_key)
    return WalletAccount(address=signer.address, signer=signer, web3=web3 or Mock())


@pytest.fixture
def wallet():
    return make_wallet()


@pytest.fixture
def second_wallet():
    return make_wallet(SECOND_PRIVATE_KEY)


@pytest.fixture
def settings():
    return GasSettings()


@pytest.fixture
def balance_reader():
    reader = Mock()
    reader.get_balance = AsyncMock(return_value=Decimal("100"))
    reader.get_decimals = AsyncMock(return_value=6)
    reader.get_balances = AsyncMock()
    return reader


@pytest.fixture
def gas_estimator():
    estimator = Mock()
    estimator.estimate = AsyncMock(
        return_value=GasFees(max_fee_per_gas=50 * 10**9, max_priority_fee_per_gas=2 * 10**9)
    )
    return estimator


@pytest.fixture
def sender():
    tx_sender = Mock()
    tx_sender.explorer_url = EXPLORER
    tx_sender.submit = AsyncMock(return_value="0x" + "ab" * 32)
    return tx_sender


@pytest.fixture
def wallet_factory():
    """Build wallets around a caller-supplied web3 mock."""
    return make_wallet
