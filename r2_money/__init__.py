"""
R2 Money Bot.

Automates token approval, USDC/R2USD swaps and R2USD staking against the
R2 contracts on the Sepolia testnet for one or more operator wallets,
processing wallets and repetitions strictly one after another.
"""

from r2_money.version import __version__

PROJECT_NAME = "R2-Money-Bot"
VERSION = __version__

from r2_money.allowance import AllowanceManager
from r2_money.balances import BalanceReader
from r2_money.batch import BatchRunner
from r2_money.calldata import CalldataBuilder
from r2_money.config import AppConfig, GasSettings, load_config
from r2_money.executor import ActionExecutor
from r2_money.gas import GasFeeEstimator
from r2_money.sequence import AutoSequence
from r2_money.transactions import TransactionSender


def build_runner(config: AppConfig) -> BatchRunner:
    """Wire the engine components for one process."""
    balance_reader = BalanceReader()
    gas_estimator = GasFeeEstimator()
    sender = TransactionSender(
        chain_id=config.chain_id,
        explorer_url=config.explorer_url,
        receipt_timeout_sec=config.receipt_timeout_sec,
    )
    allowance_manager = AllowanceManager(balance_reader, gas_estimator, sender)
    executor = ActionExecutor(
        balance_reader, allowance_manager, CalldataBuilder(), gas_estimator, sender
    )
    return BatchRunner(executor, AutoSequence(executor, balance_reader), balance_reader)


__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "ActionExecutor",
    "AllowanceManager",
    "AppConfig",
    "AutoSequence",
    "BalanceReader",
    "BatchRunner",
    "CalldataBuilder",
    "GasFeeEstimator",
    "GasSettings",
    "TransactionSender",
    "build_runner",
    "load_config",
]
