"""
Table rendering for balances, wallets and gas settings.
"""

from typing import Iterable, List, Sequence, Tuple

from tabulate import tabulate

from .config import GasSettings
from .types import WalletBalances

TABLE_FORMAT = "rounded_outline"


def balances_table(balances: WalletBalances) -> str:
    """One wallet's ETH and token balances."""
    return tabulate(
        balances.rows(),
        headers=["Token", "Balance"],
        tablefmt=TABLE_FORMAT,
        disable_numparse=True,
    )


def wallets_table(addresses: Sequence[str]) -> str:
    """Numbered wallet list for selection prompts."""
    return tabulate(
        [[i, address] for i, address in enumerate(addresses, start=1)],
        headers=["#", "Wallet Address"],
        tablefmt=TABLE_FORMAT,
    )


def token_balances_table(symbol: str, rows: Iterable[Tuple[str, str]]) -> str:
    """One token's balance for several wallets."""
    return tabulate(
        [list(row) for row in rows],
        headers=["Wallet", f"{symbol} Balance"],
        tablefmt=TABLE_FORMAT,
        disable_numparse=True,
    )


def settings_table(settings: GasSettings) -> str:
    rows: List[List[str]] = [[name, str(value)] for name, value in settings.to_rows()]
    return tabulate(
        rows, headers=["Setting", "Value"], tablefmt=TABLE_FORMAT, disable_numparse=True
    )
