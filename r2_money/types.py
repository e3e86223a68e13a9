"""
Core data types for the R2 money bot.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from .constants import ActionKind, TokenSymbol


@dataclass(frozen=True)
class ContractEndpoint:
    """
    A fixed contract an action is submitted to.

    Attributes:
        name: Human-readable operation name (e.g. "USDC -> R2USD swap")
        address: Checksum address of the target contract
    """

    name: str
    address: str


@dataclass
class WalletBalances:
    """Native and token balances of one wallet, in token units."""

    address: str
    eth: Decimal = Decimal(0)
    usdc: Decimal = Decimal(0)
    r2usd: Decimal = Decimal(0)
    sr2usd: Decimal = Decimal(0)

    def rows(self) -> List[List[str]]:
        return [
            [TokenSymbol.ETH.value, str(self.eth)],
            [TokenSymbol.USDC.value, str(self.usdc)],
            [TokenSymbol.R2USD.value, str(self.r2usd)],
            [TokenSymbol.SR2USD.value, str(self.sr2usd)],
        ]


@dataclass
class ExecutionResult:
    """
    Outcome of one action attempt.

    Attributes:
        success: True only if every submitted transaction was mined without revert
        action: Action that was attempted
        wallet: Address of the acting wallet
        amount: Requested amount in token units
        tx_hash: Hash of the main transaction (if submitted)
        error: Error message (if failed)
    """

    success: bool
    action: ActionKind
    wallet: str
    amount: Optional[Decimal] = None
    tx_hash: Optional[str] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


@dataclass
class BatchReport:
    """
    Result of one batch run.

    Attributes:
        action: Action repeated by the batch
        repetitions: Requested repetitions per wallet
        attempts: Completed attempts per wallet address, in processing order
        successes: Successful attempts per wallet address
        results: Every attempt result, in execution order
    """

    action: ActionKind
    repetitions: int
    attempts: Dict[str, int] = field(default_factory=dict)
    successes: Dict[str, int] = field(default_factory=dict)
    results: List[ExecutionResult] = field(default_factory=list)

    @property
    def total_attempts(self) -> int:
        return sum(self.attempts.values())

    @property
    def total_successes(self) -> int:
        return sum(self.successes.values())
