"""
Exception hierarchy for the R2 money bot.

Components below the action executors raise these; the executors, the auto
sequence and the batch runner turn them into boolean outcomes.
"""

from decimal import Decimal
from typing import Any, Dict, Optional


class R2MoneyError(Exception):
    """Base exception for all bot related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(R2MoneyError):
    """Raised when there are configuration-related issues."""

    pass


class ValidationError(R2MoneyError):
    """Raised when validation of user input or configuration fails."""

    pass


class NetworkError(R2MoneyError):
    """Raised when RPC or connectivity issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class CalldataError(R2MoneyError):
    """Raised when a method payload cannot be encoded."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.method = method


class InsufficientBalanceError(R2MoneyError):
    """Raised when a wallet holds less of a token than an action needs."""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        available: Optional[Decimal] = None,
        requested: Optional[Decimal] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.token = token
        self.available = available
        self.requested = requested


class AllowanceError(R2MoneyError):
    """Raised when a spender allowance could not be put in place."""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        spender: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.token = token
        self.spender = spender


class TransactionError(R2MoneyError):
    """Raised when a transaction could not be submitted or confirmed."""

    def __init__(
        self,
        message: str,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.tx_hash = tx_hash


class TransactionRevertedError(TransactionError):
    """Raised when a mined transaction reports a failed status."""

    pass
