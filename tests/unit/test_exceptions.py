"""Tests for the exceptions module."""

from decimal import Decimal

from r2_money.exceptions import (
    AllowanceError,
    CalldataError,
    ConfigurationError,
    InsufficientBalanceError,
    NetworkError,
    R2MoneyError,
    TransactionError,
    TransactionRevertedError,
    ValidationError,
)


def test_base_exception():
    """Test the base exception class."""
    error = R2MoneyError("Test error")
    assert str(error) == "Test error"
    assert error.details == {}

    error_with_details = R2MoneyError("Test error", {"key": "value"})
    assert error_with_details.details == {"key": "value"}


def test_configuration_error():
    error = ConfigurationError("Config error", {"config_file": "test.yaml"})
    assert str(error) == "Config error"
    assert error.details["config_file"] == "test.yaml"
    assert isinstance(error, R2MoneyError)


def test_network_error():
    error = NetworkError("RPC down", endpoint="https://rpc.example")
    assert error.endpoint == "https://rpc.example"
    assert isinstance(error, R2MoneyError)


def test_insufficient_balance_error():
    error = InsufficientBalanceError(
        "Insufficient USDC", token="USDC", available=Decimal("1"), requested=Decimal("2")
    )
    assert error.token == "USDC"
    assert error.available == Decimal("1")
    assert error.requested == Decimal("2")


def test_allowance_error():
    error = AllowanceError("Approval failed", token="0xtoken", spender="0xspender")
    assert error.token == "0xtoken"
    assert error.spender == "0xspender"


def test_calldata_error():
    error = CalldataError("Bad amount", method="stake_r2usd")
    assert error.method == "stake_r2usd"


def test_reverted_is_transaction_error():
    error = TransactionRevertedError("Reverted", tx_hash="0xabc")
    assert error.tx_hash == "0xabc"
    assert isinstance(error, TransactionError)


def test_exception_inheritance():
    """Test that all custom exceptions inherit from base exception."""
    exceptions = [
        ConfigurationError,
        ValidationError,
        NetworkError,
        CalldataError,
        InsufficientBalanceError,
        AllowanceError,
        TransactionError,
        TransactionRevertedError,
    ]

    for exc_class in exceptions:
        instance = exc_class("test message")
        assert isinstance(instance, R2MoneyError)
        assert isinstance(instance, Exception)
