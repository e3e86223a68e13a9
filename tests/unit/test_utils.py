"""
Unit tests for r2_money.utils module.
"""

import threading
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from r2_money.exceptions import ValidationError
from r2_money.utils import (
    format_amount,
    format_duration,
    from_base_units,
    is_positive_number,
    mask_secret,
    parse_positive_decimal,
    parse_positive_int,
    run_in_daemon_thread,
    run_sync,
    sentence_case,
    to_base_units,
    tx_link,
)


class TestBaseUnits:
    """Test token unit conversion."""

    def test_to_base_units(self):
        assert to_base_units(Decimal("1.5"), 6) == 1_500_000
        assert to_base_units("100", 6) == 100_000_000
        assert to_base_units(Decimal("0.000001"), 6) == 1
        assert to_base_units(Decimal("2"), 18) == 2 * 10**18

    def test_trailing_zeros_beyond_precision_are_exact(self):
        assert to_base_units(Decimal("1.50000000"), 6) == 1_500_000

    def test_excess_precision_is_rejected(self):
        with pytest.raises(ValidationError):
            to_base_units(Decimal("1.0000001"), 6)

    def test_negative_is_rejected(self):
        with pytest.raises(ValidationError):
            to_base_units(Decimal("-1"), 6)

    def test_invalid_text_is_rejected(self):
        with pytest.raises(ValidationError):
            to_base_units("abc", 6)
        with pytest.raises(ValidationError):
            to_base_units("NaN", 6)

    def test_values_beyond_default_decimal_precision(self):
        amount = Decimal("1234567890123456789012345.123456")
        assert to_base_units(amount, 6) == 1234567890123456789012345123456

        raw = 10**28 + 1
        assert to_base_units(from_base_units(raw, 18), 18) == raw
        assert format_amount(from_base_units(raw, 18)) == "10000000000.000000000000000001"

    def test_from_base_units(self):
        assert from_base_units(1_500_000, 6) == Decimal("1.5")
        assert from_base_units(0, 18) == Decimal(0)
        assert from_base_units(10_000_001, 6) == Decimal("10.000001")

    @given(
        st.integers(min_value=0, max_value=2**256 - 1),
        st.integers(min_value=0, max_value=18),
    )
    def test_round_trip(self, raw, decimals):
        """Base units -> Decimal -> base units is lossless."""
        amount = from_base_units(raw, decimals)
        assert to_base_units(amount, decimals) == raw
        assert from_base_units(to_base_units(amount, decimals), decimals) == amount


class TestInputParsing:
    def test_parse_positive_decimal(self):
        assert parse_positive_decimal(" 10.5 ") == Decimal("10.5")

    @pytest.mark.parametrize("text", ["abc", "0", "-1", "", "NaN", "Infinity"])
    def test_parse_positive_decimal_rejects(self, text):
        with pytest.raises(ValidationError):
            parse_positive_decimal(text)

    def test_parse_positive_int(self):
        assert parse_positive_int("3") == 3

    @pytest.mark.parametrize("text", ["1.5", "0", "-2", "x", ""])
    def test_parse_positive_int_rejects(self, text):
        with pytest.raises(ValidationError):
            parse_positive_int(text)

    def test_is_positive_number(self):
        assert is_positive_number("1.5")
        assert not is_positive_number("0")
        assert not is_positive_number("abc")
        assert not is_positive_number(None)


class TestFormatting:
    def test_tx_link(self):
        assert (
            tx_link("0xabc", "https://sepolia.etherscan.io/")
            == "https://sepolia.etherscan.io/tx/0xabc"
        )
        assert tx_link("abc").endswith("/tx/0xabc")

    def test_format_amount(self):
        assert format_amount(Decimal("1.500000")) == "1.5"
        assert format_amount(Decimal("100.000000")) == "100"
        assert format_amount(Decimal("0E-6")) == "0"

    def test_sentence_case_keeps_symbols(self):
        assert sentence_case("USDC to R2USD swap") == "USDC to R2USD swap"
        assert sentence_case("staking transaction") == "Staking transaction"
        assert sentence_case("") == ""

    def test_mask_secret(self):
        assert mask_secret("0x1234567890") == "0x1234..."

    def test_format_duration(self):
        assert format_duration(30.5) == "30.50s"
        assert format_duration(90) == "1.5m"
        assert format_duration(7200) == "2.0h"


@pytest.mark.asyncio
async def test_run_sync_passes_arguments():
    assert await run_sync(lambda a, b=0: a + b, 2, b=3) == 5


@pytest.mark.asyncio
async def test_daemon_thread_returns_result():
    def read(prompt):
        return (prompt, threading.current_thread().daemon)

    assert await run_in_daemon_thread(read, "Amount: ") == ("Amount: ", True)


@pytest.mark.asyncio
async def test_daemon_thread_propagates_errors():
    def closed_stdin(_prompt):
        raise EOFError

    with pytest.raises(EOFError):
        await run_in_daemon_thread(closed_stdin, "")
