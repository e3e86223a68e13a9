"""Tests for the swap and stake action executors."""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock, patch

import pytest

from r2_money.calldata import CalldataBuilder
from r2_money.constants import (
    R2USD_ADDRESS,
    R2USD_TO_USDC_CONTRACT,
    STAKE_R2USD_CONTRACT,
    USDC_ADDRESS,
    USDC_TO_R2USD_CONTRACT,
    ActionKind,
    TokenSymbol,
)
from r2_money.exceptions import AllowanceError, TransactionRevertedError
from r2_money.executor import ACTION_SPECS, ActionExecutor


@pytest.fixture
def allowance_manager():
    manager = Mock()
    manager.ensure_allowance = AsyncMock(return_value=True)
    return manager


@pytest.fixture
def executor(balance_reader, allowance_manager, gas_estimator, sender):
    return ActionExecutor(
        balance_reader, allowance_manager, CalldataBuilder(), gas_estimator, sender
    )


def test_action_specs_cover_fixed_contracts():
    assert ACTION_SPECS[ActionKind.SWAP_IN].endpoint.address == USDC_TO_R2USD_CONTRACT
    assert ACTION_SPECS[ActionKind.SWAP_OUT].endpoint.address == R2USD_TO_USDC_CONTRACT
    assert ACTION_SPECS[ActionKind.STAKE].endpoint.address == STAKE_R2USD_CONTRACT
    assert ACTION_SPECS[ActionKind.STAKE].output_token is TokenSymbol.SR2USD


@pytest.mark.asyncio
class TestActionExecutor:
    async def test_swap_in_success(
        self, executor, wallet, settings, allowance_manager, sender
    ):
        result = await executor.swap_in(wallet, Decimal("10"), settings)

        assert result.success
        assert result.action is ActionKind.SWAP_IN
        assert result.tx_hash == "0x" + "ab" * 32
        allowance_manager.ensure_allowance.assert_awaited_once_with(
            wallet, USDC_ADDRESS, USDC_TO_R2USD_CONTRACT, 10_000_000, 6, settings
        )
        submit_kwargs = sender.submit.call_args.kwargs
        assert submit_kwargs["to"] == USDC_TO_R2USD_CONTRACT
        assert submit_kwargs["gas_limit"] == 500_000
        assert bytes(submit_kwargs["data"][:4]) == bytes.fromhex("095e7a95")

    async def test_swap_out_carries_min_output(self, executor, wallet, settings, sender):
        result = await executor.swap_out(wallet, Decimal("10.000001"), settings)

        assert result.success
        data = sender.submit.call_args.kwargs["data"]
        assert bytes(data[:4]) == bytes.fromhex("3df02124")
        assert int.from_bytes(bytes(data[68:100]), "big") == 10_000_001
        assert int.from_bytes(bytes(data[100:132]), "big") == 9_700_000
        assert sender.submit.call_args.kwargs["to"] == R2USD_TO_USDC_CONTRACT

    async def test_stake_uses_stake_gas_limit(
        self, executor, wallet, settings, allowance_manager, sender
    ):
        custom = settings.updated(stake_gas_limit=120_000)
        result = await executor.stake(wallet, Decimal("5"), custom)

        assert result.success
        assert sender.submit.call_args.kwargs["gas_limit"] == 120_000
        assert len(sender.submit.call_args.kwargs["data"]) == 324
        allowance_manager.ensure_allowance.assert_awaited_once_with(
            wallet, R2USD_ADDRESS, STAKE_R2USD_CONTRACT, 5_000_000, 6, custom
        )

    async def test_insufficient_balance_submits_nothing(
        self, executor, wallet, settings, balance_reader, allowance_manager, sender
    ):
        balance_reader.get_balance = AsyncMock(return_value=Decimal("5"))

        result = await executor.swap_in(wallet, Decimal("10"), settings)

        assert not result.success
        assert "Insufficient USDC" in result.error
        allowance_manager.ensure_allowance.assert_not_called()
        sender.submit.assert_not_called()

    async def test_failed_approval_skips_action(
        self, executor, wallet, settings, allowance_manager, sender
    ):
        allowance_manager.ensure_allowance = AsyncMock(
            side_effect=AllowanceError("approve reverted")
        )

        result = await executor.stake(wallet, Decimal("1"), settings)

        assert not result.success
        assert result.error == "approve reverted"
        sender.submit.assert_not_called()

    async def test_reverted_action(self, executor, wallet, settings, sender):
        sender.submit = AsyncMock(
            side_effect=TransactionRevertedError("reverted", tx_hash="0xfeed")
        )

        result = await executor.swap_out(wallet, Decimal("1"), settings)

        assert not result.success
        assert result.tx_hash == "0xfeed"

    async def test_excess_precision_fails_without_submitting(
        self, executor, wallet, settings, sender
    ):
        result = await executor.swap_in(wallet, Decimal("1.0000001"), settings)

        assert not result.success
        sender.submit.assert_not_called()

    async def test_unexpected_error_is_contained(
        self, executor, wallet, settings, balance_reader
    ):
        balance_reader.get_decimals = AsyncMock(side_effect=RuntimeError("boom"))

        result = await executor.stake(wallet, Decimal("1"), settings)

        assert not result.success
        assert result.error == "boom"

    async def test_exact_balance_is_enough(self, executor, wallet, settings, balance_reader):
        balance_reader.get_balance = AsyncMock(return_value=Decimal("10.000000"))
        result = await executor.swap_in(wallet, Decimal("10"), settings)
        assert result.success


@pytest.mark.asyncio
async def test_confirmation_line_keeps_token_symbols(executor, wallet, settings):
    with patch("r2_money.executor.logger") as executor_logger:
        await executor.swap_out(wallet, Decimal("1"), settings)

    info_lines = [c.args[0] for c in executor_logger.info.call_args_list]
    assert f"✅ R2USD to USDC swap confirmed: {'0x' + 'ab' * 32}" in info_lines
