"""
Calldata construction for the three fixed contract methods.

The field layouts below must match the deployed contracts bit-for-bit:

- swap USDC -> R2USD: selector + abi(address, uint256 amount, 0, 0, 0, 0, 0)
- swap R2USD -> USDC: selector + uint256 0, uint256 1, uint256 amount, uint256 min_out
- stake R2USD:        selector + uint256 amount + 288 zero bytes

The two leading swap-out words and the stake tail are opaque to this code.
"""

from typing import Callable, Dict

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from hexbytes import HexBytes

from .constants import (
    R2USD_TO_USDC_SELECTOR,
    STAKE_R2USD_SELECTOR,
    STAKE_ZERO_TAIL_BYTES,
    SWAP_OUT_MIN_OUTPUT_PCT,
    USDC_TO_R2USD_SELECTOR,
    MethodKind,
)
from .exceptions import CalldataError


def min_output_for(amount_in: int) -> int:
    """Minimum swap-out proceeds: 97% of the input, truncated toward zero."""
    return amount_in * SWAP_OUT_MIN_OUTPUT_PCT // 100


def _selector_bytes(selector: str) -> bytes:
    return bytes.fromhex(selector[2:] if selector.startswith("0x") else selector)


def _encode_swap_in(recipient: str, amount: int) -> bytes:
    return _selector_bytes(USDC_TO_R2USD_SELECTOR) + encode(
        ["address", "uint256", "uint256", "uint256", "uint256", "uint256", "uint256"],
        [recipient, amount, 0, 0, 0, 0, 0],
    )


def _encode_swap_out(recipient: str, amount: int) -> bytes:
    return _selector_bytes(R2USD_TO_USDC_SELECTOR) + encode(
        ["uint256", "uint256", "uint256", "uint256"],
        [0, 1, amount, min_output_for(amount)],
    )


def _encode_stake(recipient: str, amount: int) -> bytes:
    return (
        _selector_bytes(STAKE_R2USD_SELECTOR)
        + encode(["uint256"], [amount])
        + bytes(STAKE_ZERO_TAIL_BYTES)
    )


_ENCODERS: Dict[MethodKind, Callable[[str, int], bytes]] = {
    MethodKind.SWAP_USDC_TO_R2USD: _encode_swap_in,
    MethodKind.SWAP_R2USD_TO_USDC: _encode_swap_out,
    MethodKind.STAKE_R2USD: _encode_stake,
}


class CalldataBuilder:
    """Encodes payloads for the supported methods. Pure; no network access."""

    def build(self, method: MethodKind, recipient: str, amount: int) -> HexBytes:
        """
        Encode one method call.

        Args:
            method: Which fixed method to encode
            recipient: Wallet address (only used by the swap-in layout)
            amount: Input amount in base units

        Returns:
            Calldata starting with the 4-byte selector

        Raises:
            CalldataError: If the amount is negative, too large, or the
                address cannot be encoded
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise CalldataError(
                f"Amount must be an integer number of base units, got {amount!r}",
                method=method.value,
            )
        if amount < 0:
            raise CalldataError(
                f"Amount must not be negative, got {amount}", method=method.value
            )

        try:
            return HexBytes(_ENCODERS[method](recipient, amount))
        except (EncodingError, TypeError, ValueError) as e:
            raise CalldataError(
                f"Failed to encode {method.value}: {e}", method=method.value
            ) from e
