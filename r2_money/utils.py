"""
Common utilities and helper functions for the R2 money bot.

This module provides centralized helpers for logging, token unit conversion,
operator input parsing and running blocking web3 calls from coroutines.
"""

import asyncio
import functools
import logging
import threading
import time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from .constants import EXPLORER_URL
from .exceptions import ValidationError


# Timestamp utilities
def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"


def get_current_timestamp() -> float:
    """Get current Unix timestamp as float."""
    return time.time()


# Token unit utilities
def to_base_units(amount: Union[Decimal, str, int], decimals: int) -> int:
    """
    Convert a human token amount to integer base units.

    Args:
        amount: Amount in token units (e.g. Decimal("1.5"))
        decimals: Token decimal precision

    Returns:
        Integer amount scaled by 10**decimals

    Raises:
        ValidationError: If the amount is not a finite number, is negative,
            or carries more fractional digits than the token supports
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValidationError(f"Invalid token amount: {amount!r}") from e

    if not value.is_finite():
        raise ValidationError(f"Invalid token amount: {amount!r}")
    if value < 0:
        raise ValidationError(f"Token amount must not be negative: {amount}")

    # Integer arithmetic on the digits; Decimal context rounding never applies
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)))
    shift = exponent + decimals
    if shift >= 0:
        return coefficient * 10**shift

    base_units, remainder = divmod(coefficient, 10**-shift)
    if remainder:
        raise ValidationError(
            f"Amount {amount} has more than {decimals} decimal places",
            {"amount": str(amount), "decimals": decimals},
        )
    return base_units


def from_base_units(raw_amount: int, decimals: int) -> Decimal:
    """Convert integer base units back to a Decimal token amount, exactly."""
    raw_amount = int(raw_amount)
    digits = tuple(int(d) for d in str(abs(raw_amount)))
    return Decimal((1 if raw_amount < 0 else 0, digits, -decimals))


def format_amount(amount: Decimal) -> str:
    """Render a token amount without exponent notation or trailing zeros."""
    if amount == 0:
        return "0"
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# Explorer utilities
def tx_link(tx_hash: str, explorer_url: str = EXPLORER_URL) -> str:
    """Build the block explorer URL for a transaction hash."""
    if not tx_hash.startswith("0x"):
        tx_hash = "0x" + tx_hash
    return f"{explorer_url.rstrip('/')}/tx/{tx_hash}"


def mask_secret(secret: str, visible: int = 6) -> str:
    """Show only the first characters of a secret for log messages."""
    return f"{secret[:visible]}..."


# Input parsing utilities
def parse_positive_decimal(text: str) -> Decimal:
    """
    Parse operator input as a strictly positive decimal amount.

    Raises:
        ValidationError: If the text is not a positive finite number
    """
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError) as e:
        raise ValidationError(f"Not a number: {text!r}") from e
    if not value.is_finite() or value <= 0:
        raise ValidationError(f"Amount must be a positive number, got {text!r}")
    return value


def parse_positive_int(text: str) -> int:
    """
    Parse operator input as a strictly positive integer.

    Raises:
        ValidationError: If the text is not a positive whole number
    """
    try:
        value = int(text.strip())
    except (ValueError, AttributeError) as e:
        raise ValidationError(f"Not a whole number: {text!r}") from e
    if value <= 0:
        raise ValidationError(f"Value must be a positive integer, got {text!r}")
    return value


def is_positive_number(value: Any) -> bool:
    """Check if value is a positive number."""
    try:
        return Decimal(str(value)) > 0
    except (InvalidOperation, ValueError, TypeError):
        return False


def sentence_case(text: str) -> str:
    """Uppercase the first character only, keeping token symbols intact."""
    return text[:1].upper() + text[1:]


# Async utilities
async def run_sync(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Run a blocking callable in the default thread pool and await its result.

    web3 calls go through here so the event loop is never blocked; callers
    still await each call before issuing the next one.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


def _settle(future: asyncio.Future, result: Any, error: Optional[BaseException]):
    if future.done():
        return
    if isinstance(error, StopIteration):
        error = RuntimeError(f"Input source exhausted: {error!r}")
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


async def run_in_daemon_thread(func: Callable[..., Any], *args: Any) -> Any:
    """
    Await a blocking call made on its own daemon thread.

    Used for console reads: a thread stuck in input() must not keep the
    process alive after the event loop stops on Ctrl-C.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def target():
        result, error = None, None
        try:
            result = func(*args)
        except BaseException as e:
            error = e
        try:
            loop.call_soon_threadsafe(_settle, future, result, error)
        except RuntimeError:
            # Loop already closed; nobody is waiting for the answer
            pass

    threading.Thread(target=target, name="console-input", daemon=True).start()
    return await future


# Logging utilities
def get_logger(name: str, level: Union[str, int] = logging.INFO) -> logging.Logger:
    """
    Get a structured logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level

    Returns:
        Configured logger with structured output
    """
    logger = logging.getLogger(name)

    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Emitted through this handler only, not the root console handler
        logger.propagate = False

    return logger
