"""
Logging configuration for cleaner output.

Usage:
    import logging_config
    logging_config.setup()
"""

import logging
import sys


def setup(level=logging.INFO):
    """
    Configure logging for cleaner, more readable output.

    - Suppresses verbose HTTP and RPC request logs from web3/urllib3
    - Uses shorter timestamp format (HH:MM:SS instead of full datetime)
    """

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    # Minimal format: time + level + message
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
    )
    console.setFormatter(formatter)
    root.addHandler(console)

    # Suppress noisy loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("__main__").setLevel(level)

    # Package loggers carry their own handler and level
    for name, item in logging.Logger.manager.loggerDict.items():
        if name.startswith("r2_money") and isinstance(item, logging.Logger):
            item.setLevel(level)


def setup_minimal():
    """
    Even more minimal logging - only warnings and errors.
    """
    setup(level=logging.WARNING)


def setup_debug():
    """
    Verbose logging for debugging.
    Shows everything including RPC requests.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
