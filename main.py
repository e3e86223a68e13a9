#!/usr/bin/env python3
"""
Main Entry Point for the R2 Money Bot.

Loads wallets from PRIVATE_KEY_* entries in the environment (or a .env
file), connects each one to the Sepolia RPC endpoint, optionally through a
proxy from proxies.txt, and opens the interactive menu for swapping,
staking and balance checks.

Usage:
    python main.py [--config config.yaml] [--debug | --quiet]
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

import logging_config
from r2_money import build_runner, load_config
from r2_money.exceptions import ConfigurationError
from r2_money.menu import InteractiveMenu
from r2_money.wallet import load_wallets

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="USDC/R2USD/sR2USD automation bot for the Sepolia testnet"
    )
    parser.add_argument("--config", help="Optional YAML config file")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Verbose logging")
    verbosity.add_argument(
        "--quiet", action="store_true", help="Only warnings and errors"
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """
    Main execution function.
    """
    args = parse_args(argv)
    load_dotenv()

    if args.debug:
        logging_config.setup_debug()
    elif args.quiet:
        logging_config.setup_minimal()
    else:
        logging_config.setup()

    logger.info("USDC/R2USD/sR2USD Bot Starting on Sepolia Testnet...")
    try:
        config = load_config(args.config)
        wallets = await load_wallets(config)
    except ConfigurationError as e:
        logger.error(f"❌ {e}. Exiting.")
        return 1

    runner = build_runner(config)
    menu = InteractiveMenu(wallets, runner, runner.balance_reader, config.gas)
    try:
        await menu.run()
    except EOFError:
        logger.info("Input closed by operator")
    logger.info("Application exited.")
    return 0


def run():
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by operator")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
