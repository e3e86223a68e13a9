"""
Interactive operator menu.

A single sequential loop over MenuChoice. Each prompt is awaited before the
next one is shown, and batches run to completion before the menu returns.
"""

from decimal import Decimal
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .balances import BalanceReader
from .batch import BatchRunner
from .config import GasSettings
from .constants import ALL_WALLETS, BACK_SENTINEL, SKIP_SENTINEL, ActionKind
from .display import settings_table, token_balances_table, wallets_table
from .exceptions import ValidationError
from .executor import ACTION_SPECS
from .utils import (
    format_amount,
    get_logger,
    parse_positive_decimal,
    parse_positive_int,
    run_in_daemon_thread,
)
from .version import get_version
from .wallet import WalletAccount

logger = get_logger(__name__)


class MenuChoice(Enum):
    """Main menu entries, keyed by the number the operator types."""

    SWAP_IN = "1"
    SWAP_OUT = "2"
    STAKE = "3"
    CHECK_BALANCES = "4"
    AUTO_MODE = "5"
    GAS_SETTINGS = "6"
    EXIT = "7"


MENU_ITEMS = [
    (MenuChoice.SWAP_IN, "🔄", "Swap USDC to R2USD"),
    (MenuChoice.SWAP_OUT, "🔄", "Swap R2USD to USDC"),
    (MenuChoice.STAKE, "📌", "Stake R2USD to sR2USD"),
    (MenuChoice.CHECK_BALANCES, "💰", "Check balances"),
    (MenuChoice.AUTO_MODE, "⚡", "Auto Mode (Swap → Stake)"),
    (MenuChoice.GAS_SETTINGS, "⚙️", "Gas Settings"),
    (MenuChoice.EXIT, "🚪", "Exit"),
]

ACTION_FOR_CHOICE = {
    MenuChoice.SWAP_IN: ActionKind.SWAP_IN,
    MenuChoice.SWAP_OUT: ActionKind.SWAP_OUT,
    MenuChoice.STAKE: ActionKind.STAKE,
    MenuChoice.AUTO_MODE: ActionKind.AUTO_SEQUENCE,
}

AMOUNT_PROMPTS = {
    ActionKind.SWAP_IN: "Enter amount of USDC to swap",
    ActionKind.SWAP_OUT: "Enter amount of R2USD to swap",
    ActionKind.STAKE: "Enter amount of R2USD to stake",
    ActionKind.AUTO_SEQUENCE: "Enter amount of USDC to swap and stake",
}

COUNT_PROMPTS = {
    ActionKind.SWAP_IN: "Enter number of swap transactions per wallet",
    ActionKind.SWAP_OUT: "Enter number of swap transactions per wallet",
    ActionKind.STAKE: "Enter number of staking transactions per wallet",
    ActionKind.AUTO_SEQUENCE: "Enter number of auto sequences per wallet",
}


class InteractiveMenu:
    """
    Prompt/response loop for the operator.

    Attributes:
        wallets: Connected wallets, in the order they were loaded
        runner: Batch runner that executes the chosen actions
        balance_reader: Used for the pre-action balance table
        settings: Current gas settings; replaced only by the gas settings entry
    """

    def __init__(
        self,
        wallets: Sequence[WalletAccount],
        runner: BatchRunner,
        balance_reader: BalanceReader,
        settings: GasSettings,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.wallets = list(wallets)
        self.runner = runner
        self.balance_reader = balance_reader
        self.settings = settings
        self.input_fn = input_fn
        self.output = output

    async def prompt(self, text: str) -> str:
        answer = await run_in_daemon_thread(self.input_fn, text)
        return (answer or "").strip()

    def render_header(self) -> None:
        self.output("\n" + "=" * 70)
        self.output(f"  R2 Money Bot v{get_version()} - USDC / R2USD / sR2USD on Sepolia")
        self.output("=" * 70 + "\n")

    def render_menu(self) -> None:
        self.output("MAIN MENU")
        for choice, icon, text in MENU_ITEMS:
            self.output(f"  {choice.value}. {icon}  {text}")
        self.output(f"\nSelect an option (1-{len(MENU_ITEMS)}):")

    async def run(self) -> None:
        """Show the menu until the operator chooses Exit."""
        while True:
            self.render_header()
            self.render_menu()
            answer = await self.prompt("")
            try:
                choice = MenuChoice(answer)
            except ValueError:
                logger.warning(
                    "⚠️ Invalid option. Please select a number between 1 and "
                    f"{len(MENU_ITEMS)}."
                )
                continue

            if choice is MenuChoice.EXIT:
                logger.info("Exiting the application!")
                return
            if choice is MenuChoice.CHECK_BALANCES:
                await self.show_balances()
            elif choice is MenuChoice.GAS_SETTINGS:
                await self.adjust_gas_settings()
            else:
                await self.handle_action(ACTION_FOR_CHOICE[choice])

    async def select_wallets(self) -> List[WalletAccount]:
        """
        Pick one wallet by number or all of them.

        A single wallet is used without asking; an invalid answer falls back
        to the first wallet.
        """
        if len(self.wallets) == 1:
            logger.info(f"👛 Using wallet: {self.wallets[0].address}")
            return list(self.wallets)

        self.output("\nAvailable wallets:")
        self.output(wallets_table([w.address for w in self.wallets]))
        self.output('\nYou can enter a wallet number or type "all" to use all wallets')
        answer = await self.prompt("Selection: ")

        if answer.lower() == ALL_WALLETS:
            logger.info("Using all wallets")
            return list(self.wallets)

        try:
            index = int(answer) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(self.wallets):
            logger.warning("⚠️ Invalid selection. Using first wallet.")
            index = 0

        logger.info(f"👛 Using wallet: {self.wallets[index].address}")
        return [self.wallets[index]]

    async def prompt_amount(self, action: ActionKind) -> Optional[Decimal]:
        """Ask for a positive amount; None when the operator types back."""
        while True:
            answer = await self.prompt(
                f"\n{AMOUNT_PROMPTS[action]} (or \"{BACK_SENTINEL}\" to return to menu): "
            )
            if answer.lower() == BACK_SENTINEL:
                return None
            try:
                return parse_positive_decimal(answer)
            except ValidationError:
                logger.error("❌ Invalid amount. Please enter a positive number.")

    async def prompt_count(self, action: ActionKind) -> Optional[int]:
        """Ask for a positive repetition count; None when the operator types skip."""
        while True:
            answer = await self.prompt(
                f"{COUNT_PROMPTS[action]} (or \"{SKIP_SENTINEL}\" to return to menu): "
            )
            if answer.lower() == SKIP_SENTINEL:
                return None
            try:
                return parse_positive_int(answer)
            except ValidationError:
                logger.error("❌ Invalid number. Please enter a positive integer.")

    async def show_input_balances(
        self, action: ActionKind, wallets: Sequence[WalletAccount]
    ) -> None:
        symbol = ACTION_SPECS[
            ActionKind.SWAP_IN if action is ActionKind.AUTO_SEQUENCE else action
        ].input_token
        rows = []
        for wallet in wallets:
            balance = await self.balance_reader.get_balance(wallet, symbol)
            rows.append((wallet.address, format_amount(balance)))
        self.output(f"\nCurrent {symbol.value} Balances:")
        self.output(token_balances_table(symbol.value, rows))

    async def handle_action(self, action: ActionKind) -> None:
        """Collect wallet, amount and count, then run the batch."""
        wallets = await self.select_wallets()
        await self.show_input_balances(action, wallets)

        amount = await self.prompt_amount(action)
        if amount is None:
            return
        count = await self.prompt_count(action)
        if count is None:
            return

        await self.runner.run(wallets, action, amount, count, self.settings)

    async def show_balances(self) -> None:
        logger.info("Fetching balances for all wallets...")
        await self.runner.run(
            self.wallets, ActionKind.SHOW_BALANCES, None, 1, self.settings
        )

    async def _prompt_setting(self, label: str, current, parse):
        answer = await self.prompt(f"{label}: ")
        if not answer:
            return current
        try:
            value = parse(answer)
        except ValidationError:
            logger.warning(f"⚠️ Invalid value for {label}; keeping {current}")
            return current
        return str(value) if isinstance(value, Decimal) else value

    async def adjust_gas_settings(self) -> GasSettings:
        """Prompt for each gas setting; Enter keeps the current value."""
        current = self.settings
        self.output("\nCurrent Gas Settings:")
        self.output(settings_table(current))
        self.output("\nEnter new values or press Enter to keep current values")

        self.settings = current.updated(
            max_fee_gwei=await self._prompt_setting(
                "Max Fee (gwei)", current.max_fee_gwei, parse_positive_decimal
            ),
            priority_fee_gwei=await self._prompt_setting(
                "Priority Fee (gwei)", current.priority_fee_gwei, parse_positive_decimal
            ),
            approval_gas_limit=await self._prompt_setting(
                "Gas Limit - Approval", current.approval_gas_limit, parse_positive_int
            ),
            swap_gas_limit=await self._prompt_setting(
                "Gas Limit - Swap", current.swap_gas_limit, parse_positive_int
            ),
            stake_gas_limit=await self._prompt_setting(
                "Gas Limit - Stake", current.stake_gas_limit, parse_positive_int
            ),
        )

        logger.info("✅ Gas settings updated successfully!")
        logger.info(
            f"Max Fee: {self.settings.max_fee_gwei} gwei, "
            f"Priority Fee: {self.settings.priority_fee_gwei} gwei"
        )
        logger.info(
            f"Gas Limits - Approval: {self.settings.approval_gas_limit}, "
            f"Swap: {self.settings.swap_gas_limit}, Stake: {self.settings.stake_gas_limit}"
        )
        return self.settings
