"""
Wallet accounts bound to a network connection.

A WalletAccount is created once at startup from a validated private key and
is never modified afterwards.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from .config import AppConfig, ProxyConfig, load_private_keys, load_proxies, parse_proxy
from .exceptions import ConfigurationError, NetworkError, ValidationError
from .utils import get_logger, mask_secret, run_sync

logger = get_logger(__name__)


@dataclass(frozen=True)
class WalletAccount:
    """
    A signing account and the Web3 connection it submits through.

    Attributes:
        address: Checksum address derived from the key
        signer: Local signer holding the private key
        web3: Web3 instance connected to the configured RPC endpoint
    """

    address: str
    signer: LocalAccount
    web3: Web3

    def __repr__(self) -> str:
        return f"WalletAccount(address={self.address!r})"


def build_web3(config: AppConfig, proxy: Optional[ProxyConfig] = None) -> Web3:
    """Create a Web3 HTTP connection, tunneled through a proxy when given."""
    request_kwargs = {"timeout": config.rpc_timeout_sec}
    if proxy is not None:
        request_kwargs["proxies"] = proxy.as_requests_proxies()
    return Web3(Web3.HTTPProvider(config.rpc_url, request_kwargs=request_kwargs))


async def connect_wallet(
    private_key: str, config: AppConfig, proxy_string: Optional[str] = None
) -> WalletAccount:
    """
    Connect one wallet and verify the endpoint serves the configured chain.

    Raises:
        NetworkError: If the endpoint is unreachable or on another chain
        ValidationError: If the key is not a usable secp256k1 key or the
            proxy string is malformed
    """
    try:
        signer = Account.from_key(private_key)
    except ValueError as e:
        raise ValidationError(
            f"Invalid private key {mask_secret(private_key)}: {e}"
        ) from e

    proxy = None
    if proxy_string:
        proxy = parse_proxy(proxy_string)
        logger.info(f"Using proxy: {proxy.host}:{proxy.port}")

    logger.info(f"Connecting to {config.network_name} testnet via: {config.rpc_url}")
    web3 = build_web3(config, proxy)

    try:
        chain_id = await run_sync(lambda: web3.eth.chain_id)
    except Exception as e:
        raise NetworkError(
            f"Failed to reach RPC endpoint: {e}", endpoint=config.rpc_url
        ) from e

    if chain_id != config.chain_id:
        raise NetworkError(
            f"RPC endpoint serves chain {chain_id}, expected {config.chain_id}",
            endpoint=config.rpc_url,
        )
    logger.info(f"✅ Connected to network: {config.network_name} (chainId: {chain_id})")

    logger.info(f"👛 Connected with wallet: {signer.address}")
    return WalletAccount(address=signer.address, signer=signer, web3=web3)


async def load_wallets(config: AppConfig, environ=None) -> List[WalletAccount]:
    """
    Connect every valid private key found in the environment.

    Wallets are connected one after another; each picks a random proxy from
    the proxies file, or connects directly when there is none.

    Raises:
        ConfigurationError: If no key is valid or no wallet could connect
    """
    proxies = load_proxies(config.proxies_file)
    private_keys = load_private_keys(environ, config.private_key_prefix)

    wallets = []
    for private_key in private_keys:
        proxy_string = random.choice(proxies) if proxies else None
        try:
            wallets.append(await connect_wallet(private_key, config, proxy_string))
        except (NetworkError, ValidationError) as e:
            logger.error(
                f"❌ Failed to initialize wallet for key {mask_secret(private_key)}: {e}"
            )

    if not wallets:
        raise ConfigurationError("No valid wallets initialized")
    return wallets
