"""
Configuration loading for the R2 money bot.

Provides the immutable application config, the gas settings value passed to
every transaction-submitting operation, private key discovery and proxy
parsing.
"""

import os
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from .constants import (
    CHAIN_ID,
    DEFAULT_APPROVAL_GAS_LIMIT,
    DEFAULT_MAX_FEE_GWEI,
    DEFAULT_PRIORITY_FEE_GWEI,
    DEFAULT_STAKE_GAS_LIMIT,
    DEFAULT_SWAP_GAS_LIMIT,
    EXPLORER_URL,
    NETWORK_NAME,
    PRIVATE_KEY_ENV_PREFIX,
    PROXIES_FILE,
    RECEIPT_TIMEOUT_SEC,
    RPC_TIMEOUT_SEC,
    RPC_URL,
    GasLimitKind,
)
from .exceptions import ConfigurationError, ValidationError
from .utils import get_logger, is_positive_number, mask_secret

logger = get_logger(__name__)

_PRIVATE_KEY_RE = re.compile(r"^[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class GasSettings:
    """
    Fee and gas limit settings read by every transaction.

    Fees are kept as gwei strings so operator input such as "1.5" is
    converted to wei exactly.

    Attributes:
        max_fee_gwei: EIP-1559 max fee per gas, in gwei
        priority_fee_gwei: EIP-1559 max priority fee per gas, in gwei
        approval_gas_limit: Gas limit for token approvals
        swap_gas_limit: Gas limit for both swap directions
        stake_gas_limit: Gas limit for staking
    """

    max_fee_gwei: str = DEFAULT_MAX_FEE_GWEI
    priority_fee_gwei: str = DEFAULT_PRIORITY_FEE_GWEI
    approval_gas_limit: int = DEFAULT_APPROVAL_GAS_LIMIT
    swap_gas_limit: int = DEFAULT_SWAP_GAS_LIMIT
    stake_gas_limit: int = DEFAULT_STAKE_GAS_LIMIT

    def __post_init__(self):
        for name in ("max_fee_gwei", "priority_fee_gwei"):
            value = getattr(self, name)
            if not is_positive_number(value):
                raise ValidationError(f"{name} must be a positive number, got {value!r}")
            object.__setattr__(self, name, str(value).strip())
        for name in ("approval_gas_limit", "swap_gas_limit", "stake_gas_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValidationError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GasSettings":
        """Create settings from a config mapping, defaulting missing keys."""
        gas_limit = data.get("gas_limit", {}) or {}
        return cls(
            max_fee_gwei=str(data.get("max_fee_gwei", DEFAULT_MAX_FEE_GWEI)),
            priority_fee_gwei=str(
                data.get("priority_fee_gwei", DEFAULT_PRIORITY_FEE_GWEI)
            ),
            approval_gas_limit=int(
                gas_limit.get("approval", DEFAULT_APPROVAL_GAS_LIMIT)
            ),
            swap_gas_limit=int(gas_limit.get("swap", DEFAULT_SWAP_GAS_LIMIT)),
            stake_gas_limit=int(gas_limit.get("stake", DEFAULT_STAKE_GAS_LIMIT)),
        )

    def updated(self, **changes: Any) -> "GasSettings":
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes)

    def gas_limit(self, kind: GasLimitKind) -> int:
        """Gas limit for one operation kind."""
        return {
            GasLimitKind.APPROVAL: self.approval_gas_limit,
            GasLimitKind.SWAP: self.swap_gas_limit,
            GasLimitKind.STAKE: self.stake_gas_limit,
        }[kind]

    @property
    def max_fee(self) -> Decimal:
        return Decimal(self.max_fee_gwei)

    @property
    def priority_fee(self) -> Decimal:
        return Decimal(self.priority_fee_gwei)

    def to_rows(self) -> List[Tuple[str, Any]]:
        """Rows for the settings table."""
        return [
            ("Max Fee (gwei)", self.max_fee_gwei),
            ("Priority Fee (gwei)", self.priority_fee_gwei),
            ("Gas Limit - Approval", self.approval_gas_limit),
            ("Gas Limit - Swap", self.swap_gas_limit),
            ("Gas Limit - Stake", self.stake_gas_limit),
        ]


@dataclass(frozen=True)
class AppConfig:
    """Immutable runtime configuration object."""

    rpc_url: str = RPC_URL
    chain_id: int = CHAIN_ID
    network_name: str = NETWORK_NAME
    explorer_url: str = EXPLORER_URL
    private_key_prefix: str = PRIVATE_KEY_ENV_PREFIX
    proxies_file: str = PROXIES_FILE
    rpc_timeout_sec: int = RPC_TIMEOUT_SEC
    receipt_timeout_sec: int = RECEIPT_TIMEOUT_SEC
    gas: GasSettings = field(default_factory=GasSettings)


@dataclass(frozen=True)
class ProxyConfig:
    """HTTP(S) proxy parsed from host:port or user:pass@host:port."""

    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def url(self) -> str:
        if self.username:
            return f"http://{self.username}:{self.password or ''}@{self.host}:{self.port}"
        return f"http://{self.host}:{self.port}"

    def as_requests_proxies(self) -> Dict[str, str]:
        return {"http": self.url, "https": self.url}


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load and parse YAML configuration file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config_dict is None:
        raise ConfigurationError(f"Empty configuration file: {config_path}")
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file must contain a YAML mapping: {config_path}"
        )
    return config_dict


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Build the application config.

    Defaults are overlaid by the YAML file (if given) and then by the
    R2_RPC_URL / R2_PROXIES_FILE environment variables.

    Raises:
        ConfigurationError: If the file is missing or holds invalid values
    """
    environ = os.environ if environ is None else environ
    config_dict: Dict[str, Any] = {}
    if config_path is not None:
        config_dict = load_yaml_config(config_path)

    network = config_dict.get("network", {}) or {}
    try:
        gas = GasSettings.from_dict(config_dict.get("gas", {}) or {})
        config = AppConfig(
            rpc_url=environ.get("R2_RPC_URL") or network.get("rpc_url", RPC_URL),
            chain_id=int(network.get("chain_id", CHAIN_ID)),
            network_name=network.get("name", NETWORK_NAME),
            explorer_url=network.get("explorer_url", EXPLORER_URL),
            private_key_prefix=config_dict.get(
                "private_key_prefix", PRIVATE_KEY_ENV_PREFIX
            ),
            proxies_file=environ.get("R2_PROXIES_FILE")
            or config_dict.get("proxies_file", PROXIES_FILE),
            rpc_timeout_sec=int(network.get("timeout_sec", RPC_TIMEOUT_SEC)),
            receipt_timeout_sec=int(
                network.get("receipt_timeout_sec", RECEIPT_TIMEOUT_SEC)
            ),
            gas=gas,
        )
    except (ValidationError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if not config.rpc_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"Invalid RPC URL format: {config.rpc_url}")
    return config


def is_valid_private_key(key: str) -> bool:
    """Check for 64 hex characters, with an optional 0x prefix."""
    clean_key = key[2:] if key.startswith("0x") else key
    return bool(_PRIVATE_KEY_RE.match(clean_key))


def load_private_keys(
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = PRIVATE_KEY_ENV_PREFIX,
) -> List[str]:
    """
    Collect valid private keys from environment entries named <prefix>*.

    Raises:
        ConfigurationError: If no valid key is found
    """
    environ = os.environ if environ is None else environ
    keys = []
    for name in sorted(k for k in environ if k.startswith(prefix)):
        value = (environ[name] or "").strip()
        if not value:
            continue
        if not is_valid_private_key(value):
            logger.error(
                f"❌ Invalid private key format for {mask_secret(value)} ({name}): "
                "must be 64 hex characters"
            )
            continue
        keys.append(value)

    logger.info(f"Loaded {len(keys)} private keys from environment")
    if not keys:
        raise ConfigurationError(f"No valid private keys found in environment ({prefix}*)")
    return keys


def parse_proxy(proxy_string: str) -> ProxyConfig:
    """
    Parse host:port or user:pass@host:port, with an optional scheme.

    Raises:
        ValidationError: If host or port is missing or the port is not numeric
    """
    proxy = (proxy_string or "").strip()
    if not proxy:
        raise ValidationError("Empty proxy string")
    if "://" in proxy:
        proxy = proxy.split("://", 1)[1]

    auth = ""
    address = proxy
    if "@" in proxy:
        auth, address = proxy.rsplit("@", 1)

    host, _, port = address.partition(":")
    if not host or not port.isdigit():
        raise ValidationError(f"Invalid proxy address: {proxy_string!r}")

    username = password = None
    if auth:
        username, _, password = auth.partition(":")

    return ProxyConfig(host=host, port=int(port), username=username, password=password)


def load_proxies(path: Union[str, Path]) -> List[str]:
    """Read non-empty proxy lines; a missing file means direct connections."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"⚠️ {path} not found. Will connect directly.")
        return []

    with open(path, "r") as f:
        proxies = [line.strip() for line in f if line.strip()]
    logger.info(f"Loaded {len(proxies)} proxies from {path}")
    return proxies
