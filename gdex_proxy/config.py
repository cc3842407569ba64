"""
Configuration management for the swap proxy

Loads settings from environment variables and .env file.
Includes logging configuration with optional rotating file output.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # gdex_proxy package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class ZeroExConfig:
    """0x swap API configuration (allowance-holder flow)"""
    api_key: Optional[str] = field(default_factory=lambda: _get_env("ZEROX_API_KEY", None))
    base_url: str = field(default_factory=lambda: _get_env("ZEROX_BASE_URL", "https://api.0x.org"))
    api_version: str = field(default_factory=lambda: _get_env("ZEROX_API_VERSION", "v2"))
    # Per-call timeout; there is no retry, so this bounds each request
    timeout: float = field(default_factory=lambda: _get_env_float("ZEROX_TIMEOUT", 10.0))
    price_path: str = "/swap/allowance-holder/price"
    quote_path: str = "/swap/allowance-holder/quote"


@dataclass
class RpcConfig:
    """Node JSON-RPC configuration (optional, enables gas/fee augmentation)"""
    url: str = field(default_factory=lambda: _get_env("ETH_RPC_URL", ""))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 8.0))


@dataclass
class TradingConfig:
    """Swap parameter defaults"""
    # Only this chain is served
    chain_id: int = field(default_factory=lambda: _get_env_int("CHAIN_ID", 1))
    # Slippage as a fraction (0.02 = 2%), converted to bps for the aggregator
    default_slippage: float = field(default_factory=lambda: _get_env_float("DEFAULT_SLIPPAGE", 0.02))
    max_slippage: float = field(default_factory=lambda: _get_env_float("MAX_SLIPPAGE", 0.2))
    # Integrator fee on the bought token; percentage "0" disables it
    fee_recipient: str = field(default_factory=lambda: _get_env("INTEGRATOR_FEE_RECIPIENT", ""))
    fee_percentage: str = field(default_factory=lambda: _get_env("INTEGRATOR_FEE_PERCENTAGE", "0"))


@dataclass
class GasConfig:
    """Gas limit and EIP-1559 fee suggestion settings"""
    # Estimate + estimate // divisor (5 = 20% buffer)
    gas_buffer_divisor: int = 5
    # maxFeePerGas = baseFee * multiplier + tip
    base_fee_multiplier: int = 2
    # Tip used when eth_maxPriorityFeePerGas is unavailable
    fallback_priority_fee_gwei: str = field(
        default_factory=lambda: _get_env("GAS_FALLBACK_PRIORITY_FEE_GWEI", "1.5")
    )


@dataclass
class ServerConfig:
    """HTTP listener configuration"""
    host: str = field(default_factory=lambda: _get_env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _get_env_int("PORT", 8080))
    cors_origins: str = field(default_factory=lambda: _get_env("CORS_ORIGINS", "*"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@dataclass
class LoggingConfig:
    """
    Logging configuration with optional file output.

    Environment variables:
        LOG_FILE: Path to log file (default: none, console only)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Loads all settings from environment variables and .env file.

    Usage:
        from gdex_proxy.config import config

        print(config.zerox.base_url)
        print(config.rpc.url)
    """
    zerox: ZeroExConfig = field(default_factory=ZeroExConfig)
    rpc: RpcConfig = field(default_factory=RpcConfig)
    trading: TradingConfig = field(default_factory=TradingConfig)
    gas: GasConfig = field(default_factory=GasConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Get global configuration instance"""
    return config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global config
    config = Config.reload()
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "gdex_proxy",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for console and/or file output with rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: gdex_proxy)

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to flush buffers and release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
