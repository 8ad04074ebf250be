"""Configuration module for the blockjuic3 plugin."""

# Standard library imports
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, List, Optional

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from blockjuic3.constants import (
    DEFAULT_BASE_RPC_URL,
    DEFAULT_PRICE_ORACLE_URL,
    MULTICALL3_ADDRESS,
)
from blockjuic3.logging_config import DEFAULT_LOG_FORMAT
from blockjuic3.models.chain import BASE, Chain
from blockjuic3.utils.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_env_var(key: str, default: Any = None, required: bool = False, 
               validator: Optional[callable] = None) -> Any:
    """Get and validate environment variable.
    
    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ValueError when not found
        validator: Optional validation function
        
    Returns:
        The environment variable value or default
        
    Raises:
        ValueError: If required and not found, or fails validation
    """
    value = os.environ.get(key)
    
    if value is None:
        if required:
            raise ValueError(f"Required environment variable '{key}' not found")
        return default
    
    if validator:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")
    
    return value


def float_validator(value: str) -> float:
    """Validate and convert string to a positive float.
    
    Args:
        value: String value to convert
        
    Returns:
        Float value
        
    Raises:
        ValueError: If not a positive number
    """
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid number")
    if number <= 0:
        raise ValueError(f"'{value}' must be positive")
    return number


def url_validator(value: str) -> str:
    """Validate URL format.
    
    Args:
        value: URL to validate
        
    Returns:
        The validated URL without a trailing slash
        
    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)
    
    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value.rstrip("/")


def log_level_validator(value: str) -> str:
    """Validate log level.
    
    Args:
        value: Log level to validate
        
    Returns:
        The validated log level
        
    Raises:
        ValueError: If not a valid log level
    """
    upper_value = value.upper()
    if upper_value not in VALID_LOG_LEVELS:
        raise ValueError(f"Log level must be one of: {', '.join(VALID_LOG_LEVELS)}")
    return upper_value


@dataclass
class ChainConfig:
    """Configuration for one chain's JSON-RPC connection."""
    
    chain: Chain
    rpc_url: str
    timeout: float = 30.0  # seconds
    multicall_address: str = MULTICALL3_ADDRESS
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.rpc_url:
            raise ConfigurationError(
                f"RPC URL is required for chain {self.chain.name}",
                details={"setting": "rpc_url", "chain_id": self.chain.id}
            )
        if self.timeout <= 0:
            raise ConfigurationError(
                "RPC timeout must be positive",
                details={"setting": "timeout", "value": self.timeout}
            )


@dataclass
class PriceOracleConfig:
    """Configuration for the price oracle HTTP API."""
    
    base_url: str = DEFAULT_PRICE_ORACLE_URL
    timeout: float = 30.0  # seconds
    
    @property
    def prices_url(self) -> str:
        """URL prefix for current-price lookups."""
        return f"{self.base_url.rstrip('/')}/prices/current/"
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.timeout <= 0:
            raise ConfigurationError(
                "Price oracle timeout must be positive",
                details={"setting": "timeout", "value": self.timeout}
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    
    level: str = "INFO"
    format: str = field(default=DEFAULT_LOG_FORMAT)
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.level}",
                details={"setting": "level", "value": self.level}
            )


@lru_cache()
def get_chain_configs() -> List[ChainConfig]:
    """Get RPC configuration for every supported chain.
    
    Returns:
        List of ChainConfig instances
        
    Raises:
        ValueError: If environment variables fail validation
    """
    return [
        ChainConfig(
            chain=BASE,
            rpc_url=get_env_var("BASE_RPC_URL", DEFAULT_BASE_RPC_URL,
                                validator=url_validator),
            timeout=get_env_var("RPC_TIMEOUT", 30.0, validator=float_validator),
        )
    ]


@lru_cache()
def get_price_oracle_config() -> PriceOracleConfig:
    """Get price oracle configuration from environment variables.
    
    Returns:
        PriceOracleConfig instance
    """
    return PriceOracleConfig(
        base_url=get_env_var("PRICE_ORACLE_URL", DEFAULT_PRICE_ORACLE_URL,
                             validator=url_validator),
        timeout=get_env_var("PRICE_ORACLE_TIMEOUT", 30.0, validator=float_validator),
    )


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Get logging configuration from environment variables.
    
    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
    )
