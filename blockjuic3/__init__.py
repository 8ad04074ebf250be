"""blockjuic3 package.

This package lets a conversational agent answer questions about the ERC-20
transfers and Uniswap V3 swaps in the latest block of an EVM chain.
"""

import logging

from blockjuic3.config import get_logging_config
from blockjuic3.logging_config import configure_logging
from blockjuic3.plugin import Action, Plugin, create_plugin
from blockjuic3.utils.errors import Blockjuic3Error, ConfigurationError
from blockjuic3.version import __version__

logger = logging.getLogger(__name__)

__all__ = [
    'Action',
    'Blockjuic3Error',
    'Plugin',
    'create_plugin',
    'initialize_plugin',
    '__version__',
]


def initialize_plugin() -> Plugin:
    """Initialize the blockjuic3 plugin.
    
    Configures logging from the environment and builds the plugin with
    environment-based clients.
    
    Returns:
        The plugin
        
    Raises:
        ConfigurationError: If there's an issue with the configuration
    """
    try:
        logging_config = get_logging_config()
    except ValueError as e:
        raise ConfigurationError(
            f"Failed to load logging configuration: {str(e)}",
            details={"original_error": str(e)}
        )
    configure_logging(logging_config.level, logging_config.format)
    
    logger.info(f"Initializing blockjuic3 v{__version__}")
    try:
        return create_plugin()
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid configuration: {str(e)}",
            details={"original_error": str(e)}
        )
