"""Validation utilities for blockjuic3.

This module provides utilities for validating and canonicalizing EVM addresses.
"""

import re
from typing import Any

from web3 import Web3

from blockjuic3.utils.errors import InvalidAddressError

# 20-byte hex address, any case
ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_address(address: Any) -> bool:
    """Validate an EVM address.
    
    Args:
        address: The address to validate
        
    Returns:
        True if the address is 20-byte hex, False otherwise
    """
    if not address or not isinstance(address, str):
        return False
    return bool(ADDRESS_PATTERN.match(address))


def checksum_address(address: Any) -> str:
    """Canonicalize an address to its checksum form.
    
    Args:
        address: The address in any letter case
        
    Returns:
        The checksummed address
        
    Raises:
        InvalidAddressError: If the value is not a 20-byte hex address
    """
    if not validate_address(address):
        raise InvalidAddressError(address)
    return Web3.to_checksum_address(address.lower())
