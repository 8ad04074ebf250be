"""Client modules for blockjuic3.

This package provides the chain JSON-RPC clients and the price oracle client.
"""

from blockjuic3.clients.base_client import BaseEvmClient
from blockjuic3.clients.evm_client import ContractCall, EvmClient, MulticallResult
from blockjuic3.clients.price_client import PriceOracleClient
from blockjuic3.clients.registry import ChainClientRegistry

__all__ = [
    'BaseEvmClient',
    'ChainClientRegistry',
    'ContractCall',
    'EvmClient',
    'MulticallResult',
    'PriceOracleClient',
]
