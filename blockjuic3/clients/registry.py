"""Registry of per-chain RPC clients.

Services receive the registry at construction and look clients up by
chain; there is no module-level client.
"""

from typing import Dict, Iterable, List, Optional

import httpx

from blockjuic3.clients.evm_client import EvmClient
from blockjuic3.config import ChainConfig, get_chain_configs
from blockjuic3.logging_config import get_logger
from blockjuic3.models.chain import Chain
from blockjuic3.utils.errors import UnknownChainError

logger = get_logger(__name__)


class ChainClientRegistry:
    """Maps chain ids to EVM clients."""
    
    def __init__(self, clients: Optional[Dict[int, EvmClient]] = None):
        """Initialize the registry.
        
        Args:
            clients: Clients keyed by chain id
        """
        self._clients: Dict[int, EvmClient] = dict(clients or {})
    
    @classmethod
    def from_configs(
        cls,
        configs: Optional[Iterable[ChainConfig]] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "ChainClientRegistry":
        """Build one client per configured chain.
        
        Args:
            configs: Chain configurations; defaults to the environment
            http_client: Optional HTTP client shared by every chain client
            
        Returns:
            A populated registry
        """
        configs = list(configs if configs is not None else get_chain_configs())
        registry = cls()
        for config in configs:
            registry.register(config.chain, EvmClient(config, http_client=http_client))
        logger.info(f"Chain client registry initialized for {len(configs)} chain(s)")
        return registry
    
    def register(self, chain: Chain, client: EvmClient) -> None:
        """Register or replace the client for a chain."""
        self._clients[chain.id] = client
    
    def get(self, chain: Chain) -> EvmClient:
        """Get the client for a chain.
        
        Raises:
            UnknownChainError: If no client is configured for the chain
        """
        try:
            return self._clients[chain.id]
        except KeyError:
            raise UnknownChainError(chain.id)
    
    @property
    def chain_ids(self) -> List[int]:
        return list(self._clients)
    
    async def close(self) -> None:
        """Close every registered client."""
        for client in self._clients.values():
            await client.close()
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
