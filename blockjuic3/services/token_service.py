"""
Token metadata resolution for blockjuic3.

Metadata comes from the price oracle first. Tokens the oracle does not
know are read on chain (``symbol`` and ``decimals`` in one multicall per
chain) and get a price of 0.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from blockjuic3.abi import ERC20_ABI
from blockjuic3.clients.evm_client import ContractCall
from blockjuic3.clients.price_client import PriceOracleClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.models.chain import Chain
from blockjuic3.models.token import ChainToken, TokenMetadata
from blockjuic3.services.base_service import BaseService

TokenMap = Dict[str, TokenMetadata]


class TokenMetadataResolver(BaseService):
    """Resolves token metadata from the price oracle with an on-chain fallback."""
    
    def __init__(
        self,
        price_client: PriceOracleClient,
        registry: ChainClientRegistry,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the resolver.
        
        Args:
            price_client: Price oracle client
            registry: Chain clients used for the on-chain fallback
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.price_client = price_client
        self.registry = registry
    
    async def resolve(self, tokens: Iterable[ChainToken]) -> TokenMap:
        """
        Resolve metadata for a set of tokens.
        
        Args:
            tokens: Tokens to resolve
            
        Returns:
            Mapping of checksummed address to metadata. Tokens found
            neither by the oracle nor on chain are absent.
            
        Raises:
            ExternalServiceError, DataParsingError: If the oracle lookup fails
            RpcError: If the on-chain fallback fails as a whole
        """
        requested = list(OrderedDict.fromkeys(tokens))
        if not requested:
            return {}
        
        token_map = await self.price_client.fetch_prices(requested)
        missing = self.get_missing_tokens(requested, token_map)
        if not missing:
            return token_map
        
        self.logger.info(f"{len(missing)} token(s) unknown to the price oracle, reading on chain")
        on_chain = await self.fetch_missing_tokens(missing)
        
        merged = dict(on_chain)
        merged.update(token_map)
        return merged
    
    async def resolve_from_chain(self, chain: Chain, addresses: Iterable[str]) -> TokenMap:
        """
        Resolve metadata for addresses on a single chain.
        
        Args:
            chain: Chain the addresses live on
            addresses: Token addresses
            
        Returns:
            Mapping of checksummed address to metadata
        """
        return await self.resolve(ChainToken(chain=chain, address=address) for address in addresses)
    
    @staticmethod
    def get_missing_tokens(requested: Iterable[ChainToken], token_map: TokenMap) -> List[ChainToken]:
        """Return the requested tokens that have no entry in the map."""
        return [token for token in requested if token.address not in token_map]
    
    async def fetch_missing_tokens(self, missing: Iterable[ChainToken]) -> TokenMap:
        """
        Read symbol and decimals on chain, one multicall per chain.
        
        A token is kept only when both reads succeed.
        
        Args:
            missing: Tokens to read
            
        Returns:
            Mapping of checksummed address to metadata with price 0
        """
        by_chain: Dict[int, List[ChainToken]] = {}
        for token in missing:
            by_chain.setdefault(token.chain.id, []).append(token)
        
        results: TokenMap = {}
        for chain_tokens in by_chain.values():
            chain = chain_tokens[0].chain
            client = self.registry.get(chain)
            calls = [
                ContractCall(address=token.address, abi=ERC20_ABI, function_name=function_name)
                for token in chain_tokens
                for function_name in ("symbol", "decimals")
            ]
            call_results = await client.multicall(calls)
            
            # Results come back in pairs (symbol, decimals)
            for i, token in enumerate(chain_tokens):
                symbol_result = call_results[i * 2]
                decimals_result = call_results[i * 2 + 1]
                if not (symbol_result.ok and decimals_result.ok):
                    self.logger.debug(f"Could not read metadata for {token.address} on {chain.name}")
                    continue
                results[token.address] = TokenMetadata(
                    address=token.address,
                    symbol=symbol_result.result,
                    decimals=int(decimals_result.result),
                    price=0.0,
                )
        
        return results
