"""Uniswap V3 swap enrichment.

Pool tokens are read on chain; swaps whose tokens cannot be resolved are
still reported, with their metadata left unset.
"""

import logging
from typing import Dict, List, Optional, Tuple

from blockjuic3.abi import SWAP_EVENT, UNISWAP_V3_POOL_ABI, decode_event_log, format_units
from blockjuic3.clients.evm_client import ContractCall, EvmClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.constants import NO_SWAPS_FOUND
from blockjuic3.formatter import format_swaps
from blockjuic3.logging_config import get_logger
from blockjuic3.models.chain import BASE, Chain
from blockjuic3.models.events import EnrichedSwapEvent, LogRecord, PoolTokenPair, RawSwapEvent
from blockjuic3.models.token import TokenMetadata
from blockjuic3.pipelines.base import EnrichmentPipeline, EventKind, TokenReferences
from blockjuic3.services.token_service import TokenMetadataResolver
from blockjuic3.utils.errors import DataParsingError
from blockjuic3.utils.validation import checksum_address

logger = get_logger(__name__)


async def get_pool_tokens(pools: List[str], client: EvmClient) -> TokenReferences:
    """
    Read ``token0`` and ``token1`` of every pool in one multicall.
    
    A failed read leaves its slot unset; the pool is still recorded.
    
    Args:
        pools: Distinct pool addresses
        client: Client for the pools' chain
        
    Returns:
        Pool token pairs and the set of tokens found
    """
    calls = [
        ContractCall(address=pool, abi=UNISWAP_V3_POOL_ABI, function_name=function_name)
        for pool in pools
        for function_name in ("token0", "token1")
    ]
    results = await client.multicall(calls)
    
    references = TokenReferences()
    for i, pool in enumerate(pools):
        token0_result, token1_result = results[i * 2], results[i * 2 + 1]
        pair = PoolTokenPair()
        if token0_result.ok:
            pair.token0 = checksum_address(token0_result.result)
            references.addresses.add(pair.token0)
        if token1_result.ok:
            pair.token1 = checksum_address(token1_result.result)
            references.addresses.add(pair.token1)
        references.pools[pool] = pair
    return references


def _parse(amount: int, token: Optional[TokenMetadata]) -> Tuple[Optional[str], Optional[float]]:
    if token is None:
        return None, None
    parsed = format_units(amount, token.decimals)
    return parsed, float(parsed) * token.price


class UniswapV3SwapKind(EventKind[RawSwapEvent, EnrichedSwapEvent]):
    """Uniswap V3 pool ``Swap`` events."""
    
    name = "univ3_swaps"
    event = SWAP_EVENT
    
    def decode(self, log: LogRecord) -> Optional[RawSwapEvent]:
        if not log.has_data:
            return None
        try:
            args = decode_event_log(self.event, log.topics, log.data)
        except DataParsingError as e:
            logger.debug(f"Skipping undecodable swap log from {log.address}: {e.message}")
            return None
        
        return RawSwapEvent(
            pool=checksum_address(log.address),
            sender=args["sender"],
            recipient=args["recipient"],
            amount0=args["amount0"],
            amount1=args["amount1"],
            sqrt_price_x96=args["sqrtPriceX96"],
            liquidity=args["liquidity"],
            tick=args["tick"],
        )
    
    async def collect_referenced_tokens(
        self,
        events: List[RawSwapEvent],
        client: EvmClient
    ) -> TokenReferences:
        pools = list(dict.fromkeys(swap.pool for swap in events))
        return await get_pool_tokens(pools, client)
    
    def join(
        self,
        events: List[RawSwapEvent],
        references: TokenReferences,
        metadata: Dict[str, TokenMetadata]
    ) -> List[EnrichedSwapEvent]:
        enriched: List[EnrichedSwapEvent] = []
        for swap in events:
            pair = references.pools.get(swap.pool, PoolTokenPair())
            token0 = metadata.get(pair.token0) if pair.token0 else None
            token1 = metadata.get(pair.token1) if pair.token1 else None
            parsed_amount0, amount0_usd = _parse(swap.amount0, token0)
            parsed_amount1, amount1_usd = _parse(swap.amount1, token1)
            
            # Negative amount0 means token0 left the pool
            if swap.amount0 < 0:
                input_token, output_token = token0, token1
            else:
                input_token, output_token = token1, token0
            
            enriched.append(EnrichedSwapEvent(
                **swap.model_dump(),
                token0=token0,
                token1=token1,
                input_token=input_token,
                output_token=output_token,
                parsed_amount0=parsed_amount0,
                parsed_amount1=parsed_amount1,
                parsed_amount0_usd=amount0_usd,
                parsed_amount1_usd=amount1_usd,
            ))
        return enriched
    
    def format(
        self,
        events: List[EnrichedSwapEvent],
        block_number: int,
        agent_name: str,
        chain_name: str
    ) -> str:
        return format_swaps(events, block_number, agent_name, chain_name)
    
    def format_empty(self, block_number: int, agent_name: str, chain_name: str) -> str:
        return NO_SWAPS_FOUND


def create_univ3_swaps_provider(
    registry: ChainClientRegistry,
    resolver: TokenMetadataResolver,
    chain: Chain = BASE,
    logger: Optional[logging.Logger] = None
) -> EnrichmentPipeline[RawSwapEvent, EnrichedSwapEvent]:
    """Build the Uniswap V3 swaps provider for a chain."""
    return EnrichmentPipeline(UniswapV3SwapKind(), registry, resolver, chain=chain, logger=logger)
