"""Enrichment pipelines for on-chain events."""

from blockjuic3.pipelines.base import EnrichmentPipeline, EventKind, TokenReferences
from blockjuic3.pipelines.erc20 import (
    Erc20TransferKind,
    aggregate_token_addresses,
    create_erc20_transfers_provider,
)
from blockjuic3.pipelines.univ3 import (
    UniswapV3SwapKind,
    create_univ3_swaps_provider,
    get_pool_tokens,
)

__all__ = [
    'EnrichmentPipeline',
    'Erc20TransferKind',
    'EventKind',
    'TokenReferences',
    'UniswapV3SwapKind',
    'aggregate_token_addresses',
    'create_erc20_transfers_provider',
    'create_univ3_swaps_provider',
    'get_pool_tokens',
]
