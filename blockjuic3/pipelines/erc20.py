"""ERC-20 transfer enrichment.

Transfers whose token metadata cannot be resolved are dropped.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from blockjuic3.abi import TRANSFER_EVENT, decode_event_log, format_units
from blockjuic3.clients.evm_client import EvmClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.formatter import format_transfers
from blockjuic3.logging_config import get_logger
from blockjuic3.models.chain import BASE, Chain
from blockjuic3.models.events import EnrichedTransferEvent, LogRecord, RawTransferEvent
from blockjuic3.models.token import TokenMetadata
from blockjuic3.pipelines.base import EnrichmentPipeline, EventKind, TokenReferences
from blockjuic3.services.token_service import TokenMetadataResolver
from blockjuic3.utils.errors import DataParsingError
from blockjuic3.utils.validation import checksum_address

logger = get_logger(__name__)


def aggregate_token_addresses(transfers: Iterable[RawTransferEvent]) -> Set[str]:
    """Distinct token addresses referenced by a batch of transfers."""
    return {transfer.token for transfer in transfers}


class Erc20TransferKind(EventKind[RawTransferEvent, EnrichedTransferEvent]):
    """ERC-20 ``Transfer`` events."""
    
    name = "erc20_transfers"
    event = TRANSFER_EVENT
    
    def decode(self, log: LogRecord) -> Optional[RawTransferEvent]:
        # Transfers without a value payload (e.g. ERC-721) are out of scope
        if not log.has_data:
            return None
        try:
            args = decode_event_log(self.event, log.topics, log.data)
        except DataParsingError as e:
            logger.debug(f"Skipping undecodable transfer log from {log.address}: {e.message}")
            return None
        
        return RawTransferEvent(
            from_address=args["from"],
            to_address=args["to"],
            amount=args["value"],
            token=checksum_address(log.address),
        )
    
    async def collect_referenced_tokens(
        self,
        events: List[RawTransferEvent],
        client: EvmClient
    ) -> TokenReferences:
        return TokenReferences(addresses=aggregate_token_addresses(events))
    
    def join(
        self,
        events: List[RawTransferEvent],
        references: TokenReferences,
        metadata: Dict[str, TokenMetadata]
    ) -> List[EnrichedTransferEvent]:
        enriched: List[EnrichedTransferEvent] = []
        for transfer in events:
            token = metadata.get(transfer.token)
            if token is None:
                logger.debug(f"Dropping transfer of unresolved token {transfer.token}")
                continue
            
            parsed_amount = format_units(transfer.amount, token.decimals)
            enriched.append(EnrichedTransferEvent(
                from_address=transfer.from_address,
                to_address=transfer.to_address,
                amount=transfer.amount,
                token=token,
                parsed_amount=parsed_amount,
                amount_usd=float(parsed_amount) * token.price,
            ))
        return enriched
    
    def format(
        self,
        events: List[EnrichedTransferEvent],
        block_number: int,
        agent_name: str,
        chain_name: str
    ) -> str:
        return format_transfers(events, block_number, agent_name, chain_name)


def create_erc20_transfers_provider(
    registry: ChainClientRegistry,
    resolver: TokenMetadataResolver,
    chain: Chain = BASE,
    logger: Optional[logging.Logger] = None
) -> EnrichmentPipeline[RawTransferEvent, EnrichedTransferEvent]:
    """Build the ERC-20 transfers provider for a chain."""
    return EnrichmentPipeline(Erc20TransferKind(), registry, resolver, chain=chain, logger=logger)
