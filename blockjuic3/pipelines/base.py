"""
Generic enrichment pipeline.

A pipeline reads one event type from the latest block and runs
fetch -> decode -> collect referenced tokens -> resolve -> join -> format.
What differs between event types lives in an ``EventKind``.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Set, TypeVar

from blockjuic3.abi import AbiEntry
from blockjuic3.clients.evm_client import EvmClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.models.chain import BASE, Chain
from blockjuic3.models.events import LogRecord, PoolTokenPair
from blockjuic3.models.runtime import AgentRuntime, Memory, State
from blockjuic3.models.token import TokenMetadata
from blockjuic3.services.base_service import BaseService, handle_errors
from blockjuic3.services.event_service import EventFetcher
from blockjuic3.services.token_service import TokenMetadataResolver

RawT = TypeVar("RawT")
EnrichedT = TypeVar("EnrichedT")


@dataclass
class TokenReferences:
    """Token addresses referenced by a batch of events, plus pool lookups."""
    
    addresses: Set[str] = field(default_factory=set)
    pools: Dict[str, PoolTokenPair] = field(default_factory=dict)


class EventKind(ABC, Generic[RawT, EnrichedT]):
    """Event-type specific steps of an enrichment pipeline."""
    
    name: str
    event: AbiEntry
    
    @abstractmethod
    def decode(self, log: LogRecord) -> Optional[RawT]:
        """Decode one log; None means the log is skipped."""
    
    @abstractmethod
    async def collect_referenced_tokens(self, events: List[RawT], client: EvmClient) -> TokenReferences:
        """Collect the token addresses the events need metadata for."""
    
    @abstractmethod
    def join(
        self,
        events: List[RawT],
        references: TokenReferences,
        metadata: Dict[str, TokenMetadata]
    ) -> List[EnrichedT]:
        """Join events with token metadata, preserving event order."""
    
    @abstractmethod
    def format(self, events: List[EnrichedT], block_number: int, agent_name: str, chain_name: str) -> str:
        """Render enriched events."""
    
    def format_empty(self, block_number: int, agent_name: str, chain_name: str) -> str:
        """Render a block with no decodable events."""
        return self.format([], block_number, agent_name, chain_name)


class EnrichmentPipeline(BaseService, Generic[RawT, EnrichedT]):
    """Reads, enriches and renders one event type from the latest block.
    
    Also acts as an agent provider through ``get``.
    """
    
    def __init__(
        self,
        kind: EventKind[RawT, EnrichedT],
        registry: ChainClientRegistry,
        resolver: TokenMetadataResolver,
        chain: Chain = BASE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the pipeline.
        
        Args:
            kind: Event-type specific steps
            registry: Chain clients
            resolver: Token metadata resolver
            chain: Chain to read
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.kind = kind
        self.chain = chain
        self.client = registry.get(chain)
        self.fetcher = EventFetcher(self.client)
        self.resolver = resolver
    
    @property
    def name(self) -> str:
        return self.kind.name
    
    async def get(
        self,
        runtime: AgentRuntime,
        message: Optional[Memory] = None,
        state: Optional[State] = None
    ) -> str:
        """Provider entry point used by the agent runtime."""
        return await self.run(runtime.character.name)
    
    @handle_errors()
    async def run(self, agent_name: str) -> str:
        """
        Run the pipeline against the latest block.
        
        Args:
            agent_name: Display name used in the output
            
        Returns:
            The rendered summary
        """
        async with self.log_timing(f"{self.name} pipeline"):
            block_number, logs = await asyncio.gather(
                self.fetcher.get_latest_block_number(),
                self.fetcher.get_latest_logs(self.kind.event),
            )
            events = self.decode_logs(logs)
            if not events:
                return self.kind.format_empty(block_number, agent_name, self.chain.name)
            
            enriched = await self.enrich(events)
            return self.kind.format(enriched, block_number, agent_name, self.chain.name)
    
    def decode_logs(self, logs: List[LogRecord]) -> List[RawT]:
        """Decode logs in order, dropping the ones the kind skips."""
        events = [event for event in (self.kind.decode(log) for log in logs) if event is not None]
        if len(events) != len(logs):
            self.logger.debug(f"Skipped {len(logs) - len(events)} of {len(logs)} {self.name} log(s)")
        return events
    
    async def enrich(self, events: List[RawT]) -> List[EnrichedT]:
        """Resolve the metadata the events reference and join it in."""
        references = await self.kind.collect_referenced_tokens(events, self.client)
        metadata = await self.resolver.resolve_from_chain(self.chain, references.addresses)
        return self.kind.join(events, references, metadata)
