"""
Plugin descriptor for the agent runtime.

The plugin exposes the transfer and swap providers of one chain, plus an
``analyzeBlock`` action that answers with both summaries.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from blockjuic3.clients.price_client import PriceOracleClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.logging_config import get_logger
from blockjuic3.models.chain import BASE, Chain
from blockjuic3.models.runtime import AgentRuntime, Memory, Provider, State
from blockjuic3.pipelines.erc20 import create_erc20_transfers_provider
from blockjuic3.pipelines.univ3 import create_univ3_swaps_provider
from blockjuic3.services.token_service import TokenMetadataResolver

logger = get_logger(__name__)

PLUGIN_NAME = "blockjuic3"
PLUGIN_DESCRIPTION = "Squeezing the juice out of EVM blocks"

Handler = Callable[[AgentRuntime, Memory, Optional[State]], Awaitable[str]]
Validator = Callable[[AgentRuntime, Memory], Awaitable[bool]]


@dataclass
class Action:
    """An action the agent can take in response to a message."""
    
    name: str
    description: str
    handler: Handler
    validate: Validator
    similes: List[str] = field(default_factory=list)
    examples: List[List[Dict[str, Any]]] = field(default_factory=list)


@dataclass
class Plugin:
    """A bundle of providers and actions registered with the agent runtime."""
    
    name: str
    description: str
    providers: List[Provider] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)
    registry: Optional[ChainClientRegistry] = None
    price_client: Optional[PriceOracleClient] = None
    
    async def close(self) -> None:
        """Release the plugin's network clients."""
        if self.registry is not None:
            await self.registry.close()
        if self.price_client is not None:
            await self.price_client.close()


def create_analyze_block_action(providers: List[Provider]) -> Action:
    """Build the ``analyzeBlock`` action over the given providers."""
    
    async def validate(runtime: AgentRuntime, message: Memory) -> bool:
        return True
    
    async def handler(runtime: AgentRuntime, message: Memory, state: Optional[State] = None) -> str:
        summaries = [await provider.get(runtime, message, state) for provider in providers]
        return "\n".join(summaries)
    
    return Action(
        name="analyzeBlock",
        description="Analyze an EVM block for interesting transactions and patterns",
        handler=handler,
        validate=validate,
        similes=["analyze block", "inspect block", "examine block"],
        examples=[
            [
                {"user": "user", "content": {"text": "What happened in the latest block?"}},
                {"user": "assistant", "content": {"text": "Let me analyze that block for you..."}},
            ],
        ],
    )


def create_plugin(
    registry: Optional[ChainClientRegistry] = None,
    price_client: Optional[PriceOracleClient] = None,
    chain: Chain = BASE
) -> Plugin:
    """
    Wire clients, the metadata resolver and both providers into a plugin.
    
    Args:
        registry: Chain clients; built from the environment if omitted
        price_client: Price oracle client; built from the environment if omitted
        chain: Chain the providers read
        
    Returns:
        The plugin
    """
    registry = registry or ChainClientRegistry.from_configs()
    price_client = price_client or PriceOracleClient()
    resolver = TokenMetadataResolver(price_client, registry)
    
    providers: List[Provider] = [
        create_erc20_transfers_provider(registry, resolver, chain=chain),
        create_univ3_swaps_provider(registry, resolver, chain=chain),
    ]
    logger.info(f"Plugin {PLUGIN_NAME} created with {len(providers)} providers on {chain.name}")
    
    return Plugin(
        name=PLUGIN_NAME,
        description=PLUGIN_DESCRIPTION,
        providers=providers,
        actions=[create_analyze_block_action(providers)],
        registry=registry,
        price_client=price_client,
    )
