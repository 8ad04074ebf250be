"""Rendering of enriched events into text for the agent.

Separator characters inside token symbols are not escaped.
"""

from string import Template
from typing import Any, List, Optional

from blockjuic3.models.events import EnrichedSwapEvent, EnrichedTransferEvent
from blockjuic3.models.token import TokenMetadata

UNKNOWN = "unknown"
EVENT_SEPARATOR = " | "

TRANSFERS_TEMPLATE = Template(
    "$agent_name knows the following onchain transfers for block on $chain_name "
    "$block_number: $transfers"
)
TRANSFER_LINE_TEMPLATE = Template(
    "$amount $symbol transferred from $from_address to $to_address "
    "for a total amount USD of $amount_usd"
)

SWAPS_TEMPLATE = Template(
    "$agent_name is aware of $count swaps in the block $block_number on chain $chain_name.\n"
    "Here are the details:\n"
    "$swaps"
)
SWAP_BLOCK_TEMPLATE = Template(
    "- $input_symbol -> $output_symbol\n"
    "- Amount: $amount0 $symbol0\n"
    "- Amount: $amount1 $symbol1\n"
    "- Price: $amount0_usd USD\n"
    "- Price: $amount1_usd USD"
)


def _symbol(token: Optional[TokenMetadata]) -> str:
    return token.symbol if token is not None else UNKNOWN


def _value(value: Any) -> str:
    return UNKNOWN if value is None else str(value)


def format_transfer(transfer: EnrichedTransferEvent) -> str:
    """Render one transfer as a single line."""
    return TRANSFER_LINE_TEMPLATE.substitute(
        amount=transfer.parsed_amount,
        symbol=transfer.token.symbol,
        from_address=transfer.from_address,
        to_address=transfer.to_address,
        amount_usd=transfer.amount_usd,
    )


def format_transfers(
    transfers: List[EnrichedTransferEvent],
    block_number: int,
    agent_name: str,
    chain_name: str
) -> str:
    """Render a block's transfers as one line of text.
    
    Args:
        transfers: Enriched transfers, in log order
        block_number: Block the transfers were read from
        agent_name: Display name of the agent
        chain_name: Display name of the chain
        
    Returns:
        The rendered summary
    """
    return TRANSFERS_TEMPLATE.substitute(
        agent_name=agent_name,
        chain_name=chain_name.lower(),
        block_number=block_number,
        transfers=EVENT_SEPARATOR.join(format_transfer(t) for t in transfers),
    )


def format_swap(swap: EnrichedSwapEvent) -> str:
    """Render one swap as a multi-line block."""
    return SWAP_BLOCK_TEMPLATE.substitute(
        input_symbol=_symbol(swap.input_token),
        output_symbol=_symbol(swap.output_token),
        amount0=_value(swap.parsed_amount0),
        symbol0=_symbol(swap.token0),
        amount1=_value(swap.parsed_amount1),
        symbol1=_symbol(swap.token1),
        amount0_usd=_value(swap.parsed_amount0_usd),
        amount1_usd=_value(swap.parsed_amount1_usd),
    )


def format_swaps(
    swaps: List[EnrichedSwapEvent],
    block_number: int,
    agent_name: str,
    chain_name: str
) -> str:
    """Render a block's swaps, one block of lines per swap.
    
    Args:
        swaps: Enriched swaps, in log order
        block_number: Block the swaps were read from
        agent_name: Display name of the agent
        chain_name: Display name of the chain
        
    Returns:
        The rendered summary
    """
    return SWAPS_TEMPLATE.substitute(
        agent_name=agent_name,
        count=len(swaps),
        block_number=block_number,
        chain_name=chain_name,
        swaps=EVENT_SEPARATOR.join(format_swap(s) for s in swaps),
    )
