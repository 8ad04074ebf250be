"""
Event data models for blockjuic3.

Raw events are decoded straight from logs; enriched events join them with
token metadata. All of them live only for one pipeline invocation.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blockjuic3.models.token import TokenMetadata


def _hex_quantity(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("0x"):
        return int(value, 16)
    return value


class LogRecord(BaseModel):
    """
    Model for an ``eth_getLogs`` entry.
    
    Hex quantities are parsed to integers; hashes, topics and data stay hex.
    """
    model_config = ConfigDict(populate_by_name=True)
    
    address: str
    topics: List[str] = Field(default_factory=list)
    data: str = "0x"
    block_hash: Optional[str] = Field(None, alias="blockHash")
    block_number: Optional[int] = Field(None, alias="blockNumber")
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")
    transaction_index: Optional[int] = Field(None, alias="transactionIndex")
    log_index: Optional[int] = Field(None, alias="logIndex")
    removed: bool = False
    
    @field_validator("block_number", "transaction_index", "log_index", mode="before")
    @classmethod
    def _parse_quantity(cls, value: Any) -> Any:
        return _hex_quantity(value)
    
    @property
    def has_data(self) -> bool:
        """Whether the log carries a non-empty payload."""
        return self.data not in ("", "0x")


class RawTransferEvent(BaseModel):
    """An ERC-20 ``Transfer`` decoded from one log."""
    
    from_address: str
    to_address: str
    amount: int = Field(..., ge=0)
    token: str


class EnrichedTransferEvent(BaseModel):
    """A transfer joined with its token's metadata."""
    
    from_address: str
    to_address: str
    amount: int
    token: TokenMetadata
    parsed_amount: str
    amount_usd: float


class RawSwapEvent(BaseModel):
    """A Uniswap V3 ``Swap`` decoded from one log."""
    
    pool: str
    sender: str
    recipient: str
    amount0: int
    amount1: int
    sqrt_price_x96: int
    liquidity: int
    tick: int


class PoolTokenPair(BaseModel):
    """Tokens of a pool; a slot stays unset when its on-chain read failed."""
    
    token0: Optional[str] = None
    token1: Optional[str] = None


class EnrichedSwapEvent(RawSwapEvent):
    """
    A swap joined with the metadata of both pool tokens.
    
    Metadata and derived fields are None when the token could not be
    resolved; the swap is still reported.
    """
    token0: Optional[TokenMetadata] = None
    token1: Optional[TokenMetadata] = None
    input_token: Optional[TokenMetadata] = None
    output_token: Optional[TokenMetadata] = None
    parsed_amount0: Optional[str] = None
    parsed_amount1: Optional[str] = None
    parsed_amount0_usd: Optional[float] = None
    parsed_amount1_usd: Optional[float] = None
