"""
Token data models for blockjuic3.

This module defines Pydantic models for token metadata and the price
oracle's wire format.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blockjuic3.constants import DEFAULT_DECIMALS
from blockjuic3.models.chain import Chain
from blockjuic3.utils.validation import checksum_address


class ChainToken(BaseModel):
    """
    A token address on a specific chain; the unit of metadata lookup.
    """
    model_config = ConfigDict(frozen=True)
    
    chain: Chain
    address: str
    
    @field_validator("address", mode="before")
    @classmethod
    def _checksum(cls, value: Any) -> str:
        return checksum_address(value)
    
    @property
    def oracle_key(self) -> str:
        """Identifier used by the price oracle, e.g. ``base:0x...``."""
        return f"{self.chain.slug}:{self.address}"


class TokenMetadata(BaseModel):
    """
    Symbol, decimals and USD price of a token.
    
    A price of 0 means the price is unknown, not that the token is
    worthless.
    """
    model_config = ConfigDict(frozen=True)
    
    address: str
    symbol: str
    decimals: int = Field(DEFAULT_DECIMALS, ge=0, le=255)
    price: float = Field(0.0, ge=0)
    
    @field_validator("address", mode="before")
    @classmethod
    def _checksum(cls, value: Any) -> str:
        return checksum_address(value)


class OracleCoin(BaseModel):
    """One coin entry in the price oracle response.
    
    Strict, so numbers sent as strings are rejected rather than coerced.
    """
    model_config = ConfigDict(strict=True)
    
    decimals: int = Field(..., ge=0, le=255)
    symbol: str
    price: Optional[float] = Field(None, ge=0)
    timestamp: Optional[float] = None
    confidence: Optional[float] = None


class OracleResponse(BaseModel):
    """
    Top-level price oracle response.
    
    Entries are kept raw here and validated one at a time; a single
    malformed coin is skipped without rejecting the response.
    """
    coins: Dict[str, Any]
