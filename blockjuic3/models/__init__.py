"""Data models for blockjuic3."""

from blockjuic3.models.chain import BASE, Chain
from blockjuic3.models.events import (
    EnrichedSwapEvent,
    EnrichedTransferEvent,
    LogRecord,
    PoolTokenPair,
    RawSwapEvent,
    RawTransferEvent,
)
from blockjuic3.models.runtime import AgentRuntime, Character, Memory, Provider, State
from blockjuic3.models.token import ChainToken, OracleCoin, OracleResponse, TokenMetadata

__all__ = [
    'AgentRuntime',
    'BASE',
    'Chain',
    'ChainToken',
    'Character',
    'EnrichedSwapEvent',
    'EnrichedTransferEvent',
    'LogRecord',
    'Memory',
    'OracleCoin',
    'OracleResponse',
    'PoolTokenPair',
    'Provider',
    'RawSwapEvent',
    'RawTransferEvent',
    'State',
    'TokenMetadata',
]
