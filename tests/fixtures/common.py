"""Common test fixtures for blockjuic3 tests.

This module provides fixtures and log builders that can be reused across
different test modules.
"""

import pytest
from unittest.mock import AsyncMock

from eth_abi import encode

from blockjuic3.abi import SWAP_EVENT, TRANSFER_EVENT, event_topic
from blockjuic3.clients.evm_client import EvmClient
from blockjuic3.clients.price_client import PriceOracleClient
from blockjuic3.clients.registry import ChainClientRegistry
from blockjuic3.config import ChainConfig
from blockjuic3.models.chain import BASE
from blockjuic3.models.events import LogRecord
from blockjuic3.models.runtime import AgentRuntime, Character
from blockjuic3.models.token import TokenMetadata
from blockjuic3.services.token_service import TokenMetadataResolver

WETH = "0x4200000000000000000000000000000000000006"
USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
SENDER = "0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24"
RECIPIENT = "0x566e8b2606CF26335Bf476E4476e5F634adD829C"
POOL = "0x1234567890123456789012345678901234567890"
TOKEN_A = "0x2222222222222222222222222222222222222222"
TOKEN_B = "0x3333333333333333333333333333333333333333"
BLOCK_NUMBER = 23758531


def pad_topic(address: str) -> str:
    """Left-pad an address to a 32-byte topic."""
    return "0x" + "0" * 24 + address[2:].lower()


def make_transfer_log(token: str, sender: str, recipient: str, value: int) -> LogRecord:
    """Build a Transfer log as returned by eth_getLogs."""
    return LogRecord.model_validate({
        "address": token.lower(),
        "topics": [event_topic(TRANSFER_EVENT), pad_topic(sender), pad_topic(recipient)],
        "data": "0x" + encode(["uint256"], [value]).hex(),
        "blockNumber": hex(BLOCK_NUMBER),
        "transactionHash": "0x3f750f04b3beb5c3d85fb87cfd42441992f3acd2927ca11646921479e4155f48",
        "transactionIndex": "0x47",
        "logIndex": "0xfc",
        "removed": False,
    })


def make_swap_log(
    pool: str,
    amount0: int,
    amount1: int,
    sender: str = "0x1111111111111111111111111111111111111111",
    recipient: str = "0x4444444444444444444444444444444444444444",
) -> LogRecord:
    """Build a Uniswap V3 Swap log as returned by eth_getLogs."""
    data = encode(
        ["int256", "int256", "uint160", "uint128", "int24"],
        [amount0, amount1, 79228162514264337593543950336, 1000, -5],
    )
    return LogRecord.model_validate({
        "address": pool.lower(),
        "topics": [event_topic(SWAP_EVENT), pad_topic(sender), pad_topic(recipient)],
        "data": "0x" + data.hex(),
        "blockNumber": hex(BLOCK_NUMBER),
        "transactionHash": "0x" + "ab" * 32,
        "transactionIndex": "0x0",
        "logIndex": "0x1",
        "removed": False,
    })


@pytest.fixture
def chain_config():
    """Chain configuration pointing at a fake RPC."""
    return ChainConfig(chain=BASE, rpc_url="https://rpc.example.com", timeout=5.0)


@pytest.fixture
def mock_evm_client():
    """Create a mock EVM client."""
    client = AsyncMock(spec=EvmClient)
    client.chain = BASE
    
    # Common mock responses
    client.get_block_number.return_value = BLOCK_NUMBER
    client.get_logs.return_value = []
    client.multicall.return_value = []
    
    return client


@pytest.fixture
def mock_registry(mock_evm_client):
    """Registry holding the mock client for Base."""
    return ChainClientRegistry({BASE.id: mock_evm_client})


@pytest.fixture
def mock_price_client():
    """Create a mock price oracle client that knows no tokens."""
    client = AsyncMock(spec=PriceOracleClient)
    client.fetch_prices.return_value = {}
    return client


@pytest.fixture
def resolver(mock_price_client, mock_registry):
    """Create a TokenMetadataResolver with mock dependencies."""
    return TokenMetadataResolver(mock_price_client, mock_registry)


# Test data fixtures
@pytest.fixture
def weth_metadata():
    """WETH metadata priced at 1800 USD."""
    return TokenMetadata(address=WETH, symbol="WETH", decimals=18, price=1800)


@pytest.fixture
def usdc_metadata():
    """USDC metadata priced at 1 USD."""
    return TokenMetadata(address=USDC, symbol="USDC", decimals=6, price=1.0)


@pytest.fixture
def sample_transfer_log():
    """The WETH transfer of 0.05 from block 23758531."""
    return LogRecord.model_validate({
        "address": WETH,
        "topics": [
            "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef",
            "0x0000000000000000000000004752ba5dbc23f44d87826276bf6fd6b1c372ad24",
            "0x000000000000000000000000566e8b2606cf26335bf476e4476e5f634add829c",
        ],
        "data": "0x00000000000000000000000000000000000000000000000000b1a2bc2ec50000",
        "blockHash": "0x4dfb52cdc878529791feb26be60002cf7979728d5a1e4ba6cbda2437f0234781",
        "blockNumber": hex(BLOCK_NUMBER),
        "transactionHash": "0x3f750f04b3beb5c3d85fb87cfd42441992f3acd2927ca11646921479e4155f48",
        "transactionIndex": 71,
        "logIndex": 252,
        "removed": False,
    })


@pytest.fixture
def sample_swap_log():
    """A swap selling 1 TOKA (6 decimals) for 2 TOKB (18 decimals)."""
    return make_swap_log(POOL, amount0=-1000000, amount1=2 * 10**18)


@pytest.fixture
def runtime():
    """Agent runtime context."""
    return AgentRuntime(character=Character(name="BlockJuic3"))
