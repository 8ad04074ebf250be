"""Unit tests for text rendering."""

from blockjuic3.formatter import format_swap, format_swaps, format_transfer, format_transfers
from blockjuic3.models.events import EnrichedSwapEvent, EnrichedTransferEvent
from blockjuic3.models.token import TokenMetadata
from tests.fixtures.common import POOL, RECIPIENT, SENDER, TOKEN_A, TOKEN_B


def weth_transfer(weth_metadata) -> EnrichedTransferEvent:
    return EnrichedTransferEvent(
        from_address=SENDER,
        to_address=RECIPIENT,
        amount=50000000000000000,
        token=weth_metadata,
        parsed_amount="0.05",
        amount_usd=90.0,
    )


def swap(**overrides) -> EnrichedSwapEvent:
    fields = dict(
        pool=POOL,
        sender=SENDER,
        recipient=RECIPIENT,
        amount0=-1000000,
        amount1=500000000000000,
        sqrt_price_x96=1,
        liquidity=1,
        tick=0,
    )
    fields.update(overrides)
    return EnrichedSwapEvent(**fields)


class TestFormatTransfers:
    """Test suite for transfer rendering."""

    def test_format_transfer(self, weth_metadata):
        assert format_transfer(weth_transfer(weth_metadata)) == (
            f"0.05 WETH transferred from {SENDER} to {RECIPIENT} for a total amount USD of 90.0"
        )

    def test_format_transfers(self, weth_metadata):
        transfer = weth_transfer(weth_metadata)
        
        result = format_transfers([transfer, transfer], 23758531, "BlockJuic3", "Base")
        
        assert result.startswith("BlockJuic3 knows the following onchain transfers for block on base 23758531: ")
        assert result.count(" | ") == 1
        assert "0.05 WETH transferred from" in result


class TestFormatSwaps:
    """Test suite for swap rendering."""

    def test_format_swap(self):
        token_a = TokenMetadata(address=TOKEN_A, symbol="TOKA", decimals=6, price=1.0)
        token_b = TokenMetadata(address=TOKEN_B, symbol="TOKB", decimals=18, price=2000.0)
        
        result = format_swap(swap(
            token0=token_a,
            token1=token_b,
            input_token=token_a,
            output_token=token_b,
            parsed_amount0="-1",
            parsed_amount1="0.0005",
            parsed_amount0_usd=-1.0,
            parsed_amount1_usd=1.0,
        ))
        
        assert result == (
            "- TOKA -> TOKB\n"
            "- Amount: -1 TOKA\n"
            "- Amount: 0.0005 TOKB\n"
            "- Price: -1.0 USD\n"
            "- Price: 1.0 USD"
        )

    def test_format_swap_unknown_tokens(self):
        result = format_swap(swap())
        assert result.splitlines()[0] == "- unknown -> unknown"
        assert "- Amount: unknown unknown" in result

    def test_format_swaps_header(self):
        result = format_swaps([swap(), swap()], 42, "TestBot", "Base")
        
        header, details, body = result.split("\n", 2)
        assert header == "TestBot is aware of 2 swaps in the block 42 on chain Base."
        assert details == "Here are the details:"
        assert body.count(" | ") == 1
