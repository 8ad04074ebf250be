"""Unit tests for PriceOracleClient."""

from urllib.parse import unquote

import httpx
import pytest

from blockjuic3.clients.price_client import PriceOracleClient
from blockjuic3.config import PriceOracleConfig
from blockjuic3.models.chain import BASE
from blockjuic3.models.token import ChainToken
from blockjuic3.utils.errors import DataParsingError, ExternalServiceError
from tests.fixtures.common import USDC, WETH

UNKNOWN_TOKEN = "0x5555555555555555555555555555555555555555"


def make_client(handler) -> PriceOracleClient:
    """Build a client whose HTTP traffic goes to ``handler``."""
    config = PriceOracleConfig(base_url="https://prices.example.com", timeout=5.0)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PriceOracleClient(config, http_client=http_client)


def tokens(*addresses):
    return [ChainToken(chain=BASE, address=address) for address in addresses]


class TestPriceOracleClient:
    """Test suite for PriceOracleClient."""

    def test_build_url_dedupes(self):
        client = PriceOracleClient(PriceOracleConfig(base_url="https://prices.example.com"))
        url = client.build_url(tokens(WETH, USDC, WETH.lower()))
        assert url == f"https://prices.example.com/prices/current/base:{WETH},base:{USDC}"

    @pytest.mark.asyncio
    async def test_fetch_prices(self):
        """Test a batch lookup with one known, one priceless and one malformed coin."""
        # Setup
        requests = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={
                "coins": {
                    f"base:{WETH}": {
                        "decimals": 18,
                        "symbol": "WETH",
                        "price": 1800.5,
                        "timestamp": 1700000000,
                        "confidence": 0.99,
                    },
                    f"base:{USDC.lower()}": {"decimals": 6, "symbol": "USDC"},
                    f"base:{UNKNOWN_TOKEN}": {"symbol": "BAD", "decimals": "many"},
                }
            })
        
        client = make_client(handler)
        
        # Execute
        result = await client.fetch_prices(tokens(WETH, USDC, UNKNOWN_TOKEN))
        
        # Verify
        assert len(requests) == 1
        assert request_path(requests[0]) == (
            f"/prices/current/base:{WETH},base:{USDC},base:{UNKNOWN_TOKEN}"
        )
        assert set(result) == {WETH, USDC}
        assert result[WETH].symbol == "WETH"
        assert result[WETH].decimals == 18
        assert result[WETH].price == 1800.5
        assert result[USDC].price == 0.0
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_input_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")
        
        client = make_client(handler)
        assert await client.fetch_prices([]) == {}

    @pytest.mark.asyncio
    async def test_unknown_tokens_are_absent(self):
        client = make_client(lambda request: httpx.Response(200, json={"coins": {}}))
        assert await client.fetch_prices(tokens(UNKNOWN_TOKEN)) == {}

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client = make_client(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(ExternalServiceError) as excinfo:
            await client.fetch_prices(tokens(WETH))
        assert excinfo.value.details["status_code"] == 502

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        
        client = make_client(handler)
        with pytest.raises(ExternalServiceError):
            await client.fetch_prices(tokens(WETH))

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(DataParsingError):
            await client.fetch_prices(tokens(WETH))

    @pytest.mark.asyncio
    async def test_unexpected_shape(self):
        client = make_client(lambda request: httpx.Response(200, json={"prices": []}))
        with pytest.raises(DataParsingError):
            await client.fetch_prices(tokens(WETH))

    @pytest.mark.asyncio
    async def test_non_object_entry_is_skipped(self):
        """A coin entry that is not an object is omitted, not fatal."""
        # Setup
        client = make_client(lambda request: httpx.Response(200, json={
            "coins": {
                f"base:{WETH}": {"decimals": 18, "symbol": "WETH", "price": 1800.0},
                f"base:{USDC}": "garbage",
                f"base:{UNKNOWN_TOKEN}": [6, "BAD"],
            }
        }))
        
        # Execute
        result = await client.fetch_prices(tokens(WETH, USDC, UNKNOWN_TOKEN))
        
        # Verify
        assert list(result) == [WETH]
        assert result[WETH].price == 1800.0

    @pytest.mark.asyncio
    async def test_numbers_as_strings_are_skipped(self):
        """Decimals and price must be JSON numbers."""
        client = make_client(lambda request: httpx.Response(200, json={
            "coins": {
                f"base:{WETH}": {"decimals": "18", "symbol": "WETH", "price": 1800.0},
                f"base:{USDC}": {"decimals": 6, "symbol": "USDC", "price": "1.0"},
            }
        }))
        
        assert await client.fetch_prices(tokens(WETH, USDC)) == {}


def request_path(request: httpx.Request) -> str:
    return unquote(request.url.path)
