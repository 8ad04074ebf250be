"""Price oracle client.

Looks up symbol, decimals and USD price for a batch of tokens with one
``GET <base>/prices/current/<chain:address,...>`` request.
"""

from typing import Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from blockjuic3.config import PriceOracleConfig, get_price_oracle_config
from blockjuic3.constants import PRICE_ORACLE_SERVICE_NAME
from blockjuic3.logging_config import get_logger
from blockjuic3.models.token import ChainToken, OracleCoin, OracleResponse, TokenMetadata
from blockjuic3.utils.errors import DataParsingError, ExternalServiceError
from blockjuic3.utils.validation import validate_address

logger = get_logger(__name__)


class PriceOracleClient:
    """Client for the price oracle HTTP API."""
    
    def __init__(
        self,
        config: Optional[PriceOracleConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the client.
        
        Args:
            config: Oracle configuration. Defaults to environment-based config.
            http_client: Optional HTTP client; created lazily otherwise
        """
        self.config = config or get_price_oracle_config()
        self._http_client = http_client
        self._owns_http_client = http_client is None
    
    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client
    
    def build_url(self, tokens: Sequence[ChainToken]) -> str:
        """Build the lookup URL for a batch of tokens, one key per token."""
        keys: List[str] = []
        for token in tokens:
            if token.oracle_key not in keys:
                keys.append(token.oracle_key)
        return f"{self.config.prices_url}{','.join(keys)}"
    
    async def fetch_prices(self, tokens: Sequence[ChainToken]) -> Dict[str, TokenMetadata]:
        """Fetch metadata and prices for a batch of tokens.
        
        Args:
            tokens: Tokens to look up
            
        Returns:
            Mapping of checksummed address to metadata. Tokens the oracle
            does not know, or returns in an unexpected shape, are absent.
            
        Raises:
            ExternalServiceError: If the oracle is unreachable or returns a
                non-2xx status
            DataParsingError: If the response is not shaped as expected
        """
        if not tokens:
            return {}
        
        url = self.build_url(tokens)
        logger.debug(f"Requesting prices for {len(tokens)} token(s)")
        
        try:
            response = await self._get_http_client().get(url)
            response.raise_for_status()
            raw_data = response.json()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"Price oracle returned status {e.response.status_code}",
                service_name=PRICE_ORACLE_SERVICE_NAME,
                details={"status_code": e.response.status_code}
            )
        except httpx.RequestError as e:
            raise ExternalServiceError(
                f"Error reaching price oracle: {str(e)}",
                service_name=PRICE_ORACLE_SERVICE_NAME,
                details={"error": str(e)}
            )
        except ValueError as e:
            raise DataParsingError(
                f"Price oracle response is not valid JSON: {str(e)}",
                data_type="price_oracle_response"
            )
        
        try:
            data = OracleResponse.model_validate(raw_data)
        except ValidationError as e:
            raise DataParsingError(
                "Unexpected price oracle response shape",
                data_type="price_oracle_response",
                details={"errors": e.errors(include_url=False)}
            )
        
        token_map: Dict[str, TokenMetadata] = {}
        for key, value in data.coins.items():
            if not isinstance(value, dict):
                logger.debug(f"Skipping non-object oracle entry for {key}")
                continue
            _, _, address = key.partition(":")
            if not validate_address(address):
                logger.debug(f"Skipping oracle entry with unexpected key {key}")
                continue
            try:
                coin = OracleCoin.model_validate(value)
            except ValidationError:
                logger.debug(f"Skipping malformed oracle entry for {key}")
                continue
            metadata = TokenMetadata(
                address=address,
                symbol=coin.symbol,
                decimals=coin.decimals,
                price=coin.price or 0.0,
            )
            token_map[metadata.address] = metadata
        
        logger.info(f"Price oracle resolved {len(token_map)} of {len(tokens)} token(s)")
        return token_map
    
    async def close(self):
        """Close the client and release resources it owns."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
