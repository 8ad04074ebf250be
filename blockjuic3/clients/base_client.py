"""Base EVM JSON-RPC client for blockjuic3.

This module provides the core functionality for making JSON-RPC requests to EVM nodes.
"""

# Standard library imports
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from blockjuic3.config import ChainConfig
from blockjuic3.logging_config import get_logger
from blockjuic3.utils.errors import DataParsingError, RpcConnectionError, RpcError

# Get logger
logger = get_logger(__name__)


class BaseEvmClient:
    """Base client for interacting with an EVM chain over JSON-RPC.
    
    Each request is a single attempt; failures propagate to the caller.
    """
    
    def __init__(self, config: ChainConfig, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the client.
        
        Args:
            config: RPC configuration for the chain
            http_client: Optional shared HTTP client. One is created lazily
                otherwise and closed by ``close()``.
        """
        self.config = config
        self.chain = config.chain
        self.headers = {"Content-Type": "application/json"}
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._request_id = 0
    
    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client
    
    async def _make_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request to the node.
        
        Args:
            method: The RPC method to call
            params: The parameters to pass to the method
            
        Returns:
            The ``result`` member of the JSON-RPC response
            
        Raises:
            RpcError: If the node returns an error or a non-2xx status
            RpcConnectionError: If the node cannot be reached
            DataParsingError: If the response is not a JSON-RPC envelope
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or []
        }
        
        try:
            response = await self._get_http_client().post(
                self.config.rpc_url,
                headers=self.headers,
                json=payload
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            raise RpcError(
                f"RPC request {method} failed with status {e.response.status_code}",
                rpc_error={"method": method, "status_code": e.response.status_code}
            )
        except httpx.RequestError as e:
            raise RpcConnectionError(
                f"Connection error during RPC request {method}: {str(e)}",
                rpc_error={"method": method, "error": str(e)}
            )
        except ValueError as e:
            raise DataParsingError(
                f"RPC response for {method} is not valid JSON: {str(e)}",
                data_type="json_rpc"
            )
        
        if not isinstance(result, dict):
            raise DataParsingError(
                f"RPC response for {method} is not a JSON-RPC object",
                data_type="json_rpc"
            )
        
        if "error" in result:
            error = result["error"] or {}
            raise RpcError(
                f"RPC error in {method}: {error.get('message', 'Unknown error')}",
                rpc_error=error
            )
        
        if "result" not in result:
            raise DataParsingError(
                f"RPC response for {method} has no result",
                data_type="json_rpc"
            )
        
        return result["result"]
    
    async def __aenter__(self):
        """Async context manager entry.
        
        Returns:
            Self
        """
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
    
    async def close(self):
        """Close the client and release resources it owns."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
