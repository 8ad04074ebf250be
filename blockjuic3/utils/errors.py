"""
Error handling utilities for blockjuic3.

This module defines the exception hierarchy raised by clients, services
and pipelines. Systemic failures (transport, schema) raise; per-item
absences never do.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for the blockjuic3 plugin."""
    
    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    
    # Chain RPC errors
    RPC_ERROR = "RPC_ERROR"
    RPC_CONNECTION_ERROR = "RPC_CONNECTION_ERROR"
    UNKNOWN_CHAIN = "UNKNOWN_CHAIN"
    
    # Service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    PIPELINE_ERROR = "PIPELINE_ERROR"
    
    # Data errors
    INVALID_ADDRESS = "INVALID_ADDRESS"
    DATA_PARSING_ERROR = "DATA_PARSING_ERROR"


class Blockjuic3Error(Exception):
    """Base exception for all blockjuic3 errors."""
    
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new blockjuic3 error.
        
        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)
    

class ConfigurationError(Blockjuic3Error):
    """Exception for invalid configuration."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=details
        )


class InvalidAddressError(Blockjuic3Error, ValueError):
    """Exception for strings that are not 20-byte hex addresses.
    
    Also a ValueError, so model validators report it as a validation error.
    """
    
    def __init__(self, address: Any):
        super().__init__(
            message=f"Invalid address: {address}",
            code=ErrorCode.INVALID_ADDRESS,
            details={"address": str(address)}
        )
        self.address = address


class DataParsingError(Blockjuic3Error):
    """Exception for data parsing errors."""
    
    def __init__(
        self,
        message: str,
        data_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if data_type:
            error_details["data_type"] = data_type
            
        super().__init__(
            message=message,
            code=ErrorCode.DATA_PARSING_ERROR,
            details=error_details
        )


class ExternalServiceError(Blockjuic3Error):
    """Exception for errors from external HTTP services."""
    
    def __init__(
        self,
        message: str,
        service_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        error_details["service_name"] = service_name
            
        super().__init__(
            message=message,
            code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            details=error_details
        )


class RpcError(Blockjuic3Error):
    """Exception for chain JSON-RPC errors."""
    
    def __init__(
        self,
        message: str,
        rpc_error: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.RPC_ERROR
    ):
        super().__init__(
            message=message,
            code=code,
            details={"rpc_error": rpc_error or {}}
        )


class RpcConnectionError(RpcError):
    """Exception for chain RPC connection errors."""
    
    def __init__(
        self,
        message: str,
        rpc_error: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            rpc_error=rpc_error,
            code=ErrorCode.RPC_CONNECTION_ERROR
        )


class UnknownChainError(Blockjuic3Error):
    """Exception for lookups of a chain with no configured client."""
    
    def __init__(self, chain_id: int):
        super().__init__(
            message=f"No RPC client configured for chain {chain_id}",
            code=ErrorCode.UNKNOWN_CHAIN,
            details={"chain_id": chain_id}
        )


class PipelineError(Blockjuic3Error):
    """Exception for unexpected failures inside an enrichment pipeline."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.PIPELINE_ERROR,
            details=details
        )
