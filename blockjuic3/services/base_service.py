"""
Base service class for blockjuic3 services.

This module provides a base class for all services, with common
functionality for error handling and logging.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Type

from blockjuic3.utils.errors import Blockjuic3Error, PipelineError

# Configure logger
logger = logging.getLogger(__name__)


def handle_errors(error_type: Type[Blockjuic3Error] = PipelineError):
    """
    Decorator to log and propagate errors from async service methods.
    
    Blockjuic3 errors are re-raised unchanged; anything else is wrapped in
    ``error_type``. Nothing is swallowed.
    
    Args:
        error_type: The type of error to raise for unexpected exceptions
    
    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except Blockjuic3Error as e:
                logger.exception(f"Error in {func.__name__}: {str(e)}")
                raise
            except Exception as e:
                logger.exception(f"Error in {func.__name__}: {str(e)}")
                raise error_type(f"Error in {func.__name__}: {str(e)}") from e
        return wrapper
    return decorator


class BaseService:
    """
    Base service class with common functionality.
    
    This class provides:
    - Logging
    - Timing of operations
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)
    
    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.
        
        Args:
            operation_name: Name of the operation
            
        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Async context manager to log timing information."""
    
    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0
    
    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.time()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.time() - self.start_time
        if exc_val is not None:
            self.logger.error(
                f"{self.operation_name} failed after {elapsed:.2f}s: {str(exc_val)}"
            )
        else:
            self.logger.info(f"{self.operation_name} completed in {elapsed:.2f}s")
