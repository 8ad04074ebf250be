"""Services for blockjuic3."""

from blockjuic3.services.base_service import BaseService, handle_errors
from blockjuic3.services.event_service import EventFetcher
from blockjuic3.services.token_service import TokenMetadataResolver

__all__ = [
    'BaseService',
    'EventFetcher',
    'TokenMetadataResolver',
    'handle_errors',
]
