"""Event fetching for the latest block."""

import logging
from typing import List, Optional

from blockjuic3.abi import AbiEntry
from blockjuic3.clients.evm_client import EvmClient
from blockjuic3.constants import LATEST_BLOCK
from blockjuic3.models.events import LogRecord
from blockjuic3.services.base_service import BaseService


class EventFetcher(BaseService):
    """Reads the latest block number and the latest block's logs."""
    
    def __init__(self, client: EvmClient, logger: Optional[logging.Logger] = None):
        """Initialize the event fetcher.
        
        Args:
            client: Client for the chain to read
            logger: Optional logger instance
        """
        super().__init__(logger=logger)
        self.client = client
    
    async def get_latest_block_number(self) -> int:
        """Get the latest block number."""
        return await self.client.get_block_number()
    
    async def get_latest_logs(self, event: AbiEntry) -> List[LogRecord]:
        """Get the logs of one event type emitted in the latest block.
        
        Args:
            event: Event ABI entry to filter on
            
        Returns:
            Logs in node order
        """
        logs = await self.client.get_logs(event, from_block=LATEST_BLOCK, to_block=LATEST_BLOCK)
        self.logger.debug(f"Fetched {len(logs)} {event['name']} log(s) from the latest block")
        return logs
