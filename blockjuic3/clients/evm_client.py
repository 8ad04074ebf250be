"""EVM chain reads: block number, logs, calls and multicall.

Multicall batches are sent as one ``eth_call`` to the Multicall3
``aggregate3`` function with every call allowed to fail independently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from web3 import Web3

from blockjuic3.abi import (
    AGGREGATE3,
    AbiEntry,
    decode_function_result,
    encode_function_call,
    event_topic,
    get_abi_entry,
)
from blockjuic3.clients.base_client import BaseEvmClient
from blockjuic3.constants import LATEST_BLOCK
from blockjuic3.logging_config import get_logger
from blockjuic3.models.events import LogRecord
from blockjuic3.utils.errors import DataParsingError
from blockjuic3.utils.validation import checksum_address

logger = get_logger(__name__)

BlockIdentifier = Union[int, str]

SUCCESS = "success"
FAILURE = "failure"


@dataclass(frozen=True)
class ContractCall:
    """One read-only contract call within a multicall batch."""
    
    address: str
    abi: Sequence[AbiEntry]
    function_name: str
    args: tuple = field(default_factory=tuple)
    
    @property
    def function(self) -> AbiEntry:
        return get_abi_entry(self.abi, self.function_name)


@dataclass(frozen=True)
class MulticallResult:
    """Outcome of one call in a multicall batch."""
    
    status: str
    result: Any = None
    error: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.status == SUCCESS


def _block_param(block: BlockIdentifier) -> str:
    if isinstance(block, int):
        return hex(block)
    return block


class EvmClient(BaseEvmClient):
    """Client for EVM chain read operations."""
    
    async def get_block_number(self) -> int:
        """Get the latest block number.
        
        Returns:
            The block number
        """
        result = await self._make_request("eth_blockNumber")
        try:
            return int(result, 16)
        except (TypeError, ValueError):
            raise DataParsingError(
                f"Invalid block number: {result}",
                data_type="block_number"
            )
    
    async def get_logs(
        self,
        event: AbiEntry,
        from_block: BlockIdentifier = LATEST_BLOCK,
        to_block: BlockIdentifier = LATEST_BLOCK,
        address: Optional[str] = None
    ) -> List[LogRecord]:
        """Get logs of one event type within a block range.
        
        Args:
            event: Event ABI entry; its topic0 is the only topic filter
            from_block: First block (number or tag)
            to_block: Last block (number or tag)
            address: Optional emitting contract filter
            
        Returns:
            Logs in the order the node returned them
        """
        log_filter: Dict[str, Any] = {
            "fromBlock": _block_param(from_block),
            "toBlock": _block_param(to_block),
            "topics": [event_topic(event)],
        }
        if address:
            log_filter["address"] = checksum_address(address)
        
        result = await self._make_request("eth_getLogs", [log_filter])
        if not isinstance(result, list):
            raise DataParsingError(
                "eth_getLogs did not return a list",
                data_type="logs"
            )
        return [LogRecord.model_validate(entry) for entry in result]
    
    async def call(self, to: str, data: bytes, block: BlockIdentifier = LATEST_BLOCK) -> bytes:
        """Execute a read-only call.
        
        Args:
            to: Contract address
            data: Calldata
            block: Block to execute against
            
        Returns:
            Raw return data
        """
        result = await self._make_request(
            "eth_call",
            [{"to": checksum_address(to), "data": Web3.to_hex(data)}, _block_param(block)]
        )
        if not isinstance(result, str):
            raise DataParsingError(
                "eth_call did not return hex data",
                data_type="call_result"
            )
        return bytes.fromhex(result[2:] if result.startswith("0x") else result)
    
    async def multicall(
        self,
        calls: Sequence[ContractCall],
        block: BlockIdentifier = LATEST_BLOCK
    ) -> List[MulticallResult]:
        """Execute many read-only calls in one round trip.
        
        Args:
            calls: Calls to batch
            block: Block to execute against
            
        Returns:
            One result per call, in call order. A call that reverted or
            whose return data does not decode against its ABI is reported
            with ``failure`` status.
        """
        if not calls:
            return []
        
        encoded = [
            (checksum_address(call.address), True, encode_function_call(call.function, call.args))
            for call in calls
        ]
        raw = await self.call(
            self.config.multicall_address,
            encode_function_call(AGGREGATE3, [encoded]),
            block
        )
        returned = decode_function_result(AGGREGATE3, raw)
        if len(returned) != len(calls):
            raise DataParsingError(
                f"Multicall returned {len(returned)} results for {len(calls)} calls",
                data_type="multicall"
            )
        
        results: List[MulticallResult] = []
        for call, (success, return_data) in zip(calls, returned):
            if not success or not return_data:
                results.append(MulticallResult(status=FAILURE, error="call reverted"))
                continue
            try:
                value = decode_function_result(call.function, return_data)
            except DataParsingError as e:
                results.append(MulticallResult(status=FAILURE, error=e.message))
                continue
            results.append(MulticallResult(status=SUCCESS, result=value))
        
        logger.debug(
            f"Multicall on {self.chain.name}: {sum(r.ok for r in results)}/{len(results)} calls succeeded"
        )
        return results
