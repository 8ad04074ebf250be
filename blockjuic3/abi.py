"""
ABI definitions and codec helpers.

ABIs are kept in their JSON form. Encoding and decoding are delegated to
eth-abi; addresses in decoded output are returned checksummed.
"""

from typing import Any, Dict, List, Sequence, Tuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from blockjuic3.utils.errors import DataParsingError
from blockjuic3.utils.validation import checksum_address

AbiEntry = Dict[str, Any]

ERC20_ABI: List[AbiEntry] = [
    {
        "type": "function",
        "name": "name",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "symbol",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
]

UNISWAP_V3_POOL_ABI: List[AbiEntry] = [
    {
        "type": "function",
        "name": "token0",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "type": "function",
        "name": "token1",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "type": "event",
        "name": "Swap",
        "anonymous": False,
        "inputs": [
            {"name": "sender", "type": "address", "indexed": True},
            {"name": "recipient", "type": "address", "indexed": True},
            {"name": "amount0", "type": "int256", "indexed": False},
            {"name": "amount1", "type": "int256", "indexed": False},
            {"name": "sqrtPriceX96", "type": "uint160", "indexed": False},
            {"name": "liquidity", "type": "uint128", "indexed": False},
            {"name": "tick", "type": "int24", "indexed": False},
        ],
    },
]

MULTICALL3_ABI: List[AbiEntry] = [
    {
        "type": "function",
        "name": "aggregate3",
        "stateMutability": "payable",
        "inputs": [
            {"name": "calls", "type": "(address,bool,bytes)[]"},
        ],
        "outputs": [
            {"name": "returnData", "type": "(bool,bytes)[]"},
        ],
    },
]


def get_abi_entry(abi: Sequence[AbiEntry], name: str, entry_type: str = "function") -> AbiEntry:
    """Find an ABI entry by name and type.
    
    Raises:
        ValueError: If the ABI has no such entry
    """
    for entry in abi:
        if entry.get("type") == entry_type and entry.get("name") == name:
            return entry
    raise ValueError(f"ABI has no {entry_type} named {name}")


def _types(params: Sequence[Dict[str, Any]]) -> List[str]:
    return [param["type"] for param in params]


def signature(entry: AbiEntry) -> str:
    """Canonical signature, e.g. ``Transfer(address,address,uint256)``."""
    return f"{entry['name']}({','.join(_types(entry.get('inputs', [])))})"


def event_topic(event: AbiEntry) -> str:
    """Hex topic0 of an event."""
    return Web3.to_hex(Web3.keccak(text=signature(event)))


def function_selector(function: AbiEntry) -> bytes:
    """First four bytes of the keccak hash of a function signature."""
    return bytes(Web3.keccak(text=signature(function)))[:4]


def encode_function_call(function: AbiEntry, args: Sequence[Any] = ()) -> bytes:
    """Build calldata for a function call."""
    return function_selector(function) + encode(_types(function.get("inputs", [])), list(args))


def _normalize(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return checksum_address(value)
    return value


def decode_function_result(function: AbiEntry, data: bytes) -> Any:
    """Decode the return data of a function call.
    
    Single-output functions return the bare value; others return a tuple.
    
    Raises:
        DataParsingError: If the data does not match the function outputs
    """
    output_types = _types(function.get("outputs", []))
    try:
        values = decode(output_types, data)
    except (DecodingError, ValueError, OverflowError) as e:
        raise DataParsingError(
            f"Cannot decode result of {function['name']}: {str(e)}",
            data_type="function_result"
        )
    values = tuple(_normalize(t, v) for t, v in zip(output_types, values))
    if len(values) == 1:
        return values[0]
    return values


def _hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def decode_event_log(event: AbiEntry, topics: Sequence[str], data: str) -> Dict[str, Any]:
    """Decode a log's topics and data into named event arguments.
    
    Args:
        event: The event ABI entry
        topics: Hex topics; the first one is the event signature hash
        data: Hex payload holding the non-indexed arguments
        
    Returns:
        Mapping of argument name to decoded value
        
    Raises:
        DataParsingError: If topic0 does not match the event, or the
            topics or data do not fit its inputs
    """
    inputs = event.get("inputs", [])
    indexed = [param for param in inputs if param.get("indexed")]
    non_indexed = [param for param in inputs if not param.get("indexed")]
    
    if not topics or topics[0].lower() != event_topic(event).lower():
        raise DataParsingError(
            f"Log is not a {event['name']} event",
            data_type="log",
            details={"topics": list(topics)}
        )
    if len(topics) != len(indexed) + 1:
        raise DataParsingError(
            f"Expected {len(indexed)} indexed topics for {event['name']}, got {len(topics) - 1}",
            data_type="log",
            details={"topics": list(topics)}
        )
    
    args: Dict[str, Any] = {}
    try:
        for param, topic in zip(indexed, topics[1:]):
            (value,) = decode([param["type"]], _hex_to_bytes(topic))
            args[param["name"]] = _normalize(param["type"], value)
        
        values: Tuple[Any, ...] = decode(_types(non_indexed), _hex_to_bytes(data))
    except (DecodingError, ValueError, OverflowError) as e:
        raise DataParsingError(
            f"Cannot decode {event['name']} log: {str(e)}",
            data_type="log"
        )
    for param, value in zip(non_indexed, values):
        args[param["name"]] = _normalize(param["type"], value)
    
    return args


def format_units(value: int, decimals: int) -> str:
    """Render an integer token amount as a decimal string.
    
    Trailing fractional zeros are dropped, so whole amounts have no
    fractional part: ``format_units(10**18, 18) == "1"``.
    """
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if decimals <= 0:
        return f"{sign}{digits}"
    
    digits = digits.rjust(decimals + 1, "0")
    integer, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
    if fraction:
        return f"{sign}{integer}.{fraction}"
    return f"{sign}{integer}"


TRANSFER_EVENT = get_abi_entry(ERC20_ABI, "Transfer", "event")
SWAP_EVENT = get_abi_entry(UNISWAP_V3_POOL_ABI, "Swap", "event")
AGGREGATE3 = get_abi_entry(MULTICALL3_ABI, "aggregate3")
