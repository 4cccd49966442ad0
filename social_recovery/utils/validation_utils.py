# social_recovery/utils/validation_utils.py
from typing import Any, Union

from eth_utils import is_address, to_checksum_address
from hexbytes import HexBytes

from ..exceptions.chain_errors import InvalidAddressError

def validate_address(value: Any) -> str:
    """Normalise an account, proxy or hex string into a checksummed address"""
    # Account and ContractProxy both expose .address
    address = getattr(value, 'address', value)
    if isinstance(address, (bytes, bytearray)):
        address = HexBytes(address).hex()
        if not address.startswith('0x'):
            address = '0x' + address
    if not isinstance(address, str) or not is_address(address):
        raise InvalidAddressError(value)
    return to_checksum_address(address)

def validate_payload(data: Union[str, bytes, None]) -> HexBytes:
    """Normalise call data given as hex string or bytes"""
    if data is None:
        return HexBytes(b'')
    if isinstance(data, str) and data in ('', '0x'):
        return HexBytes(b'')
    try:
        return HexBytes(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid call data {data!r}: {e}")

def validate_value(value: Any) -> int:
    """Value transferred with a call must be a non-negative integer"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Value must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Value must be non-negative, got {value}")
    return value

def payload_to_hex(data: bytes) -> str:
    """Render call data as a 0x-prefixed hex string"""
    encoded = HexBytes(data).hex()
    return encoded if encoded.startswith('0x') else '0x' + encoded
