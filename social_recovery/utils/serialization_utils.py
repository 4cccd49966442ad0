# social_recovery/utils/serialization_utils.py
import zlib
import logging
from typing import Any
import msgpack

from ..exceptions.chain_errors import SerializationError

logger = logging.getLogger("RecoveryWallet.Serialization")

# one-byte header in front of every encoded blob
RAW_HEADER = b'\x00'
COMPRESSED_HEADER = b'\x01'

def _to_serializable(value: Any) -> Any:
    """Convert sets, tuples and bytes subclasses into msgpack-native types"""
    if isinstance(value, (set, frozenset)):
        return sorted(_to_serializable(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_to_serializable(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if hasattr(value, 'to_dict'):
        return _to_serializable(value.to_dict())
    return value

def serialize_state(state: Any, compression_enabled: bool = True,
                    compression_threshold: int = 1024) -> bytes:
    """Encode state with msgpack, compressing blobs above the threshold"""
    try:
        packed = msgpack.packb(_to_serializable(state), use_bin_type=True)
    except (TypeError, ValueError) as e:
        logger.error(f"State serialization failed: {e}")
        raise SerializationError(f"State serialization failed: {e}")

    if compression_enabled and len(packed) > compression_threshold:
        return COMPRESSED_HEADER + compress_data(packed)
    return RAW_HEADER + packed

def deserialize_state(data: bytes) -> Any:
    """Decode a blob produced by serialize_state"""
    if not data:
        raise SerializationError("Cannot deserialize empty data")

    header, body = data[:1], data[1:]
    try:
        if header == COMPRESSED_HEADER:
            body = decompress_data(body)
        elif header != RAW_HEADER:
            raise SerializationError(f"Unknown serialization header {header!r}")
        return msgpack.unpackb(body, raw=False, strict_map_key=False)
    except (zlib.error, msgpack.UnpackException, ValueError) as e:
        logger.error(f"State deserialization failed: {e}")
        raise SerializationError(f"State deserialization failed: {e}")

def compress_data(data: bytes) -> bytes:
    """Compress data using zlib"""
    return zlib.compress(data, level=9)

def decompress_data(compressed_data: bytes) -> bytes:
    """Decompress data using zlib"""
    return zlib.decompress(compressed_data)

