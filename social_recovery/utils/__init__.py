# social_recovery/utils/__init__.py
from .validation_utils import (
    validate_address, validate_payload, validate_value, payload_to_hex
)
from .serialization_utils import (
    serialize_state, deserialize_state, compress_data, decompress_data
)
from .logging import JSONFormatter, LogManager, setup_logging

__all__ = [
    'validate_address', 'validate_payload', 'validate_value', 'payload_to_hex',
    'serialize_state', 'deserialize_state', 'compress_data', 'decompress_data',
    'JSONFormatter', 'LogManager', 'setup_logging'
]
