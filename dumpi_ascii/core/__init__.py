"""Record protocol, formatting session and error codes."""

from .errors import (
    ErrorCode,
    ConversionError,
    ERROR_METADATA,
    DumpiAsciiError,
    EventDecodeError,
    UnknownCallError,
    AddressTableError,
    ConfigError,
)
from .protocol import RecordState, RecordWriter, format_call, write_param
from .session import FormatSession

__all__ = [
    # Errors
    'ErrorCode',
    'ConversionError',
    'ERROR_METADATA',
    'DumpiAsciiError',
    'EventDecodeError',
    'UnknownCallError',
    'AddressTableError',
    'ConfigError',
    # Protocol
    'RecordState',
    'RecordWriter',
    'format_call',
    'write_param',
    # Session
    'FormatSession',
]
