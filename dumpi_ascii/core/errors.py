"""
Error codes for dumpi-ascii.

Structured error codes for machine-parseable diagnostics.

Format: E{category}{number}
- E1xxx: Event input errors
- E2xxx: Function address table errors
- E3xxx: Configuration errors
- E4xxx: Output errors

The encoders never raise: absent or malformed field data is rendered as
null or an unresolved label. These errors come from the readers that
build CallRecords and from configuration loading.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # E1xxx: Event input errors
    E1001_INVALID_EVENT = "E1001"
    E1002_UNKNOWN_CALL = "E1002"
    E1003_BAD_TIMESTAMP = "E1003"
    E1004_BAD_LENGTH_REFERENCE = "E1004"
    E1005_EMPTY_INPUT = "E1005"

    # E2xxx: Address table errors
    E2001_BAD_ADDRESS_LINE = "E2001"

    # E3xxx: Configuration errors
    E3001_INVALID_CONFIG = "E3001"
    E3002_VALIDATION_FAILED = "E3002"

    # E4xxx: Output errors
    E4001_FILE_WRITE_FAILED = "E4001"


# Error code metadata
ERROR_METADATA = {
    ErrorCode.E1001_INVALID_EVENT: {
        'severity': 'error',
        'message': 'Event line is not a valid call event',
        'recoverable': False,
    },
    ErrorCode.E1002_UNKNOWN_CALL: {
        'severity': 'error',
        'message': 'No signature known for call',
        'recoverable': False,
    },
    ErrorCode.E1003_BAD_TIMESTAMP: {
        'severity': 'error',
        'message': 'Timestamp must be [seconds, nanoseconds]',
        'recoverable': False,
    },
    ErrorCode.E1004_BAD_LENGTH_REFERENCE: {
        'severity': 'error',
        'message': 'Array length refers to a missing or non-integer parameter',
        'recoverable': False,
    },
    ErrorCode.E1005_EMPTY_INPUT: {
        'severity': 'warning',
        'message': 'Input contains no call events',
        'recoverable': True,
    },
    ErrorCode.E2001_BAD_ADDRESS_LINE: {
        'severity': 'error',
        'message': 'Address table line must be "<address> <name>"',
        'recoverable': False,
    },
    ErrorCode.E3001_INVALID_CONFIG: {
        'severity': 'error',
        'message': 'Invalid configuration',
        'recoverable': False,
    },
    ErrorCode.E3002_VALIDATION_FAILED: {
        'severity': 'error',
        'message': 'Configuration validation failed',
        'recoverable': False,
    },
    ErrorCode.E4001_FILE_WRITE_FAILED: {
        'severity': 'error',
        'message': 'Failed to write output file',
        'recoverable': True,
    },
}


@dataclass
class ConversionError:
    """
    Structured error with context.

    Example:
        error = ConversionError(
            code=ErrorCode.E1002_UNKNOWN_CALL,
            context={'call': 'MPI_Foo', 'line': 12},
        )
    """
    code: ErrorCode
    context: Optional[dict] = None

    @property
    def severity(self) -> str:
        return ERROR_METADATA.get(self.code, {}).get('severity', 'error')

    @property
    def message(self) -> str:
        base_msg = ERROR_METADATA.get(self.code, {}).get('message', 'Unknown error')
        if self.context:
            return f"{base_msg}: {self.context}"
        return base_msg

    @property
    def recoverable(self) -> bool:
        return ERROR_METADATA.get(self.code, {}).get('recoverable', False)

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'severity': self.severity,
            'message': self.message,
            'recoverable': self.recoverable,
            'context': self.context,
        }


class DumpiAsciiError(Exception):
    """Base exception carrying a ConversionError."""

    def __init__(self, error: ConversionError):
        super().__init__(f"[{error.code.value}] {error.message}")
        self.error = error

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class EventDecodeError(DumpiAsciiError, ValueError):
    """An event could not be turned into a CallRecord."""


class UnknownCallError(DumpiAsciiError, KeyError):
    """No call signature is registered under the requested name."""

    def __str__(self) -> str:
        return self.args[0]


class AddressTableError(DumpiAsciiError, ValueError):
    """A function address table file could not be parsed."""


class ConfigError(DumpiAsciiError, ValueError):
    """A configuration file could not be loaded."""
