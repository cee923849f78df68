"""Tests for structured error codes."""

import pytest

from dumpi_ascii.core.errors import (
    ERROR_METADATA,
    AddressTableError,
    ConfigError,
    ConversionError,
    DumpiAsciiError,
    ErrorCode,
    EventDecodeError,
    UnknownCallError,
)
from dumpi_ascii.formats.sentinels import LengthKind


class TestConversionError:
    """Test the structured error record."""

    def test_every_code_has_metadata(self):
        for code in ErrorCode:
            assert code in ERROR_METADATA

    def test_message_with_context(self):
        error = ConversionError(code=ErrorCode.E1002_UNKNOWN_CALL, context={'call': 'MPI_Foo'})
        assert error.message.startswith('No signature known for call')
        assert 'MPI_Foo' in error.message

    def test_to_dict(self):
        """Serialized error carries code, severity and recoverability."""
        d = ConversionError(code=ErrorCode.E1005_EMPTY_INPUT).to_dict()
        assert d['code'] == 'E1005'
        assert d['severity'] == 'warning'
        assert d['recoverable'] is True
        assert d['context'] is None

    def test_error_severity(self):
        error = ConversionError(code=ErrorCode.E2001_BAD_ADDRESS_LINE)
        assert error.severity == 'error'
        assert error.recoverable is False


class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize("cls,builtin", [
        (EventDecodeError, ValueError),
        (UnknownCallError, KeyError),
        (AddressTableError, ValueError),
        (ConfigError, ValueError),
    ])
    def test_hierarchy(self, cls, builtin):
        """Each exception is also the matching builtin."""
        exc = cls(ConversionError(code=ErrorCode.E1001_INVALID_EVENT))
        assert isinstance(exc, DumpiAsciiError)
        assert isinstance(exc, builtin)

    def test_str_has_code(self):
        exc = UnknownCallError(ConversionError(code=ErrorCode.E1002_UNKNOWN_CALL))
        assert str(exc) == '[E1002] No signature known for call'
        assert exc.code is ErrorCode.E1002_UNKNOWN_CALL


class TestLengthKind:
    """Test wire values of the length placeholders."""

    def test_wire_values(self):
        assert LengthKind.CSTRING.wire_value == -1
        assert LengthKind.NULLTERM.wire_value == -2

    def test_from_wire(self):
        assert LengthKind.from_wire(-2) is LengthKind.NULLTERM
        assert LengthKind.from_wire(0) == 0
