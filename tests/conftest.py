"""Pytest fixtures shared by the dumpi-ascii tests."""

import io
from pathlib import Path

import pytest

from dumpi_ascii.core.session import FormatSession
from dumpi_ascii.formats.address_table import FunctionAddressTable
from dumpi_ascii.formats.call_record import CallRecord, ClockSpan, Timestamp


@pytest.fixture
def out() -> io.StringIO:
    """In-memory output stream."""
    return io.StringIO()


@pytest.fixture
def session(out) -> FormatSession:
    """Session with default symbol tables and no address table."""
    return FormatSession(out)


@pytest.fixture
def addresses() -> FunctionAddressTable:
    """Three-entry function address table."""
    return FunctionAddressTable([
        (0x400a10, 'copy_attr'),
        (0x400b20, 'delete_attr'),
        (0x400c30, 'my_reduce'),
    ])


@pytest.fixture
def timed_call() -> CallRecord:
    """Call with distinct entry/exit clock readings on thread 3."""
    return CallRecord(
        name='MPI_Barrier',
        thread=3,
        wall=ClockSpan(Timestamp(12, 4100), Timestamp(12, 9800)),
        cpu=ClockSpan(Timestamp(0, 913000), Timestamp(0, 921000)),
    )


@pytest.fixture
def write_events(tmp_path):
    """Write event lines to a JSONL file and return its path."""
    def _write(lines, name='trace.jsonl') -> Path:
        path = tmp_path / name
        path.write_text('\n'.join(lines) + '\n')
        return path
    return _write
