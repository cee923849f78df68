"""
dumpi-ascii - text rendering of decoded MPI trace calls.

Every traced call becomes one line of JSON-like text:

    {"event":"MPI_Send", "entering": {...}, "count": 4, ..., "returning": {...}}

Quick start:
    from dumpi_ascii import FormatSession, EventFileReader

    session = FormatSession(sys.stdout)
    session.write_calls(EventFileReader.read_path('trace.jsonl'))
"""

__version__ = "1.0.0"

from .symbols import Category, SymbolResolver, SymbolTable, FlagTable
from .formats import (
    CallRecord,
    Param,
    FieldKind,
    Timestamp,
    ClockSpan,
    PerfSnapshot,
    Status,
    LengthKind,
    FunctionAddressTable,
    EventFileReader,
    get_signature,
)
from .core import FormatSession, RecordWriter, format_call, DumpiAsciiError, ErrorCode
from .config import DumpiConfig, load_config

__all__ = [
    '__version__',
    # Symbols
    'Category',
    'SymbolResolver',
    'SymbolTable',
    'FlagTable',
    # Records and readers
    'CallRecord',
    'Param',
    'FieldKind',
    'Timestamp',
    'ClockSpan',
    'PerfSnapshot',
    'Status',
    'LengthKind',
    'FunctionAddressTable',
    'EventFileReader',
    'get_signature',
    # Formatting
    'FormatSession',
    'RecordWriter',
    'format_call',
    'DumpiAsciiError',
    'ErrorCode',
    # Config
    'DumpiConfig',
    'load_config',
]
