"""Call record model, call signatures, and input readers."""

from .sentinels import (
    LengthKind,
    Length,
    ANY_SOURCE,
    ANY_TAG,
    PROC_NULL,
    UNDEFINED,
    ROOT,
)
from .call_record import (
    Timestamp,
    ClockSpan,
    PerfSnapshot,
    Status,
    FieldKind,
    Param,
    CallRecord,
)
from .address_table import FunctionAddressTable, AddressEntry
from .signatures import FieldSpec, CallSignature, SIGNATURES, get_signature
from .event_file import EventFileReader, decode_event, parse_length

__all__ = [
    'LengthKind',
    'Length',
    'ANY_SOURCE',
    'ANY_TAG',
    'PROC_NULL',
    'UNDEFINED',
    'ROOT',
    'Timestamp',
    'ClockSpan',
    'PerfSnapshot',
    'Status',
    'FieldKind',
    'Param',
    'CallRecord',
    'FunctionAddressTable',
    'AddressEntry',
    'FieldSpec',
    'CallSignature',
    'SIGNATURES',
    'get_signature',
    'EventFileReader',
    'decode_event',
    'parse_length',
]
