"""
Record protocol: wraps one call's fields into one output record.

A record moves through four states:

    IDLE -> ENTERING -> FIELDS_OPEN -> CLOSED

entering() opens the record with the call name and the entry timing block,
each field method appends one "key": value pair, and returning() appends
the exit timing block and closes the record. Output shape (one line):

    {"event":"MPI_Recv","entering": {...},"count": 4,...,"returning": {...}}

Every field is followed by a separator; the returning block is last, so the
closing brace never follows a dangling separator.

The record is assembled in memory and handed to the session in a single
write when it is closed, so records from different producers never
interleave on a shared stream.
"""

import json
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..encoders import (
    NULL,
    Section,
    encode_dest,
    encode_function,
    encode_int,
    encode_int64,
    encode_int_array,
    encode_int_matrix,
    encode_request,
    encode_requests,
    encode_source,
    encode_status,
    encode_statuses,
    encode_string,
    encode_string_array,
    encode_string_matrix,
    encode_symbol,
    encode_tag,
    encode_thread_block,
)
from ..formats.call_record import CallRecord, FieldKind, Param
from ..symbols.categories import Category

PAIR_SEPARATOR = ','
END_OF_RECORD = '\n'


class RecordState(Enum):
    IDLE = 'idle'
    ENTERING = 'entering'
    FIELDS_OPEN = 'fields_open'
    CLOSED = 'closed'


class RecordWriter:
    """
    Builds one record for one CallRecord.

    Example:
        rec = RecordWriter(session, call)
        rec.entering()
        rec.int32('count', 4)
        rec.symbol('datatype', 9, Category.DATATYPE)
        rec.tag('tag', -1)
        rec.returning()

    Or, equivalently:
        with session.record(call) as rec:
            rec.int32('count', 4)
    """

    def __init__(self, session, call: CallRecord):
        self.session = session
        self.call = call
        self.state = RecordState.IDLE
        self._parts: List[str] = []

    def _require(self, *states: RecordState) -> None:
        if self.state not in states:
            allowed = ', '.join(s.value for s in states)
            raise RuntimeError(
                f"{self.call.name}: record is {self.state.value}, expected {allowed}"
            )

    def _item(self, key: str, token: str) -> None:
        self._parts.append(f'{json.dumps(key)}: {token}')

    def _field(self, key: str, token: str) -> 'RecordWriter':
        self._require(RecordState.ENTERING, RecordState.FIELDS_OPEN)
        self._item(key, token)
        self._parts.append(PAIR_SEPARATOR)
        self.state = RecordState.FIELDS_OPEN
        return self

    def _thread_block(self, section: Section) -> str:
        call = self.call
        return encode_thread_block(call.wall, call.cpu, call.thread, call.perf, section)

    # === Record boundaries ===

    def entering(self) -> 'RecordWriter':
        self._require(RecordState.IDLE)
        self._parts.append('{"event":' + json.dumps(self.call.name) + PAIR_SEPARATOR)
        self._item(Section.ENTERING.value, self._thread_block(Section.ENTERING))
        self._parts.append(PAIR_SEPARATOR)
        self.state = RecordState.ENTERING
        return self

    def returning(self) -> bool:
        """Close the record and hand it to the session. Always returns True."""
        self._require(RecordState.ENTERING, RecordState.FIELDS_OPEN)
        self._item(Section.RETURNING.value, self._thread_block(Section.RETURNING))
        self._parts.append('}' + END_OF_RECORD)
        self.state = RecordState.CLOSED
        self.session.emit(''.join(self._parts))
        return True

    def text(self) -> str:
        """Text assembled so far."""
        return ''.join(self._parts)

    def __enter__(self) -> 'RecordWriter':
        return self.entering()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.returning()
        return False

    # === Scalars ===

    def int32(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, NULL if value is None else encode_int(value))

    def int64(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, NULL if value is None else encode_int64(value))

    def string(self, key: str, value: Optional[str]) -> 'RecordWriter':
        return self._field(key, encode_string(value))

    # === Collections ===

    def int_array(self, key: str, values, length) -> 'RecordWriter':
        return self._field(key, encode_int_array(values, length))

    def int_matrix(self, key: str, rows, x, y) -> 'RecordWriter':
        return self._field(key, encode_int_matrix(rows, x, y))

    def string_array(self, key: str, values, length) -> 'RecordWriter':
        return self._field(key, encode_string_array(values, length))

    def string_matrix(self, key: str, rows, x, y) -> 'RecordWriter':
        return self._field(key, encode_string_matrix(rows, x, y))

    # === Symbolic values ===

    def symbol(self, key: str, value: Optional[int], category: Optional[Category] = None,
               resolver: Optional[Callable[[int], str]] = None) -> 'RecordWriter':
        """Value/label pair; the label comes from the category's resolver."""
        if resolver is None:
            resolver = self.session.resolver.get(category)
        return self._field(key, encode_symbol(value, resolver))

    def source(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, encode_source(value))

    def dest(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, encode_dest(value))

    def tag(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, encode_tag(value))

    def function(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, encode_function(value, self.session.addresses))

    # === Handles and statuses ===

    def status(self, key: str, value) -> 'RecordWriter':
        return self._field(key, encode_status(value))

    def statuses(self, key: str, values, count) -> 'RecordWriter':
        return self._field(key, encode_statuses(values, count))

    def request(self, key: str, value: Optional[int]) -> 'RecordWriter':
        return self._field(key, encode_request(value))

    def requests(self, key: str, values, count) -> 'RecordWriter':
        return self._field(key, encode_requests(values, count))


_DISPATCH: Dict[FieldKind, Callable[[RecordWriter, Param], RecordWriter]] = {
    FieldKind.INT: lambda w, p: w.int32(p.name, p.value),
    FieldKind.INT64: lambda w, p: w.int64(p.name, p.value),
    FieldKind.STRING: lambda w, p: w.string(p.name, p.value),
    FieldKind.INT_ARRAY: lambda w, p: w.int_array(p.name, p.value, p.length),
    FieldKind.INT_MATRIX: lambda w, p: w.int_matrix(p.name, p.value, p.length, p.inner_length),
    FieldKind.STRING_ARRAY: lambda w, p: w.string_array(p.name, p.value, p.length),
    FieldKind.STRING_MATRIX: lambda w, p: w.string_matrix(p.name, p.value, p.length, p.inner_length),
    FieldKind.SYMBOL: lambda w, p: w.symbol(p.name, p.value, p.category),
    FieldKind.SOURCE: lambda w, p: w.source(p.name, p.value),
    FieldKind.DEST: lambda w, p: w.dest(p.name, p.value),
    FieldKind.TAG: lambda w, p: w.tag(p.name, p.value),
    FieldKind.STATUS: lambda w, p: w.status(p.name, p.value),
    FieldKind.STATUS_ARRAY: lambda w, p: w.statuses(p.name, p.value, p.length),
    FieldKind.REQUEST: lambda w, p: w.request(p.name, p.value),
    FieldKind.REQUEST_ARRAY: lambda w, p: w.requests(p.name, p.value, p.length),
    FieldKind.FUNCTION: lambda w, p: w.function(p.name, p.value),
}


def write_param(writer: RecordWriter, param: Param) -> RecordWriter:
    """Append one parameter using the encoder for its kind."""
    return _DISPATCH[param.kind](writer, param)


def format_call(session, call: CallRecord) -> bool:
    """Format a complete CallRecord onto the session's stream."""
    writer = RecordWriter(session, call)
    writer.entering()
    for param in call.params:
        write_param(writer, param)
    return writer.returning()
