"""
FormatSession - everything the encoders consult, bundled in one object.

A session owns no global state: the output stream, the symbol resolvers
and the function address table are all passed in, and every record is
written through the session.

Example:
    with open('trace.txt', 'w') as out:
        session = FormatSession(out, addresses=FunctionAddressTable.load(path))
        for call in EventFileReader.read_path('trace.jsonl'):
            format_call(session, call)
"""

import logging
import threading
from typing import Iterable, Optional, TextIO

from .protocol import RecordWriter, format_call
from ..formats.call_record import CallRecord
from ..symbols.registry import SymbolResolver

logger = logging.getLogger(__name__)


class FormatSession:
    """
    Output stream plus lookup context for a formatting run.

    Attributes:
        stream: Text stream records are written to
        resolver: Per-category symbol resolvers
        addresses: FunctionAddressTable for callback pointers (may be None)
        records_written: Number of records emitted so far
    """

    def __init__(
        self,
        stream: TextIO,
        resolver: Optional[SymbolResolver] = None,
        addresses=None,
    ):
        self.stream = stream
        self.resolver = resolver or SymbolResolver.default()
        self.addresses = addresses
        self.records_written = 0

        # Serializes whole records on the shared stream
        self._lock = threading.Lock()

    def record(self, call: CallRecord) -> RecordWriter:
        """Writer for one call; use as a context manager or drive it directly."""
        return RecordWriter(self, call)

    def emit(self, text: str) -> None:
        """Write one complete record."""
        with self._lock:
            self.stream.write(text)
            self.records_written += 1

    def write_calls(self, calls: Iterable[CallRecord]) -> int:
        """Format every call in order; returns the number of records written."""
        count = 0
        for call in calls:
            format_call(self, call)
            count += 1
            if count % 100000 == 0:
                logger.debug(f"Formatted {count:,} records")
        logger.info(f"Formatted {count:,} records")
        return count
