"""
In-memory representation of one traced call.

CallRecord is what a trace reader hands to the formatter: the call name,
the thread that issued it, wall/cpu clock spans, an optional perf-counter
snapshot, and the call's parameters in declaration order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .sentinels import Length
from ..symbols.categories import Category


@dataclass(frozen=True)
class Timestamp:
    """Clock reading split into whole seconds and nanoseconds."""
    sec: int = 0
    nsec: int = 0


@dataclass
class PerfSnapshot:
    """
    Performance counters read on call entry and exit.

    The same tag list is shared by both readings; invalues[i] and
    outvalues[i] belong to tags[i].
    """
    tags: List[str] = field(default_factory=list)
    invalues: List[int] = field(default_factory=list)
    outvalues: List[int] = field(default_factory=list)

    def __post_init__(self):
        if len(self.invalues) != len(self.tags) or len(self.outvalues) != len(self.tags):
            raise ValueError(
                f"PerfSnapshot needs one in and one out value per tag "
                f"({len(self.tags)} tags, {len(self.invalues)} in, {len(self.outvalues)} out)"
            )

    @property
    def count(self) -> int:
        return len(self.tags)


@dataclass(frozen=True)
class Status:
    """Completion status of a receive or wait call."""
    bytes: int = 0
    cancelled: int = 0
    source: int = 0
    tag: int = 0
    error: int = 0


@dataclass(frozen=True)
class ClockSpan:
    """Clock readings taken on call entry and on call exit."""
    start: Timestamp = field(default_factory=Timestamp)
    stop: Timestamp = field(default_factory=Timestamp)


class FieldKind(Enum):
    """Shape of a call parameter; selects the encoder used for it."""

    INT = 'int'
    INT64 = 'int64'
    STRING = 'string'
    INT_ARRAY = 'int_array'
    INT_MATRIX = 'int_matrix'
    STRING_ARRAY = 'string_array'
    STRING_MATRIX = 'string_matrix'
    SYMBOL = 'symbol'
    SOURCE = 'source'
    DEST = 'dest'
    TAG = 'tag'
    STATUS = 'status'
    STATUS_ARRAY = 'status_array'
    REQUEST = 'request'
    REQUEST_ARRAY = 'request_array'
    FUNCTION = 'function'


@dataclass
class Param:
    """
    One typed call parameter.

    Attributes:
        name: Key used in the output record
        kind: Encoder shape
        value: Scalar, sequence, or None when the parameter was not recorded
        length: Element count (or LengthKind) for array kinds
        inner_length: Row length for matrix kinds; a single length or one per row
        category: Symbol category for SYMBOL parameters
    """
    name: str
    kind: FieldKind
    value: Any = None
    length: Optional[Length] = None
    inner_length: Any = None
    category: Optional[Category] = None


@dataclass
class CallRecord:
    """A single profiled call, ready to be formatted."""
    name: str
    thread: int = 0
    wall: ClockSpan = field(default_factory=ClockSpan)
    cpu: ClockSpan = field(default_factory=ClockSpan)
    params: List[Param] = field(default_factory=list)
    perf: Optional[PerfSnapshot] = None

    def param(self, name: str) -> Optional[Param]:
        """Look up a parameter by name."""
        for p in self.params:
            if p.name == name:
                return p
        return None

    def __repr__(self) -> str:
        return (
            f"CallRecord({self.name}, thread={self.thread}, "
            f"params={len(self.params)})"
        )
