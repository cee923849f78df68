"""
Request handle and status encoders.

The two array kinds use different "ignored" thresholds:
- statuses: None or count < 1 -> null (MPI_STATUSES_IGNORE)
- requests: None or count < 0 -> null; count == 0 -> []

A zero-length request array is a real, empty argument list, whereas a
status array with nothing in it means the statuses were not captured.
A LengthKind count walks the sequence up to the first None.
"""

from typing import Any, List, Optional, Sequence

from ..formats.call_record import Status
from ..formats.sentinels import Length, LengthKind
from .primitives import NULL


def _take(items: Sequence[Any], count: Length) -> List[Any]:
    if isinstance(count, LengthKind):
        taken = []
        for item in items:
            if item is None:
                break
            taken.append(item)
        return taken
    return list(items[:count])


def _status_object(status: Status) -> str:
    return (
        f'{{"bytes":{status.bytes}, "cancelled":{status.cancelled}, '
        f'"source":{status.source}, "tag":{status.tag}, "error":{status.error}}}'
    )


def encode_statuses(statuses: Optional[Sequence[Status]], count: Optional[Length]) -> str:
    if statuses is None or count is None:
        return NULL
    if not isinstance(count, LengthKind) and count < 1:
        return NULL
    taken = _take(statuses, count)
    if not taken:
        return NULL
    return '[' + ', '.join(_status_object(s) for s in taken) + ']'


def encode_status(status: Optional[Status]) -> str:
    """Single status pointer (rendered as a one-element array)."""
    if status is None:
        return NULL
    return encode_statuses([status], 1)


def encode_requests(requests: Optional[Sequence[int]], count: Optional[Length]) -> str:
    if requests is None or count is None:
        return NULL
    if not isinstance(count, LengthKind) and count < 0:
        return NULL
    return '[' + ', '.join(str(int(r)) for r in _take(requests, count)) + ']'


def encode_request(request: Optional[int]) -> str:
    """Single request handle (rendered as a one-element array)."""
    if request is None:
        return NULL
    return encode_requests([request], 1)
