"""
Collection encoders: integer and string arrays of one to three dimensions.

Rules shared by every encoder here:
- A missing collection (None) or an explicit length < 1 renders as null.
  An empty bracket pair is never produced for "nothing recorded".
- LengthKind.NULLTERM means "walk the pointers until the first None".
- LengthKind.CSTRING on a str renders the value as one string scalar;
  on a sequence it behaves like NULLTERM.
- Matrix encoders apply those rules separately to the outer dimension and
  to every row. A row length may be given once for all rows or per row.
"""

from typing import Any, Callable, List, Optional, Sequence

from ..formats.sentinels import LengthKind, Length
from .primitives import NULL, encode_int, encode_string


SEPARATOR = ', '


def _is_terminated(length: Optional[Length]) -> bool:
    return isinstance(length, LengthKind)


def _take(items: Sequence[Any], length: Length) -> List[Any]:
    """Elements selected by a length: a count, or a scan to the terminator."""
    if _is_terminated(length):
        taken = []
        for item in items:
            if item is None:
                break
            taken.append(item)
        return taken
    return list(items[:length])


def _is_absent(items: Optional[Sequence[Any]], length: Optional[Length]) -> bool:
    if items is None or length is None:
        return True
    if _is_terminated(length):
        return False
    return length < 1


def _bracket(tokens: List[str]) -> str:
    return '[' + SEPARATOR.join(tokens) + ']'


def _row_length(inner: Any, row: int) -> Optional[Length]:
    if isinstance(inner, (list, tuple)):
        return inner[row] if row < len(inner) else None
    return inner


def _encode_row(items: Optional[Sequence[Any]], length: Optional[Length],
                element: Callable[[Any], str]) -> str:
    """
    One row of a matrix.

    Rows never collapse to null on their own; a missing or empty row is [].
    """
    if items is None or length is None:
        return '[]'
    if not _is_terminated(length) and length < 1:
        return '[]'
    return _bracket([element(x) for x in _take(items, length)])


def _encode_matrix(rows: Optional[Sequence[Any]], x: Optional[Length], y: Any,
                   element: Callable[[Any], str]) -> str:
    if _is_absent(rows, x):
        return NULL
    tokens = []
    for i, row in enumerate(_take(rows, x)):
        tokens.append(_encode_row(row, _row_length(y, i), element))
    return _bracket(tokens)


def encode_int_array(values: Optional[Sequence[int]], length: Optional[Length]) -> str:
    """1D integer array, e.g. [1, 2, 3]."""
    if _is_absent(values, length):
        return NULL
    return _bracket([encode_int(v) for v in _take(values, length)])


def encode_int_matrix(rows: Optional[Sequence[Sequence[int]]], x: Optional[Length], y: Any) -> str:
    """2D integer array, e.g. [[1, 2], [3, 4]]."""
    return _encode_matrix(rows, x, y, encode_int)


def encode_string_array(values: Any, length: Optional[Length]) -> str:
    """Array of strings (char**), or a single string for CSTRING."""
    if length is LengthKind.CSTRING and isinstance(values, str):
        return encode_string(values)
    if _is_absent(values, length):
        return NULL
    return _bracket([encode_string(v) for v in _take(values, length)])


def encode_string_matrix(rows: Optional[Sequence[Sequence[str]]], x: Optional[Length], y: Any) -> str:
    """2D array of strings (char***), as used by MPI_Comm_spawn_multiple argv."""
    return _encode_matrix(rows, x, y, encode_string)
