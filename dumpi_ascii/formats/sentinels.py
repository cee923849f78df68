"""
Reserved lengths and wildcard constants.

The binary trace format overloads two negative lengths to mean "scan for a
terminator" instead of "use this count":
- CSTRING (-1): the value is a NUL-terminated string
- NULLTERM (-2): the value is a NULL-terminated array of pointers

Here they are an explicit enumeration so that a legitimate length of -1
(meaning "nothing recorded") can never be mistaken for a sentinel.
"""

from enum import Enum
from typing import Union


class LengthKind(Enum):
    """Length placeholders for values whose size is found by scanning."""

    CSTRING = -1
    NULLTERM = -2

    @property
    def wire_value(self) -> int:
        """Raw length used by the binary trace format."""
        return self.value

    @classmethod
    def from_wire(cls, length: int) -> 'Length':
        """Map a raw trace length to a LengthKind, or pass it through."""
        for kind in cls:
            if kind.value == length:
                return kind
        return length


Length = Union[int, LengthKind]


# Wildcards and reserved ranks (negative, outside every symbol table)
ANY_SOURCE = -1
ANY_TAG = -1
PROC_NULL = -2
UNDEFINED = -3
ROOT = -4

ANY_SOURCE_LABEL = 'MPI_ANY_SOURCE'
ANY_TAG_LABEL = 'MPI_ANY_TAG'
ROOT_LABEL = 'MPI_ROOT'
