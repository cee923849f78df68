"""
Symbolic encoders: integers printed together with a human-readable label.

Every named constant (communicator, datatype, op, ...) is rendered by the
same pair encoder; only the resolver passed in differs. Source, destination
and tag fields carry negative wildcards that no resolver table covers, so
they are special-cased before any lookup happens.
"""

from typing import Callable, Optional

from ..formats.sentinels import (
    ANY_SOURCE,
    ANY_SOURCE_LABEL,
    ANY_TAG,
    ANY_TAG_LABEL,
    ROOT,
    ROOT_LABEL,
)
from .primitives import NULL, encode_int, encode_string


def encode_pair(value: int, label: Optional[str]) -> str:
    """{"value":<int>, "label": "<label>"}; a missing label is null."""
    return '{"value":' + str(int(value)) + ', "label": ' + encode_string(label) + '}'


def encode_symbol(value: Optional[int], resolver: Callable[[int], str]) -> str:
    """Pair whose label comes from a category resolver."""
    if value is None:
        return NULL
    return encode_pair(value, resolver(value))


def encode_source(value: Optional[int]) -> str:
    """Source rank; wildcards become labelled pairs."""
    if value is None:
        return NULL
    if value == ANY_SOURCE:
        return encode_pair(value, ANY_SOURCE_LABEL)
    if value == ROOT:
        return encode_pair(value, ROOT_LABEL)
    return encode_int(value)


def encode_dest(value: Optional[int]) -> str:
    """Destination rank (same reserved values as a source)."""
    return encode_source(value)


def encode_tag(value: Optional[int]) -> str:
    """Message tag; MPI_ANY_TAG is written as its name."""
    if value is None:
        return NULL
    if value == ANY_TAG:
        return encode_string(ANY_TAG_LABEL)
    return encode_int(value)


def encode_function(value: Optional[int], table) -> str:
    """
    Callback pointer resolved against a FunctionAddressTable.

    Unknown addresses (or no table at all) keep the numeric value and get a
    null label.
    """
    if value is None:
        return NULL
    name = table.lookup(value) if table is not None else None
    return encode_pair(value, name)
