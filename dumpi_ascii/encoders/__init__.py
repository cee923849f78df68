"""Field encoders: each turns one typed value into one output token."""

from .primitives import NULL, encode_int, encode_int64, encode_string, encode_timestamp
from .arrays import (
    encode_int_array,
    encode_int_matrix,
    encode_string_array,
    encode_string_matrix,
)
from .symbolic import (
    encode_pair,
    encode_symbol,
    encode_source,
    encode_dest,
    encode_tag,
    encode_function,
)
from .handles import encode_status, encode_statuses, encode_request, encode_requests
from .perf import Section, encode_perfcounters, encode_thread_block

__all__ = [
    'NULL',
    'encode_int',
    'encode_int64',
    'encode_string',
    'encode_timestamp',
    'encode_int_array',
    'encode_int_matrix',
    'encode_string_array',
    'encode_string_matrix',
    'encode_pair',
    'encode_symbol',
    'encode_source',
    'encode_dest',
    'encode_tag',
    'encode_function',
    'encode_status',
    'encode_statuses',
    'encode_request',
    'encode_requests',
    'Section',
    'encode_perfcounters',
    'encode_thread_block',
]
