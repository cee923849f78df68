"""
Scalar encoders.

Every encoder returns the text of exactly one value token. Absent data is
always the bare token NULL, never an empty string or an empty collection.
"""

import json
from typing import Optional


NULL = 'null'


def encode_int(value: int) -> str:
    """Signed 32-bit integer."""
    return str(int(value))


def encode_int64(value: int) -> str:
    """64-bit integer (printed the same way; kept separate for call signatures)."""
    return str(int(value))


def encode_string(value: Optional[str]) -> str:
    """Quoted string, or null when the string was not recorded."""
    if value is None:
        return NULL
    return json.dumps(value, ensure_ascii=False)


def encode_timestamp(ts) -> str:
    """Render a Timestamp as seconds.nanoseconds (9-digit, zero padded)."""
    return f'{int(ts.sec)}.{int(ts.nsec):09d}'
