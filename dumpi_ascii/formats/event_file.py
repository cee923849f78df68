"""
EventFileReader - decoded call events stored as JSON lines.

Each non-blank line is one call event:

    {"call": "MPI_Waitall", "thread": 0,
     "wall": {"start": [12, 4100], "stop": [12, 9800]},
     "cpu": {"start": [0, 913000], "stop": [0, 921000]},
     "perf": {"tags": ["PAPI_TOT_CYC"], "in": [1200], "out": [1890]},
     "params": {"count": 2, "requests": [7, 8], "statuses": null}}

Parameters are typed and ordered by the call's signature; keys missing from
"params" are recorded as absent (None). Array lengths normally come from
the signature, but an event may override them:

    "lengths": {"argv": "nullterm"}
    "inner_lengths": {"argvs": [2, "nullterm", 1]}

Length tokens are integers, "cstring"/"nullterm", or the raw wire values
-1/-2 (which only count as sentinels when given here, never in "params").
Only string fields take the sentinels; for every other kind an override is
a plain count, so -1 means "not recorded".
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from .call_record import (
    CallRecord,
    ClockSpan,
    FieldKind,
    Param,
    PerfSnapshot,
    Status,
    Timestamp,
)
from .sentinels import LengthKind
from .signatures import SIGNATURES, CallSignature, FieldSpec
from ..core.errors import (
    ConversionError,
    ErrorCode,
    EventDecodeError,
    UnknownCallError,
)

logger = logging.getLogger(__name__)


_LENGTH_NAMES = {
    'cstring': LengthKind.CSTRING,
    'nullterm': LengthKind.NULLTERM,
}

# Kinds whose length may be a terminator scan
_SENTINEL_KINDS = frozenset({
    FieldKind.STRING,
    FieldKind.STRING_ARRAY,
    FieldKind.STRING_MATRIX,
})


def _fail(code: ErrorCode, lineno: int, **context) -> EventDecodeError:
    context['line'] = lineno
    return EventDecodeError(ConversionError(code=code, context=context))


def parse_length(token: Any, sentinels: bool = True) -> Any:
    """
    Turn a length token from an event into an int or LengthKind.

    With sentinels=False only plain integers are accepted and -1/-2 are
    returned unchanged.
    """
    if token is None:
        return token
    if isinstance(token, (LengthKind, str)):
        kind = token if isinstance(token, LengthKind) else _LENGTH_NAMES.get(token.strip().lower())
        if kind is None:
            raise ValueError(f"Unknown length token: {token!r}")
        if not sentinels:
            raise ValueError(f"{kind.name.lower()} length only applies to string fields")
        return kind
    if isinstance(token, bool) or not isinstance(token, int):
        raise ValueError(f"Length must be an integer, got {token!r}")
    return LengthKind.from_wire(token) if sentinels else token


def _timestamp(raw: Any, lineno: int, where: str) -> Timestamp:
    if raw is None:
        return Timestamp()
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise _fail(ErrorCode.E1003_BAD_TIMESTAMP, lineno, field=where, value=raw)
    sec, nsec = raw
    if not isinstance(sec, int) or not isinstance(nsec, int):
        raise _fail(ErrorCode.E1003_BAD_TIMESTAMP, lineno, field=where, value=raw)
    return Timestamp(sec, nsec)


def _clock(raw: Any, lineno: int, where: str) -> ClockSpan:
    if raw is None:
        return ClockSpan()
    if not isinstance(raw, dict):
        raise _fail(ErrorCode.E1003_BAD_TIMESTAMP, lineno, field=where, value=raw)
    return ClockSpan(
        start=_timestamp(raw.get('start'), lineno, f'{where}.start'),
        stop=_timestamp(raw.get('stop'), lineno, f'{where}.stop'),
    )


def _perf(raw: Any, lineno: int) -> Optional[PerfSnapshot]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, field='perf', value=raw)

    tags = list(raw.get('tags') or [])
    invalues = list(raw.get('in') or [])
    outvalues = list(raw.get('out') or [])
    if len(invalues) != len(tags) or len(outvalues) != len(tags):
        raise _fail(
            ErrorCode.E1001_INVALID_EVENT, lineno,
            field='perf', reason='tags, in and out must have equal length',
        )
    return PerfSnapshot(tags=tags, invalues=invalues, outvalues=outvalues)


def _status(raw: Any) -> Status:
    if not isinstance(raw, dict):
        raise TypeError(f"status must be an object, got {raw!r}")
    return Status(
        bytes=int(raw.get('bytes', 0)),
        cancelled=int(raw.get('cancelled', 0)),
        source=int(raw.get('source', 0)),
        tag=int(raw.get('tag', 0)),
        error=int(raw.get('error', 0)),
    )


def _value(spec: FieldSpec, raw: Any) -> Any:
    """Convert a JSON value to what the encoder for this kind expects."""
    if raw is None:
        return None

    kind = spec.kind
    if kind is FieldKind.STATUS:
        return _status(raw)
    if kind is FieldKind.STATUS_ARRAY:
        return [_status(s) for s in _list(raw)]
    if kind is FieldKind.FUNCTION and isinstance(raw, str):
        return int(raw, 0)
    if kind in (FieldKind.INT, FieldKind.INT64, FieldKind.SYMBOL, FieldKind.SOURCE,
                FieldKind.DEST, FieldKind.TAG, FieldKind.REQUEST, FieldKind.FUNCTION):
        return int(raw)
    if kind in (FieldKind.INT_ARRAY, FieldKind.REQUEST_ARRAY):
        return _ints(raw)
    if kind is FieldKind.INT_MATRIX:
        return [None if row is None else _ints(row) for row in _list(raw)]
    if kind is FieldKind.STRING:
        return _str(raw)
    if kind is FieldKind.STRING_ARRAY:
        # a CSTRING filename arrives as a bare string
        return raw if isinstance(raw, str) else _strs(raw)
    if kind is FieldKind.STRING_MATRIX:
        return [None if row is None else _strs(row) for row in _list(raw)]
    return raw


def _list(raw: Any) -> list:
    if not isinstance(raw, list):
        raise TypeError(f"expected an array, got {raw!r}")
    return raw


def _ints(raw: Any) -> list:
    values = _list(raw)
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise TypeError(f"expected integer elements, got {v!r}")
    return values


def _str(raw: Any) -> Optional[str]:
    if raw is not None and not isinstance(raw, str):
        raise TypeError(f"expected a string, got {raw!r}")
    return raw


def _strs(raw: Any) -> list:
    return [_str(v) for v in _list(raw)]


def _resolve_length(spec_length: Any, signature: CallSignature, params: Mapping[str, Any],
                    lineno: int, field: str) -> Any:
    """A declared length: fixed value, or the value of a sibling parameter."""
    if not isinstance(spec_length, str):
        return spec_length

    if spec_length not in signature.field_names():
        raise _fail(ErrorCode.E1004_BAD_LENGTH_REFERENCE, lineno, field=field, refers_to=spec_length)

    value = params.get(spec_length)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(
            ErrorCode.E1004_BAD_LENGTH_REFERENCE, lineno,
            field=field, refers_to=spec_length, value=value,
        )
    return value


def _override(raw: Any, lineno: int, field: str, sentinels: bool) -> Any:
    try:
        if isinstance(raw, list):
            return [parse_length(item, sentinels) for item in raw]
        return parse_length(raw, sentinels)
    except ValueError as e:
        raise _fail(ErrorCode.E1004_BAD_LENGTH_REFERENCE, lineno, field=field, reason=str(e))


def decode_event(event: Mapping[str, Any], lineno: int = 0,
                 signatures: Optional[Mapping[str, CallSignature]] = None) -> CallRecord:
    """
    Build a CallRecord from one decoded JSON event.

    Raises:
        UnknownCallError: If the call has no signature
        EventDecodeError: If the event is malformed
    """
    if not isinstance(event, dict):
        raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, reason='event must be an object')

    name = event.get('call')
    if not isinstance(name, str) or not name:
        raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, reason='missing "call"')

    table = SIGNATURES if signatures is None else signatures
    signature = table.get(name)
    if signature is None:
        raise UnknownCallError(ConversionError(
            code=ErrorCode.E1002_UNKNOWN_CALL,
            context={'call': name, 'line': lineno},
        ))

    raw_params = event.get('params') or {}
    lengths = event.get('lengths') or {}
    inner_lengths = event.get('inner_lengths') or {}
    if not isinstance(raw_params, dict):
        raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, reason='"params" must be an object')

    unknown = set(raw_params) - set(signature.field_names())
    if unknown:
        logger.warning(f"line {lineno}: {name} has no parameter(s) {sorted(unknown)}, ignoring")

    params = []
    for spec in signature.fields:
        try:
            value = _value(spec, raw_params.get(spec.name))
        except (TypeError, ValueError, AttributeError) as e:
            raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, field=spec.name, reason=str(e))

        sentinels = spec.kind in _SENTINEL_KINDS
        if spec.name in lengths:
            length = _override(lengths[spec.name], lineno, spec.name, sentinels)
        else:
            length = _resolve_length(spec.length, signature, raw_params, lineno, spec.name)

        if spec.name in inner_lengths:
            inner = _override(inner_lengths[spec.name], lineno, spec.name, sentinels)
        else:
            inner = _resolve_length(spec.inner_length, signature, raw_params, lineno, spec.name)

        params.append(Param(
            name=spec.name,
            kind=spec.kind,
            value=value,
            length=length,
            inner_length=inner,
            category=spec.category,
        ))

    thread = event.get('thread', 0)
    if isinstance(thread, bool) or not isinstance(thread, int):
        raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, field='thread', value=thread)

    return CallRecord(
        name=name,
        thread=thread,
        wall=_clock(event.get('wall'), lineno, 'wall'),
        cpu=_clock(event.get('cpu'), lineno, 'cpu'),
        params=params,
        perf=_perf(event.get('perf'), lineno),
    )


class EventFileReader:
    """
    Read CallRecords from a JSON-lines event file.

    Usage:
        for call in EventFileReader.read_path(path):
            format_call(session, call)

    With skip_unknown=True, events for calls without a signature are
    logged and skipped instead of raising UnknownCallError.
    """

    @classmethod
    def read_lines(cls, lines: Iterable[str], skip_unknown: bool = False,
                   signatures: Optional[Mapping[str, CallSignature]] = None) -> Iterator[CallRecord]:
        for lineno, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            try:
                event = json.loads(line)
            except json.JSONDecodeError as e:
                raise _fail(ErrorCode.E1001_INVALID_EVENT, lineno, reason=e.msg)

            try:
                yield decode_event(event, lineno, signatures)
            except UnknownCallError as e:
                if not skip_unknown:
                    raise
                logger.warning(f"Skipping event: {e.error.message}")

    @classmethod
    def read_path(cls, path: Path, skip_unknown: bool = False,
                  signatures: Optional[Mapping[str, CallSignature]] = None) -> Iterator[CallRecord]:
        """
        Open and read an event file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Event file not found: {path}")

        logger.debug(f"Reading events from {path}")
        with open(path) as f:
            yield from cls.read_lines(f, skip_unknown=skip_unknown, signatures=signatures)

    @classmethod
    def count(cls, path: Path) -> int:
        """Count event lines without decoding them."""
        with open(path) as f:
            return sum(1 for line in f if line.strip() and not line.lstrip().startswith('#'))
