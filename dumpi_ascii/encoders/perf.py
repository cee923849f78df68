"""
Thread/timing block and performance-counter encoders.

Each record carries two timing blocks, one for call entry and one for call
exit:

    {"walltime": 12.000004100, "cputime": 0.000913000, "thread": 0}

When counters were configured the block also gets a "perfcounters" key.
The same PerfSnapshot feeds both blocks; the entry block reads invalues
and the exit block reads outvalues.
"""

from enum import Enum
from typing import Optional

from ..formats.call_record import ClockSpan, PerfSnapshot
from .primitives import encode_string, encode_timestamp


class Section(Enum):
    """Which side of the call a timing block describes."""

    ENTERING = 'entering'
    RETURNING = 'returning'


def encode_perfcounters(perf: Optional[PerfSnapshot], section: Section) -> Optional[str]:
    """
    Counter list for one section, or None when no counters exist.

    None means the key is left out of the timing block altogether.
    """
    if perf is None or perf.count == 0:
        return None

    values = perf.invalues if section is Section.ENTERING else perf.outvalues
    items = [
        encode_string(f'{tag}={int(value)}')
        for tag, value in zip(perf.tags, values)
    ]
    return '[' + ', '.join(items) + ']'


def encode_thread_block(wall: ClockSpan, cpu: ClockSpan, thread: int,
                        perf: Optional[PerfSnapshot], section: Section) -> str:
    if section is Section.ENTERING:
        walltime, cputime = wall.start, cpu.start
    else:
        walltime, cputime = wall.stop, cpu.stop

    block = (
        f'{{"walltime": {encode_timestamp(walltime)}, '
        f'"cputime": {encode_timestamp(cputime)}, '
        f'"thread": {int(thread)}'
    )
    counters = encode_perfcounters(perf, section)
    if counters is not None:
        block += f', "perfcounters": {counters}'
    return block + '}'
