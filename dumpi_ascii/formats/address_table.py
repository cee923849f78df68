"""
Function address table.

Calls that register callbacks (MPI_Keyval_create, MPI_Op_create,
MPI_Errhandler_create, ...) record the raw function pointer. A
FunctionAddressTable maps those pointers back to symbol names so the
output can show which callback was registered.

File format (one entry per line, '#' starts a comment):

    0x400a10 my_reduce_op
    4196912  copy_attr_fn
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..core.errors import AddressTableError, ConversionError, ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddressEntry:
    """One (address, name) pair."""
    address: int
    name: str


class FunctionAddressTable:
    """
    Ordered, read-only list of address -> name entries.

    Lookups are a linear scan for an exact match; tables hold a few dozen
    entries at most.
    """

    def __init__(self, entries: Iterable[Tuple[int, str]] = ()):
        self._entries: Tuple[AddressEntry, ...] = tuple(
            AddressEntry(int(address), str(name)) for address, name in entries
        )

    @property
    def entries(self) -> Tuple[AddressEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def lookup(self, address: int) -> Optional[str]:
        """Name registered for an address, or None."""
        for entry in self._entries:
            if entry.address == address:
                return entry.name
        return None

    @classmethod
    def parse(cls, lines: Iterable[str], source: str = '<string>') -> 'FunctionAddressTable':
        """
        Parse address table lines.

        Raises:
            AddressTableError: If a non-comment line is not "<address> <name>"
        """
        entries: List[Tuple[int, str]] = []
        seen = set()

        for lineno, raw in enumerate(lines, 1):
            line = raw.split('#', 1)[0].strip()
            if not line:
                continue

            parts = line.split(None, 1)
            if len(parts) != 2:
                raise AddressTableError(ConversionError(
                    code=ErrorCode.E2001_BAD_ADDRESS_LINE,
                    context={'source': source, 'line': lineno, 'text': raw.rstrip()},
                ))

            try:
                address = int(parts[0], 0)
            except ValueError:
                raise AddressTableError(ConversionError(
                    code=ErrorCode.E2001_BAD_ADDRESS_LINE,
                    context={'source': source, 'line': lineno, 'address': parts[0]},
                ))

            if address in seen:
                logger.warning(f"{source}:{lineno}: duplicate address 0x{address:x}, keeping first entry")
                continue
            seen.add(address)
            entries.append((address, parts[1].strip()))

        return cls(entries)

    @classmethod
    def load(cls, path: Path) -> 'FunctionAddressTable':
        """Load a table from a file."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Address table not found: {path}")

        with open(path) as f:
            table = cls.parse(f, source=str(path))

        logger.info(f"Loaded {len(table)} function address(es) from {path}")
        return table
