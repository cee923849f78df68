"""
Default name tables for symbolic fields.

Handles in a trace are small integers assigned by the tracer, not the raw
MPI handles of the traced program. Each category has a fixed block of
predefined ids (0 = error marker, 1 = the NULL handle where one exists)
followed by ids handed out to user-created objects.

Two resolver shapes are provided:
- SymbolTable: enumerated ids -> names, with a user-defined range
- FlagTable: bitmask values -> "FLAG_A|FLAG_B"
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .categories import Category


UNKNOWN_LABEL = 'unknown'


@dataclass
class SymbolTable:
    """
    Resolver for an enumerated category.

    Attributes:
        category: Category this table names
        names: Predefined id -> name
        first_user: First id given to user-created objects (None if the
            category has no user objects)
        user_label: Label for ids at or above first_user
    """
    category: Category
    names: Dict[int, str] = field(default_factory=dict)
    first_user: Optional[int] = None
    user_label: str = 'user-defined'

    def __call__(self, value: int) -> str:
        name = self.names.get(value)
        if name is not None:
            return name
        if self.first_user is not None and value >= self.first_user:
            return self.user_label
        return UNKNOWN_LABEL

    def with_names(self, extra: Dict[int, str]) -> 'SymbolTable':
        """Return a copy with additional (or replaced) names."""
        names = dict(self.names)
        names.update(extra)
        return SymbolTable(
            category=self.category,
            names=names,
            first_user=self.first_user,
            user_label=self.user_label,
        )

    def entries(self) -> List[Tuple[int, str]]:
        return sorted(self.names.items())


@dataclass
class FlagTable:
    """Resolver for a bitmask category (file modes, window assertions)."""
    category: Category
    flags: Dict[int, str] = field(default_factory=dict)
    empty_label: str = '0'

    def __call__(self, value: int) -> str:
        if value == 0:
            return self.empty_label
        if value < 0:
            return UNKNOWN_LABEL

        parts = []
        remaining = value
        for bit, name in sorted(self.flags.items()):
            if value & bit:
                parts.append(name)
                remaining &= ~bit
        if remaining:
            parts.append(f'0x{remaining:x}')
        return '|'.join(parts)

    def with_names(self, extra: Dict[int, str]) -> 'FlagTable':
        flags = dict(self.flags)
        flags.update(extra)
        return FlagTable(category=self.category, flags=flags, empty_label=self.empty_label)

    def entries(self) -> List[Tuple[int, str]]:
        return sorted(self.flags.items())


def _enumerate(names: List[str], start: int = 0) -> Dict[int, str]:
    return {i: name for i, name in enumerate(names, start)}


COMM_NAMES = _enumerate([
    'MPI_COMM_ERROR', 'MPI_COMM_NULL', 'MPI_COMM_WORLD', 'MPI_COMM_SELF',
])

DATATYPE_NAMES = _enumerate([
    'MPI_DATATYPE_ERROR', 'MPI_DATATYPE_NULL',
    'MPI_CHAR', 'MPI_SIGNED_CHAR', 'MPI_UNSIGNED_CHAR', 'MPI_BYTE',
    'MPI_WCHAR', 'MPI_SHORT', 'MPI_UNSIGNED_SHORT', 'MPI_INT',
    'MPI_UNSIGNED', 'MPI_LONG', 'MPI_UNSIGNED_LONG', 'MPI_FLOAT',
    'MPI_DOUBLE', 'MPI_LONG_DOUBLE', 'MPI_LONG_LONG_INT',
    'MPI_UNSIGNED_LONG_LONG', 'MPI_LONG_LONG', 'MPI_PACKED', 'MPI_LB',
    'MPI_UB', 'MPI_FLOAT_INT', 'MPI_DOUBLE_INT', 'MPI_LONG_INT',
    'MPI_SHORT_INT', 'MPI_2INT', 'MPI_LONG_DOUBLE_INT',
])

GROUP_NAMES = _enumerate(['MPI_GROUP_ERROR', 'MPI_GROUP_NULL', 'MPI_GROUP_EMPTY'])

OP_NAMES = _enumerate([
    'MPI_OP_ERROR', 'MPI_OP_NULL', 'MPI_MAX', 'MPI_MIN', 'MPI_SUM',
    'MPI_PROD', 'MPI_LAND', 'MPI_BAND', 'MPI_LOR', 'MPI_BOR', 'MPI_LXOR',
    'MPI_BXOR', 'MPI_MINLOC', 'MPI_MAXLOC', 'MPI_REPLACE',
])

FILE_NAMES = _enumerate(['MPI_FILE_ERROR', 'MPI_FILE_NULL'])

INFO_NAMES = _enumerate(['MPI_INFO_ERROR', 'MPI_INFO_NULL'])

KEYVAL_NAMES = _enumerate([
    'MPI_KEYVAL_ERROR', 'MPI_KEYVAL_INVALID', 'MPI_TAG_UB', 'MPI_HOST',
    'MPI_IO', 'MPI_WTIME_IS_GLOBAL', 'MPI_UNIVERSE_SIZE', 'MPI_LASTUSEDCODE',
    'MPI_APPNUM', 'MPI_WIN_BASE', 'MPI_WIN_SIZE', 'MPI_WIN_DISP_UNIT',
])

LOCKTYPE_NAMES = _enumerate(['MPI_LOCKTYPE_ERROR', 'MPI_LOCK_EXCLUSIVE', 'MPI_LOCK_SHARED'])

ERRHANDLER_NAMES = _enumerate([
    'MPI_ERRHANDLER_ERROR', 'MPI_ERRHANDLER_NULL', 'MPI_ERRORS_ARE_FATAL',
    'MPI_ERRORS_RETURN',
])

ORDERING_NAMES = _enumerate(['MPI_ORDER_ERROR', 'MPI_ORDER_C', 'MPI_ORDER_FORTRAN'])

THREADLEVEL_NAMES = _enumerate([
    'MPI_THREADLEVEL_ERROR', 'MPI_THREAD_SINGLE', 'MPI_THREAD_FUNNELED',
    'MPI_THREAD_SERIALIZED', 'MPI_THREAD_MULTIPLE',
])

TOPOLOGY_NAMES = _enumerate(['MPI_TOPOLOGY_ERROR', 'MPI_GRAPH', 'MPI_CART', 'MPI_UNDEFINED'])

TYPECLASS_NAMES = _enumerate([
    'MPI_TYPECLASS_ERROR', 'MPI_TYPECLASS_REAL', 'MPI_TYPECLASS_INTEGER',
    'MPI_TYPECLASS_COMPLEX',
])

WIN_NAMES = _enumerate(['MPI_WIN_ERROR', 'MPI_WIN_NULL'])

COMPARISON_NAMES = _enumerate([
    'MPI_COMPARISON_ERROR', 'MPI_IDENT', 'MPI_CONGRUENT', 'MPI_SIMILAR',
    'MPI_UNEQUAL',
])

WHENCE_NAMES = _enumerate(['MPI_WHENCE_ERROR', 'MPI_SEEK_SET', 'MPI_SEEK_CUR', 'MPI_SEEK_END'])

COMBINER_NAMES = _enumerate([
    'MPI_COMBINER_ERROR', 'MPI_COMBINER_NAMED', 'MPI_COMBINER_DUP',
    'MPI_COMBINER_CONTIGUOUS', 'MPI_COMBINER_VECTOR',
    'MPI_COMBINER_HVECTOR_INTEGER', 'MPI_COMBINER_HVECTOR',
    'MPI_COMBINER_INDEXED', 'MPI_COMBINER_HINDEXED_INTEGER',
    'MPI_COMBINER_HINDEXED', 'MPI_COMBINER_INDEXED_BLOCK',
    'MPI_COMBINER_STRUCT_INTEGER', 'MPI_COMBINER_STRUCT',
    'MPI_COMBINER_SUBARRAY', 'MPI_COMBINER_DARRAY',
    'MPI_COMBINER_F90_REAL', 'MPI_COMBINER_F90_COMPLEX',
    'MPI_COMBINER_F90_INTEGER', 'MPI_COMBINER_RESIZED',
])

FILEMODE_FLAGS = {
    0x001: 'MPI_MODE_CREATE',
    0x002: 'MPI_MODE_RDONLY',
    0x004: 'MPI_MODE_WRONLY',
    0x008: 'MPI_MODE_RDWR',
    0x010: 'MPI_MODE_DELETE_ON_CLOSE',
    0x020: 'MPI_MODE_UNIQUE_OPEN',
    0x040: 'MPI_MODE_EXCL',
    0x080: 'MPI_MODE_APPEND',
    0x100: 'MPI_MODE_SEQUENTIAL',
}

WIN_ASSERT_FLAGS = {
    0x01: 'MPI_MODE_NOCHECK',
    0x02: 'MPI_MODE_NOSTORE',
    0x04: 'MPI_MODE_NOPUT',
    0x08: 'MPI_MODE_NOPRECEDE',
    0x10: 'MPI_MODE_NOSUCCEED',
}


def default_tables() -> Dict[Category, object]:
    """Build a fresh set of default resolvers, one per category."""
    keyvals = SymbolTable(Category.KEYVAL, KEYVAL_NAMES, len(KEYVAL_NAMES), 'user-defined-keyval')

    return {
        Category.COMM: SymbolTable(Category.COMM, COMM_NAMES, len(COMM_NAMES), 'user-defined-comm'),
        Category.DATATYPE: SymbolTable(
            Category.DATATYPE, DATATYPE_NAMES, len(DATATYPE_NAMES), 'user-defined-datatype'
        ),
        Category.GROUP: SymbolTable(Category.GROUP, GROUP_NAMES, len(GROUP_NAMES), 'user-defined-group'),
        Category.OP: SymbolTable(Category.OP, OP_NAMES, len(OP_NAMES), 'user-defined-op'),
        Category.FILE: SymbolTable(Category.FILE, FILE_NAMES, len(FILE_NAMES), 'user-file'),
        Category.INFO: SymbolTable(Category.INFO, INFO_NAMES, len(INFO_NAMES), 'user-info'),
        Category.KEYVAL: keyvals,
        Category.COMM_KEYVAL: keyvals,
        Category.TYPE_KEYVAL: keyvals,
        Category.WIN_KEYVAL: keyvals,
        Category.LOCKTYPE: SymbolTable(Category.LOCKTYPE, LOCKTYPE_NAMES),
        Category.ERRHANDLER: SymbolTable(
            Category.ERRHANDLER, ERRHANDLER_NAMES, len(ERRHANDLER_NAMES), 'user-defined-errhandler'
        ),
        Category.FILEMODE: FlagTable(Category.FILEMODE, FILEMODE_FLAGS),
        Category.ORDERING: SymbolTable(Category.ORDERING, ORDERING_NAMES),
        Category.THREADLEVEL: SymbolTable(Category.THREADLEVEL, THREADLEVEL_NAMES),
        Category.TOPOLOGY: SymbolTable(Category.TOPOLOGY, TOPOLOGY_NAMES),
        Category.TYPECLASS: SymbolTable(Category.TYPECLASS, TYPECLASS_NAMES),
        Category.WIN: SymbolTable(Category.WIN, WIN_NAMES, len(WIN_NAMES), 'user-win'),
        Category.WIN_ASSERT: FlagTable(Category.WIN_ASSERT, WIN_ASSERT_FLAGS),
        Category.COMPARISON: SymbolTable(Category.COMPARISON, COMPARISON_NAMES),
        Category.WHENCE: SymbolTable(Category.WHENCE, WHENCE_NAMES),
        Category.COMBINER: SymbolTable(Category.COMBINER, COMBINER_NAMES),
    }
