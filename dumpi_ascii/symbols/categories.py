"""Symbol categories: kinds of MPI handles and constants with printable names."""

from enum import Enum


class Category(Enum):
    """Category of a symbolic integer field."""

    COMM = 'comm'
    DATATYPE = 'datatype'
    GROUP = 'group'
    OP = 'op'
    FILE = 'file'
    INFO = 'info'
    KEYVAL = 'keyval'
    COMM_KEYVAL = 'comm_keyval'
    TYPE_KEYVAL = 'type_keyval'
    WIN_KEYVAL = 'win_keyval'
    LOCKTYPE = 'locktype'
    ERRHANDLER = 'errhandler'
    FILEMODE = 'filemode'
    ORDERING = 'ordering'
    THREADLEVEL = 'threadlevel'
    TOPOLOGY = 'topology'
    TYPECLASS = 'typeclass'
    WIN = 'win'
    WIN_ASSERT = 'win_assert'
    COMPARISON = 'comparison'
    WHENCE = 'whence'
    COMBINER = 'combiner'

    @classmethod
    def parse(cls, name: str) -> 'Category':
        """Look up a category by value or member name, case-insensitively."""
        key = name.strip().lower()
        for category in cls:
            if category.value == key:
                return category
        raise ValueError(f"Unknown symbol category: {name!r}")
