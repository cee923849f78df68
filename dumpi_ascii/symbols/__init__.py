"""Symbol categories and name tables for symbolic call fields."""

from .categories import Category
from .tables import SymbolTable, FlagTable, UNKNOWN_LABEL, default_tables
from .registry import SymbolResolver, Resolver

__all__ = [
    'Category',
    'SymbolTable',
    'FlagTable',
    'UNKNOWN_LABEL',
    'default_tables',
    'SymbolResolver',
    'Resolver',
]
