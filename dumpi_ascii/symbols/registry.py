"""
SymbolResolver - one name-resolution function per symbol category.

The encoders only ever see a plain callable (int -> str). Which table sits
behind that callable is decided here, so a caller can swap in its own
lookup for any category without touching the formatting code.
"""

import logging
from typing import Callable, Dict, Mapping, Optional

from .categories import Category
from .tables import UNKNOWN_LABEL, default_tables

logger = logging.getLogger(__name__)

Resolver = Callable[[int], str]


def _unknown(value: int) -> str:
    return UNKNOWN_LABEL


class SymbolResolver:
    """
    Category -> resolver mapping.

    Example:
        resolver = SymbolResolver.default()
        resolver.resolve(Category.COMM, 2)   # 'MPI_COMM_WORLD'

        custom = resolver.with_resolver(Category.COMM, my_lookup)
    """

    def __init__(self, resolvers: Optional[Dict[Category, Resolver]] = None):
        self._resolvers: Dict[Category, Resolver] = dict(resolvers or {})

    @classmethod
    def default(cls) -> 'SymbolResolver':
        return cls(default_tables())

    def get(self, category: Category) -> Resolver:
        """Resolver for a category (falls back to 'unknown' for every value)."""
        return self._resolvers.get(category, _unknown)

    def resolve(self, category: Category, value: int) -> str:
        return self.get(category)(value)

    def with_resolver(self, category: Category, resolver: Resolver) -> 'SymbolResolver':
        """Return a copy with one category's resolver replaced."""
        resolvers = dict(self._resolvers)
        resolvers[category] = resolver
        return SymbolResolver(resolvers)

    def with_overrides(self, overrides: Mapping[Category, Mapping[int, str]]) -> 'SymbolResolver':
        """
        Return a copy whose tables carry extra id -> name entries.

        Only table-backed resolvers can be extended; a category served by a
        plain function keeps that function and the override is skipped.
        """
        resolvers = dict(self._resolvers)
        for category, names in overrides.items():
            current = resolvers.get(category)
            if current is None or not hasattr(current, 'with_names'):
                logger.warning(f"Cannot apply name overrides to {category.value}: not table-backed")
                continue
            resolvers[category] = current.with_names(dict(names))
            logger.debug(f"Applied {len(names)} name override(s) to {category.value}")
        return SymbolResolver(resolvers)

    def __contains__(self, category: Category) -> bool:
        return category in self._resolvers
