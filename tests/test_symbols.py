"""Tests for symbol categories, name tables and the resolver registry."""

import pytest

from dumpi_ascii.symbols import (
    Category,
    FlagTable,
    SymbolResolver,
    SymbolTable,
    UNKNOWN_LABEL,
    default_tables,
)


class TestCategory:
    """Test category parsing."""

    def test_parse_value(self):
        assert Category.parse('comm') is Category.COMM

    def test_parse_is_case_insensitive(self):
        assert Category.parse(' Win_Assert ') is Category.WIN_ASSERT

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Category.parse('bogus')


class TestSymbolTable:
    """Test enumerated tables."""

    def test_predefined(self):
        """Predefined ids map to their names."""
        tables = default_tables()
        assert tables[Category.COMM](2) == 'MPI_COMM_WORLD'
        assert tables[Category.COMM](1) == 'MPI_COMM_NULL'
        assert tables[Category.OP](4) == 'MPI_SUM'

    def test_user_range(self):
        """Ids past the predefined block are user objects."""
        table = SymbolTable(Category.GROUP, {0: 'A', 1: 'B'}, first_user=2, user_label='user-group')
        assert table(2) == 'user-group'
        assert table(50) == 'user-group'

    def test_unknown(self):
        """Negative ids and tables without a user range give 'unknown'."""
        tables = default_tables()
        assert tables[Category.COMM](-5) == UNKNOWN_LABEL
        assert tables[Category.THREADLEVEL](99) == UNKNOWN_LABEL

    def test_with_names(self):
        """Extra names override without touching the original."""
        table = default_tables()[Category.COMM]
        extended = table.with_names({4: 'solver_comm', 2: 'world'})
        assert extended(4) == 'solver_comm'
        assert extended(2) == 'world'
        assert extended(5) == 'user-defined-comm'
        assert table(4) == 'user-defined-comm'

    def test_keyval_tables_shared(self):
        """Every keyval category uses the same table."""
        tables = default_tables()
        assert tables[Category.COMM_KEYVAL] is tables[Category.KEYVAL]
        assert tables[Category.WIN_KEYVAL](2) == 'MPI_TAG_UB'


class TestFlagTable:
    """Test bitmask tables."""

    def test_single_flag(self):
        table = default_tables()[Category.FILEMODE]
        assert table(0x002) == 'MPI_MODE_RDONLY'

    def test_combined_flags(self):
        """Set bits are joined with '|' in bit order."""
        table = default_tables()[Category.FILEMODE]
        assert table(0x001 | 0x008 | 0x040) == 'MPI_MODE_CREATE|MPI_MODE_RDWR|MPI_MODE_EXCL'

    def test_leftover_bits(self):
        """Bits without a name are shown in hex."""
        table = FlagTable(Category.WIN_ASSERT, {0x1: 'A'})
        assert table(0x1 | 0x20) == 'A|0x20'

    def test_zero_and_negative(self):
        table = default_tables()[Category.WIN_ASSERT]
        assert table(0) == '0'
        assert table(-1) == UNKNOWN_LABEL


class TestSymbolResolver:
    """Test the category -> resolver registry."""

    def test_default_covers_every_category(self):
        """Each category has a table by default."""
        resolver = SymbolResolver.default()
        for category in Category:
            assert category in resolver

    def test_resolve(self):
        assert SymbolResolver.default().resolve(Category.DATATYPE, 9) == 'MPI_INT'

    def test_missing_category_falls_back(self):
        """An empty registry labels everything 'unknown'."""
        assert SymbolResolver().resolve(Category.COMM, 2) == UNKNOWN_LABEL

    def test_with_resolver_copies(self):
        """Replacing a resolver leaves the original registry alone."""
        base = SymbolResolver.default()
        custom = base.with_resolver(Category.COMM, lambda v: f'c{v}')
        assert custom.resolve(Category.COMM, 2) == 'c2'
        assert base.resolve(Category.COMM, 2) == 'MPI_COMM_WORLD'

    def test_with_overrides(self):
        """Name overrides extend table-backed resolvers."""
        resolver = SymbolResolver.default().with_overrides({Category.COMM: {4: 'io_comm'}})
        assert resolver.resolve(Category.COMM, 4) == 'io_comm'

    def test_overrides_skip_plain_functions(self):
        """Function resolvers cannot take name overrides."""
        resolver = SymbolResolver.default().with_resolver(Category.OP, lambda v: 'fn')
        resolver = resolver.with_overrides({Category.OP: {4: 'sum'}})
        assert resolver.resolve(Category.OP, 4) == 'fn'
