"""Tests for the function address table."""

import pytest

from dumpi_ascii.core.errors import AddressTableError, ErrorCode
from dumpi_ascii.formats.address_table import AddressEntry, FunctionAddressTable


class TestLookup:
    """Test address lookups."""

    def test_match_second_entry(self, addresses):
        """An address matching a later entry returns that entry's name."""
        assert addresses.lookup(0x400b20) == 'delete_attr'

    def test_no_match(self, addresses):
        assert addresses.lookup(0xdead) is None

    def test_empty_table(self):
        table = FunctionAddressTable()
        assert len(table) == 0
        assert table.lookup(0) is None

    def test_iteration_order(self, addresses):
        """Entries keep file order."""
        assert [e.name for e in addresses] == ['copy_attr', 'delete_attr', 'my_reduce']
        assert addresses.entries[0] == AddressEntry(0x400a10, 'copy_attr')


class TestParse:
    """Test table file parsing."""

    def test_hex_and_decimal(self):
        """Addresses may be hex or decimal."""
        table = FunctionAddressTable.parse(['0x10 ten', '32 thirty_two'])
        assert table.lookup(16) == 'ten'
        assert table.lookup(32) == 'thirty_two'

    def test_comments_and_blanks(self):
        """Comments and blank lines are skipped."""
        lines = ['# header', '', '0x400a10 copy_attr  # trailing', '   ']
        table = FunctionAddressTable.parse(lines)
        assert len(table) == 1
        assert table.lookup(0x400a10) == 'copy_attr'

    def test_duplicate_keeps_first(self):
        """A repeated address keeps the first name."""
        table = FunctionAddressTable.parse(['0x1 first', '0x1 second'])
        assert len(table) == 1
        assert table.lookup(1) == 'first'

    def test_missing_name(self):
        """A line without a name is rejected."""
        with pytest.raises(AddressTableError) as exc:
            FunctionAddressTable.parse(['0x400a10'])
        assert exc.value.code is ErrorCode.E2001_BAD_ADDRESS_LINE

    def test_bad_address(self):
        with pytest.raises(AddressTableError):
            FunctionAddressTable.parse(['notanumber fn'])


class TestLoad:
    """Test loading from disk."""

    def test_load(self, tmp_path):
        path = tmp_path / 'addresses.txt'
        path.write_text('0x400a10 copy_attr\n0x400b20 delete_attr\n')
        table = FunctionAddressTable.load(path)
        assert len(table) == 2
        assert table.lookup(0x400b20) == 'delete_attr'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FunctionAddressTable.load(tmp_path / 'nope.txt')
