"""
Tests for value/label encoders: symbols, ranks, tags and callbacks.

CRITICAL TESTS:
1. test_any_source_pair - MPI_ANY_SOURCE carries its label
2. test_any_tag_name - MPI_ANY_TAG is printed by name
3. test_unmatched_address - Unknown callbacks keep a null label
"""

from dumpi_ascii.encoders import (
    NULL,
    encode_pair,
    encode_symbol,
    encode_source,
    encode_dest,
    encode_tag,
    encode_function,
)
from dumpi_ascii.formats.sentinels import ANY_SOURCE, ANY_TAG, ROOT, PROC_NULL
from dumpi_ascii.symbols import Category, SymbolResolver


class TestPair:
    """Test the value/label pair shape."""

    def test_shape(self):
        """Pair is {"value":N, "label": "..."}."""
        assert encode_pair(2, 'MPI_COMM_WORLD') == '{"value":2, "label": "MPI_COMM_WORLD"}'

    def test_null_label(self):
        """A missing label prints as null."""
        assert encode_pair(7, None) == '{"value":7, "label": null}'


class TestSymbol:
    """Test resolver-backed symbols."""

    def test_default_resolver(self):
        """Default tables name predefined handles."""
        resolver = SymbolResolver.default()
        assert encode_symbol(9, resolver.get(Category.DATATYPE)) == \
            '{"value":9, "label": "MPI_INT"}'

    def test_custom_resolver(self):
        """Any int -> str callable can label values."""
        assert encode_symbol(5, lambda v: f'rank{v}') == '{"value":5, "label": "rank5"}'

    def test_none(self):
        """An unrecorded handle is null."""
        assert encode_symbol(None, lambda v: 'x') == NULL


class TestSource:
    """Test source and destination ranks."""

    def test_plain_rank(self):
        """Ordinary ranks print as integers."""
        assert encode_source(3) == '3'

    def test_any_source_pair(self):
        """MPI_ANY_SOURCE becomes a labelled pair."""
        assert encode_source(ANY_SOURCE) == '{"value":-1, "label": "MPI_ANY_SOURCE"}'

    def test_root_pair(self):
        """MPI_ROOT becomes a labelled pair."""
        assert encode_source(ROOT) == '{"value":-4, "label": "MPI_ROOT"}'

    def test_proc_null_is_plain(self):
        """MPI_PROC_NULL has no label."""
        assert encode_source(PROC_NULL) == '-2'

    def test_dest_matches_source(self):
        """Destinations use the same reserved values."""
        for value in (0, ANY_SOURCE, ROOT):
            assert encode_dest(value) == encode_source(value)


class TestTag:
    """Test message tags."""

    def test_plain_tag(self):
        """Ordinary tags print as integers."""
        assert encode_tag(17) == '17'

    def test_any_tag_name(self):
        """MPI_ANY_TAG is printed as its name."""
        assert encode_tag(ANY_TAG) == '"MPI_ANY_TAG"'

    def test_none(self):
        assert encode_tag(None) == NULL


class TestFunction:
    """Test callback pointer resolution."""

    def test_matched_address(self, addresses):
        """Address in the table gets its name (second entry)."""
        assert encode_function(0x400b20, addresses) == \
            '{"value":4197152, "label": "delete_attr"}'

    def test_unmatched_address(self, addresses):
        """Address not in the table keeps its value with a null label."""
        assert encode_function(0x123, addresses) == '{"value":291, "label": null}'

    def test_no_table(self):
        """Without a table every label is null."""
        assert encode_function(0x400a10, None) == '{"value":4196880, "label": null}'
