"""Tests for HashRange adjacency and key space arithmetic."""

import pytest

from streamscale.core.constants import MAX_HASH_KEY
from streamscale.core.models import HashRange


class TestHashRangeConstruction:
    """Test HashRange validation."""

    def test_valid_range(self):
        r = HashRange(0, 999)
        assert r.start == 0
        assert r.end == 999

    def test_single_key_range(self):
        r = HashRange(42, 42)
        assert r.width == 1

    def test_start_greater_than_end_rejected(self):
        with pytest.raises(ValueError, match="greater than end"):
            HashRange(1000, 999)

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError, match="outside the 128-bit key space"):
            HashRange(-1, 10)

    def test_end_beyond_keyspace_rejected(self):
        with pytest.raises(ValueError, match="outside the 128-bit key space"):
            HashRange(0, MAX_HASH_KEY + 1)

    def test_from_kinesis_parses_decimal_strings(self):
        r = HashRange.from_kinesis(
            {
                "StartingHashKey": "170141183460469231731687303715884105728",
                "EndingHashKey": str(MAX_HASH_KEY),
            }
        )
        assert r.start == 2**127
        assert r.end == MAX_HASH_KEY

    def test_frozen(self):
        r = HashRange(0, 1)
        with pytest.raises(AttributeError):
            r.start = 5  # type: ignore[misc]


class TestAdjacency:
    """Test is_adjacent_to semantics."""

    def test_contiguous_ranges_are_adjacent(self):
        assert HashRange(0, 999).is_adjacent_to(HashRange(1000, 1999))

    def test_gap_is_not_adjacent(self):
        assert not HashRange(0, 999).is_adjacent_to(HashRange(1001, 1999))

    def test_overlap_is_not_adjacent(self):
        assert not HashRange(0, 999).is_adjacent_to(HashRange(999, 1999))

    def test_adjacency_is_directional(self):
        lower = HashRange(0, 999)
        higher = HashRange(1000, 1999)
        assert lower.is_adjacent_to(higher)
        assert not higher.is_adjacent_to(lower)

    @pytest.mark.parametrize(
        "boundary",
        [2**63 - 1, 2**64 - 1, 2**64, 2**127, MAX_HASH_KEY - 1],
    )
    def test_adjacency_at_fixed_width_boundaries(self, boundary):
        """Boundaries where 64-bit or 128-bit fixed-width arithmetic would wrap."""
        lower = HashRange(0, boundary)
        higher = HashRange(boundary + 1, MAX_HASH_KEY)
        assert lower.is_adjacent_to(higher)
        assert not lower.is_adjacent_to(HashRange(boundary, MAX_HASH_KEY))

    def test_range_ending_at_max_key_has_no_higher_neighbour(self):
        top = HashRange(2**127, MAX_HASH_KEY)
        assert not top.is_adjacent_to(HashRange(0, 2**127 - 1))


class TestKeyspaceArithmetic:
    """Test width, keyspace share and merge union."""

    def test_full_keyspace_width(self):
        r = HashRange(0, MAX_HASH_KEY)
        assert r.width == 2**128
        assert r.pct_of_keyspace == 1.0

    def test_half_keyspace(self):
        assert HashRange(0, 2**127 - 1).pct_of_keyspace == 0.5

    def test_merged_with_adjacent(self):
        merged = HashRange(0, 999).merged_with(HashRange(1000, 1999))
        assert merged == HashRange(0, 1999)

    def test_merged_with_non_adjacent_raises(self):
        with pytest.raises(ValueError, match="non-adjacent"):
            HashRange(0, 999).merged_with(HashRange(1001, 1999))

    def test_ordering_by_start(self):
        ranges = [HashRange(2000, 2999), HashRange(0, 999), HashRange(1000, 1999)]
        assert [r.start for r in sorted(ranges)] == [0, 1000, 2000]

    def test_str(self):
        assert str(HashRange(0, 999)) == "[0, 999]"
