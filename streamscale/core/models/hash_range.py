"""Hash key range value type for shard partitioning.

Shards own a closed interval ``[start, end]`` of the unsigned 128-bit hash key
space. Python integers are arbitrary precision, so adjacency and width
arithmetic stay exact right up to ``2**128 - 1``.
"""

from dataclasses import dataclass
from typing import Any

from streamscale.core.constants import HASH_KEYSPACE_SIZE, MAX_HASH_KEY


@dataclass(frozen=True, order=True)
class HashRange:
    """Closed interval over the 128-bit hash key space.

    Attributes:
        start: First hash key owned by the range (inclusive)
        end: Last hash key owned by the range (inclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end > MAX_HASH_KEY:
            raise ValueError(
                f"Hash range [{self.start}, {self.end}] is outside the 128-bit key space"
            )
        if self.start > self.end:
            raise ValueError(
                f"Hash range start {self.start} is greater than end {self.end}"
            )

    @classmethod
    def from_kinesis(cls, hash_key_range: dict[str, Any]) -> "HashRange":
        """Build a range from a service ``HashKeyRange`` record.

        Args:
            hash_key_range: Mapping with decimal-string ``StartingHashKey``
                and ``EndingHashKey`` entries

        Returns:
            Parsed HashRange
        """
        return cls(
            start=int(hash_key_range["StartingHashKey"]),
            end=int(hash_key_range["EndingHashKey"]),
        )

    def is_adjacent_to(self, other: "HashRange") -> bool:
        """True iff ``other`` begins exactly one key after this range ends."""
        return other.start == self.end + 1

    @property
    def width(self) -> int:
        """Number of hash keys in the range."""
        return self.end - self.start + 1

    @property
    def pct_of_keyspace(self) -> float:
        """Fraction of the full key space owned by this range (0.0-1.0)."""
        return self.width / HASH_KEYSPACE_SIZE

    def merged_with(self, other: "HashRange") -> "HashRange":
        """Return the union of this range and the adjacent range above it.

        Raises:
            ValueError: If ``other`` is not adjacent to this range
        """
        if not self.is_adjacent_to(other):
            raise ValueError(
                f"Cannot merge non-adjacent ranges [{self.start}, {self.end}] "
                f"and [{other.start}, {other.end}]"
            )
        return HashRange(start=self.start, end=other.end)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"
