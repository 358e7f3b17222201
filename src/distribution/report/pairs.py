"""Key/count pairs and ranked selection."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Pair:
    """A key with its count.

    Field order defines the natural ordering: by value first, then by key.
    Display order is the reverse of it.
    """

    value: int
    key: str


def select_top(pairs: list[Pair], height: int) -> list[Pair]:
    """Sort pairs in place, highest first, and return the top rows.

    Ties on value are broken by descending key.

    Args:
        pairs: Pairs to rank. Reordered in place.
        height: Maximum number of rows to return.

    Returns:
        The first ``min(height, len(pairs))`` pairs in display order.
    """
    pairs.sort(reverse=True)
    return pairs[:height]
