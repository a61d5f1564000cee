"""Balanced partitioning of a discrete keyspace into active and reserved runs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Protocol, Sequence, Tuple

from .errors import InvalidArgument


class IndexSource(Protocol):
    """Anything that can draw an index in ``[0, stop)``; ``random.Random`` fits."""

    def randrange(self, stop: int) -> int:
        ...


class Partitioner:
    """
    Split ``total`` elements (e.g. warehouses) into ``parts`` contiguous ranges
    of near-equal size and spread ``active`` elements evenly across them.

    Active elements sit at the front of each range, so the active count can
    change without moving any partition boundary::

        >>> p = Partitioner(total=20, active=10, parts=3)
        >>> p.bounds
        (0, 6, 13, 20)
        >>> p.partition_elements
        ((0, 1, 2), (6, 7, 8), (13, 14, 15, 16))

    Instances are never mutated after construction and may be shared freely
    between threads.
    """

    def __init__(self, total: int, active: int, parts: int) -> None:
        if total <= 0:
            raise InvalidArgument(f"total must be positive; {total}")
        if active <= 0:
            raise InvalidArgument(f"active must be positive; {active}")
        if parts <= 0:
            raise InvalidArgument(f"parts must be positive; {parts}")
        if active > total:
            raise InvalidArgument(f"active > total; {active} > {total}")
        if parts > total:
            raise InvalidArgument(f"parts > total; {parts} > {total}")

        self._total = total
        self._active = active
        self._parts = parts

        self._bounds = tuple((i * total) // parts for i in range(parts + 1))

        sizes = [
            ((i + 1) * active) // parts - (i * active) // parts
            for i in range(parts)
        ]
        # A narrow range can be handed one more active element than it holds;
        # pass that element on to the next partition still at the base size
        # whose range has room. Sizes stay within one of each other.
        widths = [self._bounds[i + 1] - self._bounds[i] for i in range(parts)]
        base = active // parts
        for i in range(parts):
            if sizes[i] <= widths[i]:
                continue
            for step in range(1, parts):
                j = (i + step) % parts
                if sizes[j] == base and widths[j] > base:
                    sizes[i] -= 1
                    sizes[j] += 1
                    break
        self._partition_elements = tuple(
            tuple(range(self._bounds[i], self._bounds[i] + sizes[i]))
            for i in range(parts)
        )

        reverse: Dict[int, int] = {}
        flat: List[int] = []
        for part, elems in enumerate(self._partition_elements):
            for elem in elems:
                reverse[elem] = part
            flat.extend(elems)
        self._element_to_partition = MappingProxyType(reverse)
        self._all_active_elements = tuple(flat)

    def __repr__(self) -> str:
        return (
            f"Partitioner(total={self._total}, active={self._active}, "
            f"parts={self._parts})"
        )

    @property
    def total(self) -> int:
        return self._total

    @property
    def active(self) -> int:
        return self._active

    @property
    def parts(self) -> int:
        return self._parts

    @property
    def bounds(self) -> Tuple[int, ...]:
        """Boundary points; partition ``i`` covers ``[bounds[i], bounds[i+1])``."""

        return self._bounds

    @property
    def partition_elements(self) -> Tuple[Tuple[int, ...], ...]:
        """Active elements of every partition, in partition order."""

        return self._partition_elements

    @property
    def element_to_partition(self) -> Mapping[int, int]:
        """Read-only mapping from each active element to its partition index."""

        return self._element_to_partition

    @property
    def all_active_elements(self) -> Tuple[int, ...]:
        return self._all_active_elements

    def partition_range(self, part: int) -> Tuple[int, int]:
        """Return the half-open ``(lo, hi)`` element range of ``part``."""

        if not 0 <= part < self._parts:
            raise IndexError(f"partition {part} out of range [0, {self._parts})")
        return self._bounds[part], self._bounds[part + 1]

    def partition_of(self, element: int) -> int:
        """Partition index of an active element; ``KeyError`` for inactive ones."""

        return self._element_to_partition[element]

    def rand_active(self, rng: IndexSource) -> int:
        """Draw one active element uniformly using the caller's ``rng``."""

        return self._all_active_elements[rng.randrange(len(self._all_active_elements))]

    def sizes(self) -> Sequence[int]:
        return [len(elems) for elems in self._partition_elements]
