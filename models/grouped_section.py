from dataclasses import dataclass, field
from typing import Callable, Generic, Hashable, Iterable, TypeVar

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


@dataclass
class GroupedSection(Generic[K, R]):
    headline: K
    rows: list[R] = field(default_factory=list)

    @staticmethod
    def group(
        rows: Iterable[R],
        by: Callable[[R], K],
        sort_key: Callable[[R], object],
        reverse: bool = True,
    ) -> list["GroupedSection[K, R]"]:
        """Bucket rows by ``by`` and sort each bucket by ``sort_key``.

        Buckets come back in first-seen order; the caller orders sections.
        Sorting is stable, so rows with equal keys keep their input order.
        """
        buckets: dict[K, list[R]] = {}
        for row in rows:
            buckets.setdefault(by(row), []).append(row)
        return [
            GroupedSection(headline=key, rows=sorted(members, key=sort_key, reverse=reverse))
            for key, members in buckets.items()
        ]
