from __future__ import annotations

from typing import Iterable, Sequence

from .models import Destination
from .region_tables import fold
from .regions import RegionResolver


class Catalog:
    """
    Read-only, ordered snapshot of destinations.

    Built once at startup and shared by every request. Catalog order is
    the tie-break key for ranking, so it is never changed after load.
    """

    def __init__(self, destinations: Iterable[Destination] = ()) -> None:
        self._destinations: tuple[Destination, ...] = tuple(destinations)

    def __len__(self) -> int:
        return len(self._destinations)

    def __bool__(self) -> bool:
        return bool(self._destinations)

    @property
    def is_empty(self) -> bool:
        return not self._destinations

    def all(self) -> Sequence[Destination]:
        return self._destinations

    def filter(
        self,
        category: str | None = None,
        region: str | None = None,
        resolver: RegionResolver | None = None,
    ) -> list[Destination]:
        """Case-insensitive equality filter used by listing operations.

        Regions are compared through ``resolver`` so aliases such as
        "Jabar" select the same rows the matcher would.
        """
        resolver = resolver or RegionResolver()
        selected: Iterable[Destination] = self._destinations
        if category:
            wanted = fold(category)
            selected = [d for d in selected if fold(d.category) == wanted]
        if region:
            wanted = resolver.normalize(region)
            selected = [d for d in selected if resolver.normalize(d.region) == wanted]
        return list(selected)

    def categories(self) -> list[str]:
        return sorted({d.category for d in self._destinations if d.category})

    def regions(self) -> list[str]:
        return sorted({d.region for d in self._destinations if d.region})
