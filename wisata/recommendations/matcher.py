from __future__ import annotations

from typing import Iterable

from .models import Destination
from .region_tables import fold
from .regions import RegionResolver


def strict_filter(
    destinations: Iterable[Destination],
    target_category: str,
    target_region: str,
    resolver: RegionResolver,
) -> list[Destination]:
    """Keep destinations whose category AND region both equal the targets.

    Catalog order is preserved. No partial or nearest-region matches.
    """
    category = fold(target_category or "")
    region = resolver.normalize(target_region)
    if not category or not region:
        return []
    return [
        d
        for d in destinations
        if fold(d.category) == category and resolver.normalize(d.region) == region
    ]


def filter_subregion(destinations: Iterable[Destination], subregion: str) -> list[Destination]:
    """Narrow already-matched destinations to a city/regency substring."""
    wanted = fold(subregion)
    return [d for d in destinations if d.subregion and wanted in fold(d.subregion)]
