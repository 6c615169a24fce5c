from __future__ import annotations

import logging

from .region_tables import DEFAULT_REGION_TABLES, RegionTables, fold

logger = logging.getLogger(__name__)


def normalize(value: str | None, tables: RegionTables = DEFAULT_REGION_TABLES) -> str:
    """Fold case and whitespace, then map region aliases to canonical names.

    Every region comparison in the pipeline goes through this function.
    Idempotent because no alias value is an alias key. Categories and
    subregions have no aliases and are compared with ``fold`` alone.
    """
    if not value:
        return ""
    folded = fold(value)
    return tables.aliases.get(folded, folded)


class RegionResolver:
    """Maps free-text addresses to canonical region names."""

    def __init__(self, tables: RegionTables = DEFAULT_REGION_TABLES) -> None:
        self.tables = tables

    def resolve(self, address: str | None) -> str:
        """
        Return the region an address belongs to. Never raises.

        The first region in table order with a substring present in the
        address wins. Without a pattern hit the text after the last comma
        is used, and without a comma the trimmed address itself.
        """
        if not address or not address.strip():
            return ""

        clean = fold(address)
        for region, patterns in self.tables.patterns.items():
            for pattern in patterns:
                if pattern in clean:
                    logger.debug("Address %r matched region %r via %r", address, region, pattern)
                    return region

        parts = [part.strip() for part in address.split(",")]
        if len(parts) > 1:
            logger.info("No region pattern in %r, falling back to %r", address, parts[-1])
            return parts[-1]

        logger.info("Could not extract a region from %r, using it verbatim", address)
        return address.strip()

    def normalize(self, region: str | None) -> str:
        return normalize(region, self.tables)
