from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List

import pandas as pd
from pydantic import ValidationError

from ..recommendations.catalog import Catalog
from ..recommendations.models import Destination
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "category",
    "name",
    "latitude",
    "longitude",
    "address",
    "region",
    "subregion",
    "full_name",
    "description",
    "image_path",
]

# Raw header candidates per canonical column, first present wins.
_COLUMN_CANDIDATES: dict[str, List[str]] = {
    "category": ["category", "kategori"],
    "name": ["name", "nama_wisata"],
    "latitude": ["latitude", "lat"],
    "longitude": ["longitude", "lng", "lon"],
    "address": ["address", "alamat"],
    "region": ["region", "provinsi", "province"],
    "subregion": ["subregion", "kota_kabupaten", "city"],
    "full_name": ["full_name", "nama_lengkap"],
    "description": ["description", "deskripsi_bersih", "deskripsi"],
    "image_path": ["image_path", "Image_Path", "image_url", "foto_url"],
}

_TEXT_COLUMNS = [c for c in CANONICAL_COLUMNS if c not in ("latitude", "longitude")]


def _parse_coordinate(value: float | int | str | None) -> float:
    if value is None:
        return 0.0
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def canonicalize(df: pd.DataFrame) -> pd.DataFrame:
    """Map raw columns into the canonical schema, filling gaps."""
    df = df.rename(columns=lambda c: str(c).strip())

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in df.columns:
                return col
        return None

    canonical = pd.DataFrame(index=df.index)
    for column in CANONICAL_COLUMNS:
        source = _first_present(_COLUMN_CANDIDATES[column])
        if source is None:
            canonical[column] = 0.0 if column in ("latitude", "longitude") else ""
        else:
            canonical[column] = df[source]

    for column in ("latitude", "longitude"):
        canonical[column] = canonical[column].apply(_parse_coordinate)
    for column in _TEXT_COLUMNS:
        canonical[column] = canonical[column].fillna("").astype(str).str.strip()

    return canonical[CANONICAL_COLUMNS]


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Convert the raw dataset into the processed catalog CSV.

    Steps:
    - Read the raw CSV (Indonesian dataset headers or canonical ones).
    - Map fields into the canonical Destination schema.
    - Persist the cleaned data for the recommendation service.
    """
    raw = pd.read_csv(config.raw_path, dtype=str, keep_default_na=False)
    canonical = canonicalize(raw)

    output_path = config.processed_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    canonical.to_csv(output_path, index=False)
    return output_path


def parse_destinations(df: pd.DataFrame) -> list[Destination]:
    """Validate canonical rows into Destination records, skipping invalid ones."""
    destinations: list[Destination] = []
    skipped = 0
    for record in canonicalize(df).to_dict(orient="records"):
        try:
            destinations.append(Destination(**record))
        except ValidationError:
            skipped += 1
            logger.debug("Skipping invalid catalog row %r", record.get("name"), exc_info=True)
    if skipped:
        logger.warning("Skipped %d invalid catalog rows out of %d", skipped, len(df))
    return destinations


def load_catalog(path: Path | None = None, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Catalog:
    """Load the processed CSV into a Catalog. Empty on any load failure."""
    path = path or config.processed_path
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError):
        logger.error("Could not load destination catalog from %s", path, exc_info=True)
        return Catalog()

    catalog = Catalog(parse_destinations(df))
    if catalog.is_empty:
        logger.error("Destination catalog at %s is empty", path)
    else:
        logger.info("Loaded %d destinations from %s", len(catalog), path)
    return catalog


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
