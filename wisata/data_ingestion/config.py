from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for catalog ingestion and loading.
    """

    raw_path: Path = Path(os.getenv("WISATA_RAW_CATALOG_PATH", str(_DATA_DIR / "raw" / "wisata_indonesia.csv")))
    processed_data_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "destinations.csv"
    catalog_path_override: str | None = os.getenv("WISATA_CATALOG_PATH") or None

    @property
    def processed_path(self) -> Path:
        if self.catalog_path_override:
            return Path(self.catalog_path_override)
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
