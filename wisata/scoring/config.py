from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_MODEL_DIR = Path(__file__).resolve().parent.parent / "data" / "model"


@dataclass(frozen=True)
class ScoringConfig:
    model_path: Path = Path(os.getenv("WISATA_SCORING_MODEL", str(_MODEL_DIR / "scoring_model.joblib")))
    training_data_path: Path = Path(
        os.getenv("WISATA_SCORING_LABELS", str(_MODEL_DIR / "training_labels.csv"))
    )
    enabled: bool = os.getenv("WISATA_SCORING_ENABLED", "true").strip().lower() not in ("0", "false", "no")


DEFAULT_SCORING_CONFIG = ScoringConfig()
