from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import joblib
import numpy as np

from ..recommendations.errors import ScoringUnavailable
from ..recommendations.models import CATEGORIES
from ..recommendations.region_tables import fold
from .heuristic import encode

logger = logging.getLogger(__name__)

CATEGORY_INDEX: dict[str, int] = {fold(c): i for i, c in enumerate(CATEGORIES)}

REGION_INDEX: dict[str, int] = {
    fold(name): i
    for i, name in enumerate([
        "Aceh",
        "Sumatera Utara",
        "Sumatera Barat",
        "Riau",
        "Jambi",
        "Sumatera Selatan",
        "Bengkulu",
        "Lampung",
        "Kepulauan Bangka Belitung",
        "Kepulauan Riau",
        "DKI Jakarta",
        "Jawa Barat",
        "Jawa Tengah",
        "DI Yogyakarta",
        "Jawa Timur",
        "Banten",
        "Bali",
        "Nusa Tenggara Barat",
        "Nusa Tenggara Timur",
        "Kalimantan Barat",
        "Kalimantan Tengah",
        "Kalimantan Selatan",
        "Kalimantan Timur",
        "Kalimantan Utara",
        "Sulawesi Utara",
        "Sulawesi Tengah",
        "Sulawesi Selatan",
        "Sulawesi Tenggara",
        "Gorontalo",
        "Sulawesi Barat",
        "Maluku",
        "Maluku Utara",
        "Papua Barat",
        "Papua",
    ])
}


def build_features(category: str, region: str) -> list[float]:
    """
    Model input for one (category, region) pair.

    Known labels use their index in the fixed tables; anything else is
    hash-encoded so unseen pairs still get a stable input vector.
    """
    category_idx = CATEGORY_INDEX.get(fold(category))
    region_idx = REGION_INDEX.get(fold(region))
    if category_idx is not None and region_idx is not None:
        return [float(category_idx), float(region_idx), 0.0, 0.0]
    return [encode(region), encode(category), 0.0, 0.0]


class ModelScoringProvider:
    """Scores pairs with a persisted scikit-learn regressor."""

    name = "model"

    def __init__(self, estimator: Any) -> None:
        if not hasattr(estimator, "predict"):
            raise TypeError(f"{type(estimator).__name__} has no predict()")
        self.estimator = estimator

    @classmethod
    def load(cls, path: Path) -> ModelScoringProvider:
        estimator = joblib.load(path)
        logger.info("Loaded scoring model %s from %s", type(estimator).__name__, path)
        return cls(estimator)

    def predict(self, category: str, region: str) -> float:
        features = np.asarray([build_features(category, region)], dtype=float)
        try:
            value = float(np.ravel(self.estimator.predict(features))[0])
        except Exception as exc:
            raise ScoringUnavailable(
                "Model prediction failed", category=category, region=region,
            ) from exc
        if not np.isfinite(value):
            raise ScoringUnavailable(
                "Model returned a non-finite score", category=category, region=region,
            )
        return float(np.clip(value, 0.0, 1.0))
