"""
Offline script to fit the (category, region) scoring model.

Input is a CSV with ``category``, ``region`` and ``score`` columns, where
score is a compatibility label in [0, 1].

Usage:
    python -m wisata.scoring.train
"""
from __future__ import annotations

from pathlib import Path

import joblib
import numpy as np
import pandas as pd
from sklearn.neural_network import MLPRegressor

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .model import build_features

REQUIRED_COLUMNS = ["category", "region", "score"]


def train_model(labels: pd.DataFrame, output_path: Path, random_state: int = 42) -> Path:
    missing = [c for c in REQUIRED_COLUMNS if c not in labels.columns]
    if missing:
        raise ValueError(f"training data is missing columns: {', '.join(missing)}")

    labels = labels.dropna(subset=REQUIRED_COLUMNS)
    features = np.asarray(
        [build_features(str(c), str(r)) for c, r in zip(labels["category"], labels["region"])],
        dtype=float,
    )
    targets = pd.to_numeric(labels["score"], errors="coerce").fillna(0.0).clip(0.0, 1.0)

    model = MLPRegressor(
        hidden_layer_sizes=(64, 32),
        activation="relu",
        learning_rate_init=0.001,
        max_iter=500,
        random_state=random_state,
    )
    model.fit(features, targets.to_numpy())

    output_path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, output_path)
    return output_path


def run_training(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Path:
    labels = pd.read_csv(config.training_data_path)
    print(f"Training on {len(labels)} labelled pairs ...")
    return train_model(labels, config.model_path)


if __name__ == "__main__":
    path = run_training()
    print(f"Saved scoring model to {path}")
