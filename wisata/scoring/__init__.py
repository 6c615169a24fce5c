"""
Predictive scoring layer.

Responsibilities:
- Load a persisted (category, region) compatibility model at startup.
- Provide a deterministic hash-based heuristic with the same call signature.
- Fall back to the heuristic when the model is missing or a call fails.
"""
