"""
Destination recommendation engine.

Responsibilities:
- Resolve a free-text home address to a canonical region.
- Strictly filter the destination catalog by category and region.
- Blend a predictive score with completeness boosts.
- Rank deterministically and return a capped result envelope.
"""
