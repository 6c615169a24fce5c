"""
Catalog ingestion package.

Responsibilities:
- Read the raw tourism dataset (Indonesian column headers).
- Normalize it into the canonical Destination schema.
- Validate rows into an immutable Catalog for the recommendation engine.
"""
