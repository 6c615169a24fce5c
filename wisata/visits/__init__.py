"""Per-user visit history, used to exclude already-seen destinations."""
