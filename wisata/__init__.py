"""Destination recommendation service for a catalog-browsing app."""
