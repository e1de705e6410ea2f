"""Catalog storage: the database adapter, sessions and table models."""
