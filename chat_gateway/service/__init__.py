"""Service layer entrypoints (developer CLI)."""
