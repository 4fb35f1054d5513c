"""API-level routes (health and explore)."""
