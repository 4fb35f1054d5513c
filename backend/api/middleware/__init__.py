"""Authentication middleware and dependencies."""
