"""Core services (orchestration)."""
