"""Core: domain models, configuration and lookup orchestration."""
