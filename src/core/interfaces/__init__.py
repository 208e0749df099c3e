"""Core interfaces.

Protocols implemented by concrete adapters, so the core depends on
abstractions only.
"""
