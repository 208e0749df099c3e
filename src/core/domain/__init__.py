"""Domain models and errors.

Pure data structures (Pydantic v2) and the lookup error taxonomy. The domain
knows nothing about HTTP or the CLI.
"""
