"""Adapters: HTTP and file I/O."""
