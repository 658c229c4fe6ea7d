"""Concrete service client adapters (HTTP and in-memory)."""
