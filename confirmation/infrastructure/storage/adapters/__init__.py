"""Concrete storage adapters."""
