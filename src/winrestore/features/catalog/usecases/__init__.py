"""Catalog lookup use cases."""
