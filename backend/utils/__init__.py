"""Shared helpers for schema serialization."""
