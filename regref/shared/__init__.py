"""Shared helpers used across RegRef layers."""
