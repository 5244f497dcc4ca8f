"""Shared CLI utilities."""
