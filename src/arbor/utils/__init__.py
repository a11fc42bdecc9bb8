"""Shared utilities: logging and path helpers."""
