"""Formatting and conversion helpers."""
