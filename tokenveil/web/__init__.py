"""Helpers for pulling tokens out of web requests."""
