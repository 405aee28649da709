"""Shared error, logging and correlation helpers."""
